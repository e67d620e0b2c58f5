from __future__ import annotations

import os
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

import pytest

from whodid.adapters.identity import StaticIdentityProvider
from whodid.adapters.sqlalchemy.unit_of_work import shutdown
from whodid.app import build_services
from whodid.domain.model import ClaimStatus
from whodid.ui import cli as cli_module
from tests.helpers.moderation import make_principal

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def cli_database(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.setenv("DATABASE_URI", f"sqlite+pysqlite:///{tmp_path / 'cli.db'}")
    shutdown()
    yield
    shutdown()


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> str:
    cli_module.main(list(argv))
    return capsys.readouterr().out


def test_db_upgrade_prints_revision(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(capsys, "db", "upgrade").strip() == "0001_initial_schema"


def test_providers_resolve_is_idempotent(capsys: pytest.CaptureFixture[str]) -> None:
    first = _run(capsys, "providers", "resolve", "--name", "Ava", "--zip", "10001")
    second = _run(capsys, "providers", "resolve", "--name", " ava ", "--zip", "10001")

    assert UUID(first.strip()) == UUID(second.strip())

    listing = _run(capsys, "providers", "search", "--zip-prefix", "100")
    assert "Ava" in listing


def test_claims_moderation_through_cli(capsys: pytest.CaptureFixture[str]) -> None:
    admin_id = uuid4()
    _run(capsys, "profile", "grant-admin", str(admin_id))
    claimant = make_principal("owner@example.com")
    services = build_services(StaticIdentityProvider())
    claim_id = services.claims.submit_for("Ava", "10001", "Hair", claimant)
    message_id = services.contact.submit("Jo", None, "Please help")

    listing = _run(capsys, "--principal-id", str(admin_id), "claims", "list")
    assert str(claim_id) in listing
    assert "owner@example.com" in listing

    _run(capsys, "--principal-id", str(admin_id), "claims", "approve", str(claim_id))
    assert services.claims.get(claim_id).status is ClaimStatus.APPROVED

    messages = _run(capsys, "--principal-id", str(admin_id), "messages", "list")
    assert str(message_id) in messages
    _run(
        capsys, "--principal-id", str(admin_id), "messages", "set-status", str(message_id), "archived"
    )
    assert services.contact.list_open() == []


def test_non_admin_is_refused(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _run(capsys, "--principal-id", str(uuid4()), "claims", "list")

    assert excinfo.value.code == 1


def test_invalid_principal_id_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--principal-id", "not-a-uuid", "claims", "list"])

    assert excinfo.value.code == 2


def test_validation_error_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["providers", "resolve", "--name", "   "])

    assert excinfo.value.code == 2


def test_db_upgrade_uses_override(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_upgrade(**kwargs: object) -> str:
        captured.update(kwargs)
        return "0001_initial_schema"

    monkeypatch.setattr(cli_module, "upgrade_database", fake_upgrade)

    cli_module.main(["db", "upgrade", "--database-uri", "sqlite:///elsewhere.db"])

    assert captured == {"database_uri": "sqlite:///elsewhere.db"}


def test_dotenv_is_loaded_before_logging_is_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WHODID_LOG_LEVEL", raising=False)
    seen_levels: list[str | None] = []

    def fake_load_dotenv() -> bool:
        monkeypatch.setenv("WHODID_LOG_LEVEL", "DEBUG")
        return True

    def fake_configure_logging() -> None:
        seen_levels.append(os.environ.get("WHODID_LOG_LEVEL"))

    monkeypatch.setattr(cli_module, "load_dotenv", fake_load_dotenv)
    monkeypatch.setattr(cli_module, "configure_logging", fake_configure_logging)
    monkeypatch.setattr(cli_module, "upgrade_database", lambda **_: "0001_initial_schema")

    cli_module.main(["db", "upgrade"])

    assert seen_levels == ["DEBUG"]
