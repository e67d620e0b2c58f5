from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, inspect

from whodid.adapters.sqlalchemy import start_mappers
from whodid.adapters.sqlalchemy.migrations import current_revision, upgrade_head

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine


def test_start_mappers_is_idempotent() -> None:
    start_mappers()
    start_mappers()


def test_upgrade_head_creates_schema(sqlite_engine: Engine) -> None:
    inspector = inspect(sqlite_engine)

    assert {"profile", "provider", "claim", "review", "contact_message"} <= set(
        inspector.get_table_names()
    )
    provider_uniques = {uq["name"] for uq in inspector.get_unique_constraints("provider")}
    assert "uq_provider_identity_key" in provider_uniques
    claim_indexes = {index["name"] for index in inspector.get_indexes("claim")}
    assert "ix_claim_status_created_at" in claim_indexes
    assert current_revision(sqlite_engine) == "0001_initial_schema"


def test_upgrade_head_is_repeatable(tmp_path: Path) -> None:
    uri = f"sqlite+pysqlite:///{tmp_path / 'migrate.db'}"

    upgrade_head(database_uri=uri)
    upgrade_head(database_uri=uri)

    engine = create_engine(uri, future=True)
    try:
        assert current_revision(engine) == "0001_initial_schema"
    finally:
        engine.dispose()
