from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from whodid.adapters.identity import StaticIdentityProvider
from whodid.adapters.sqlalchemy.unit_of_work import is_started, shutdown
from whodid.app import build_resolution_checkout, build_services, grant_admin
from whodid.domain.model import QueueOrder
from tests.helpers.moderation import make_principal

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from whodid.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork


@pytest.fixture
def env_database(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.setenv("DATABASE_URI", f"sqlite+pysqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("WHODID_CONTACT_QUEUE_ORDER", "newest_first")
    shutdown()
    yield
    shutdown()


@pytest.mark.usefixtures("env_database")
def test_build_services_starts_storage_from_environment() -> None:
    principal = make_principal()

    services = build_services(StaticIdentityProvider(principal))

    assert is_started()
    assert services.contact.order is QueueOrder.NEWEST_FIRST
    assert services.identity.current_principal() == principal
    assert services.moderation.access(principal).value == "forbidden"


def test_grant_admin_makes_principal_an_admin(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    principal = make_principal()
    services = build_services(StaticIdentityProvider(), unit_of_work_factory=sqlite_unit_of_work)
    assert not services.identity.is_admin(principal)

    profile = grant_admin(principal.id, unit_of_work_factory=sqlite_unit_of_work)

    assert profile.grants_admin
    assert services.identity.is_admin(principal)
    grant_admin(principal.id, unit_of_work_factory=sqlite_unit_of_work)
    assert services.identity.is_admin(principal)


def test_build_resolution_checkout_uses_given_gateway(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    class Gateway:
        def create_payment_redirect(self, *args: object, **kwargs: object) -> str:
            return "https://pay.example/1"

    services = build_services(StaticIdentityProvider(), unit_of_work_factory=sqlite_unit_of_work)
    checkout = build_resolution_checkout(services.providers, gateway=Gateway())

    assert checkout.start("Fix/Redo") == "https://pay.example/1"
