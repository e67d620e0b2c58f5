from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from whodid.adapters.identity import StaticIdentityProvider
from whodid.adapters.sqlalchemy import start_mappers
from whodid.adapters.sqlalchemy.migrations import upgrade_head
from whodid.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup
from whodid.app import Services, build_services
from whodid.config import ModerationConfig
from whodid.domain.model import Principal
from tests.helpers.moderation import FixedClock, make_principal, seed_profile

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True, migrate=False)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def admin(sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork]) -> Principal:
    principal = make_principal("admin@example.com")
    seed_profile(sqlite_unit_of_work, principal, role="admin")
    return principal


@pytest.fixture
def member() -> Principal:
    return make_principal("member@example.com")


@pytest.fixture
def services(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    clock: FixedClock,
) -> Services:
    return build_services(
        StaticIdentityProvider(),
        unit_of_work_factory=sqlite_unit_of_work,
        moderation_config=ModerationConfig(read_retry_backoff_seconds=0.0),
        clock=clock,
    )
