"""Application wiring: build the domain services against configured adapters."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from whodid.adapters.payments import StripeCheckoutGateway
from whodid.adapters.sqlalchemy.migrations import current_revision
from whodid.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    startup,
)
from whodid.config import get_moderation_config
from whodid.domain.claims import ClaimWorkflow
from whodid.domain.contact import ContactTriageQueue
from whodid.domain.identity import IdentityResolver
from whodid.domain.model import ADMIN_ROLE, Profile, utcnow
from whodid.domain.moderation import ModerationFacade
from whodid.domain.providers import ProviderRegistry
from whodid.domain.resolution import ResolutionCheckout
from whodid.domain.retry import ReadRetryPolicy
from whodid.domain.reviews import ReviewLedger

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from whodid.config import ModerationConfig
    from whodid.domain.ports import IdentityProvider, PaymentGateway, UnitOfWorkFactory


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Services:
    identity: IdentityResolver
    providers: ProviderRegistry
    claims: ClaimWorkflow
    reviews: ReviewLedger
    contact: ContactTriageQueue
    moderation: ModerationFacade


def ensure_started() -> None:
    """Start the storage adapter from the environment unless already running."""

    if not is_started():
        startup()


def build_services(
    identity_provider: IdentityProvider,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    moderation_config: ModerationConfig | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> Services:
    """Wire every service around one identity provider and unit-of-work factory."""

    if unit_of_work_factory is None:
        ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    config = moderation_config or get_moderation_config()
    read_retry = ReadRetryPolicy(
        attempts=config.read_retry_attempts,
        backoff_seconds=config.read_retry_backoff_seconds,
    )

    identity = IdentityResolver(identity_provider, effective_uow, read_retry=read_retry)
    providers = ProviderRegistry(effective_uow, read_retry=read_retry)
    claims = ClaimWorkflow(
        effective_uow, identity, providers, clock=clock, read_retry=read_retry
    )
    reviews = ReviewLedger(effective_uow, providers, clock=clock, read_retry=read_retry)
    contact = ContactTriageQueue(
        effective_uow,
        identity,
        order=config.contact_queue_order,
        clock=clock,
        read_retry=read_retry,
    )
    moderation = ModerationFacade(identity, claims, contact, clock=clock)
    log.debug("Services wired (queue order %s)", config.contact_queue_order.value)
    return Services(
        identity=identity,
        providers=providers,
        claims=claims,
        reviews=reviews,
        contact=contact,
        moderation=moderation,
    )


def build_resolution_checkout(
    registry: ProviderRegistry,
    *,
    gateway: PaymentGateway | None = None,
) -> ResolutionCheckout:
    return ResolutionCheckout(gateway or StripeCheckoutGateway(), registry)


def upgrade_database(*, database_uri: str | None = None) -> str | None:
    """Start the adapter (which migrates to head) and return the stamped revision."""

    if not is_started():
        startup(database_uri=database_uri)
    engine = configured_engine()
    if engine is None:
        raise StartupError("storage adapter did not start")
    revision = current_revision(engine)
    log.info("Database at revision %s", revision)
    return revision


def grant_admin(
    principal_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Profile:
    """Seed or update the profile of ``principal_id`` with the admin role."""

    if unit_of_work_factory is None:
        ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    profile = Profile(id=principal_id, role=ADMIN_ROLE, is_admin=True)
    with effective_uow() as uow:
        uow.repositories.profiles.upsert(profile)
        uow.commit()
    log.info("Granted admin to %s", principal_id)
    return profile
