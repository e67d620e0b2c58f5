"""Claim workflow: submit ownership claims and decide them atomically."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whodid.domain.errors import InvalidTransition, NotFound, Unauthenticated
from whodid.domain.model import Claim, ClaimContact, ClaimStatus, utcnow
from whodid.domain.retry import ReadRetryPolicy, retrying_read

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime
    from uuid import UUID

    from whodid.domain.identity import IdentityResolver
    from whodid.domain.model import PendingClaim, Principal
    from whodid.domain.ports import ModerationUnitOfWork, UnitOfWorkFactory
    from whodid.domain.providers import ProviderRegistry

log = logging.getLogger(__name__)


class ClaimWorkflow:
    """``pending -> approved`` or ``pending -> rejected``; both terminal.

    Decisions are compare-and-swap updates on ``status = pending``. Approval also
    moves provider ownership in the same unit of work, so either both records
    change or neither does.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        identity: IdentityResolver,
        registry: ProviderRegistry,
        *,
        clock: Callable[[], datetime] = utcnow,
        read_retry: ReadRetryPolicy | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._identity = identity
        self._registry = registry
        self._clock = clock
        self._read_retry = read_retry or ReadRetryPolicy()

    def submit(
        self,
        provider_id: UUID,
        claimant: Principal | None,
        contact: ClaimContact | None = None,
    ) -> UUID:
        if claimant is None:
            raise Unauthenticated("You must be signed in to claim a provider.")
        details = (contact or ClaimContact()).normalized()

        with self._uow_factory() as uow:
            if uow.repositories.providers.get(provider_id) is None:
                raise NotFound("provider", provider_id)
            claim = Claim(
                provider_id=provider_id,
                claimant_id=claimant.id,
                claimant_email=claimant.email,
                business_email=details.business_email,
                phone=details.phone,
                website=details.website,
                created_at=self._clock(),
            )
            uow.repositories.claims.add(claim)
            uow.commit()

        log.info("Claim %s submitted for provider %s by %s", claim.id, provider_id, claimant.id)
        return claim.id

    def submit_for(
        self,
        name: str | None,
        zip: str | None,  # noqa: A002
        service: str | None,
        claimant: Principal | None,
        contact: ClaimContact | None = None,
    ) -> UUID:
        if claimant is None:
            raise Unauthenticated("You must be signed in to claim a provider.")
        provider_id = self._registry.resolve_or_create(name, zip, service)
        return self.submit(provider_id, claimant, contact)

    def approve(self, claim_id: UUID, deciding_admin: Principal | None) -> None:
        self._decide(claim_id, ClaimStatus.APPROVED, deciding_admin)

    def reject(self, claim_id: UUID, deciding_admin: Principal | None) -> None:
        self._decide(claim_id, ClaimStatus.REJECTED, deciding_admin)

    def list_pending(self) -> Sequence[PendingClaim]:
        def load() -> Sequence[PendingClaim]:
            with self._uow_factory() as uow:
                return uow.repositories.claims.list_pending()

        return retrying_read(load, policy=self._read_retry, description="pending claims")

    def get(self, claim_id: UUID) -> Claim:
        def load() -> Claim | None:
            with self._uow_factory() as uow:
                return uow.repositories.claims.get(claim_id)

        claim = retrying_read(load, policy=self._read_retry, description="claim get")
        if claim is None:
            raise NotFound("claim", claim_id)
        return claim

    def _decide(
        self, claim_id: UUID, status: ClaimStatus, deciding_admin: Principal | None
    ) -> None:
        admin = self._identity.require_admin(deciding_admin)
        decided_at = self._clock()

        with self._uow_factory() as uow:
            claims = uow.repositories.claims
            if not claims.decide(claim_id, status=status, decided_at=decided_at, decided_by=admin.id):
                current = claims.get(claim_id)
                if current is None:
                    raise NotFound("claim", claim_id)
                raise InvalidTransition(
                    f"claim {claim_id} is already {current.status.value}",
                    current=current.status.value,
                )
            if status is ClaimStatus.APPROVED:
                self._transfer_ownership(uow, claim_id)
            uow.commit()

        log.info("Claim %s %s by %s", claim_id, status.value, admin.id)

    @staticmethod
    def _transfer_ownership(uow: ModerationUnitOfWork, claim_id: UUID) -> None:
        claim = uow.repositories.claims.get(claim_id)
        if claim is None:
            raise NotFound("claim", claim_id)
        if not uow.repositories.providers.assign_owner(claim.provider_id, claim.claimant_id):
            raise InvalidTransition(
                f"provider {claim.provider_id} is already owned by another principal",
                current="claimed",
            )
