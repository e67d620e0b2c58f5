"""Ownership claims against provider records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from whodid.domain.model.entity import TimestampedEntity
from whodid.domain.model.enums import ClaimStatus

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True, slots=True)
class ClaimContact:
    """Optional proof-of-ownership contact details supplied by the claimant."""

    business_email: str | None = None
    phone: str | None = None
    website: str | None = None

    def normalized(self) -> ClaimContact:
        return ClaimContact(
            business_email=_blank_to_none(self.business_email),
            phone=_blank_to_none(self.phone),
            website=_blank_to_none(self.website),
        )


@dataclass(eq=False, kw_only=True)
class Claim(TimestampedEntity):
    provider_id: UUID
    claimant_id: UUID
    claimant_email: str | None = None
    business_email: str | None = None
    phone: str | None = None
    website: str | None = None
    status: ClaimStatus = ClaimStatus.PENDING
    decided_at: datetime | None = None
    decided_by: UUID | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is ClaimStatus.PENDING


@dataclass(frozen=True, slots=True)
class PendingClaim:
    """A pending claim joined with its provider and claimant for triage."""

    claim_id: UUID
    created_at: datetime
    business_email: str | None
    phone: str | None
    website: str | None
    claimant_id: UUID
    claimant_email: str | None
    provider_id: UUID
    provider_name: str
    provider_zip: str | None
    provider_service: str | None
    provider_claimed: bool
    provider_owner_id: UUID | None
