"""Ports for persisting domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from whodid.domain.model import (
    Claim,
    ClaimStatus,
    ContactMessage,
    MessageStatus,
    PendingClaim,
    Profile,
    Provider,
    ProviderSummary,
    QueueOrder,
    Review,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent record store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class ProfileRepository(Protocol):
    """Read access to profiles; writes happen out of band."""

    def get(self, entity_id: UUID) -> Profile | None: ...

    def upsert(self, profile: Profile) -> None: ...


@runtime_checkable
class ProviderRepository(Repository[Provider], Protocol):
    """Persistence contract for provider identity records."""

    def find_by_identity_key(self, identity_key: str) -> Provider | None: ...

    def insert(self, provider: Provider) -> None:
        """Insert and flush immediately so uniqueness violations surface here."""
        ...

    def assign_owner(self, provider_id: UUID, owner_id: UUID) -> bool:
        """Mark claimed/owned unless already owned by someone else."""
        ...

    def search(
        self, *, zip_prefix: str | None, service: str | None, limit: int
    ) -> Sequence[ProviderSummary]: ...


@runtime_checkable
class ClaimRepository(Repository[Claim], Protocol):
    """Persistence contract for ownership claims."""

    def decide(
        self,
        claim_id: UUID,
        *,
        status: ClaimStatus,
        decided_at: datetime,
        decided_by: UUID,
    ) -> bool:
        """Conditionally move a pending claim to ``status``; False if not pending."""
        ...

    def list_pending(self) -> Sequence[PendingClaim]: ...


@runtime_checkable
class ReviewRepository(Repository[Review], Protocol):
    """Append-only review store."""

    def list_by_author(self, author_id: UUID) -> Sequence[Review]: ...

    def list_by_provider(self, provider_id: UUID) -> Sequence[Review]: ...


@runtime_checkable
class ContactMessageRepository(Repository[ContactMessage], Protocol):
    """Persistence contract for contact messages."""

    def transition(
        self,
        message_id: UUID,
        *,
        expected: MessageStatus,
        target: MessageStatus,
    ) -> bool:
        """Compare-and-set the status; False when the row no longer holds ``expected``."""
        ...

    def list_open(self, *, order: QueueOrder) -> Sequence[ContactMessage]: ...
