"""Admin-only moderation façade over claims and contact messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from whodid.domain.model import ModerationAccess, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime
    from uuid import UUID

    from whodid.domain.claims import ClaimWorkflow
    from whodid.domain.contact import ContactTriageQueue
    from whodid.domain.identity import IdentityResolver
    from whodid.domain.model import ContactMessage, MessageStatus, PendingClaim, Principal


@dataclass(frozen=True, slots=True)
class ModerationSnapshot:
    pending_claims: Sequence[PendingClaim]
    open_messages: Sequence[ContactMessage]
    taken_at: datetime


class ModerationFacade:
    def __init__(
        self,
        identity: IdentityResolver,
        claims: ClaimWorkflow,
        contact: ContactTriageQueue,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._identity = identity
        self._claims = claims
        self._contact = contact
        self._clock = clock

    def access(self, principal: Principal | None) -> ModerationAccess:
        if principal is None:
            return ModerationAccess.NEED_LOGIN
        if not self._identity.is_admin(principal):
            return ModerationAccess.FORBIDDEN
        return ModerationAccess.OK

    def refresh(self, principal: Principal | None) -> ModerationSnapshot:
        """Read both queues for an admin; failures raise rather than return partial data."""

        self._identity.require_admin(principal)
        taken_at = self._clock()
        return ModerationSnapshot(
            pending_claims=tuple(self._claims.list_pending()),
            open_messages=tuple(self._contact.list_open()),
            taken_at=taken_at,
        )

    def approve_claim(self, claim_id: UUID, principal: Principal | None) -> None:
        self._claims.approve(claim_id, principal)

    def reject_claim(self, claim_id: UUID, principal: Principal | None) -> None:
        self._claims.reject(claim_id, principal)

    def set_message_status(
        self, message_id: UUID, new_status: MessageStatus | str, principal: Principal | None
    ) -> None:
        self._contact.set_status(message_id, new_status, principal)
