"""Public domain model surface."""

from __future__ import annotations

from whodid.domain.model.claim import Claim, ClaimContact, PendingClaim
from whodid.domain.model.contact import (
    ALLOWED_MESSAGE_TRANSITIONS,
    ContactMessage,
    can_transition,
)
from whodid.domain.model.entity import Entity, TimestampedEntity, new_id, utcnow
from whodid.domain.model.enums import (
    OPEN_MESSAGE_STATUSES,
    ClaimStatus,
    MessageStatus,
    ModerationAccess,
    QueueOrder,
)
from whodid.domain.model.principal import ADMIN_ROLE, Principal, Profile
from whodid.domain.model.provider import Provider, ProviderKey, ProviderSummary
from whodid.domain.model.review import (
    MAX_SCORE,
    MIN_BODY_LENGTH,
    MIN_SCORE,
    Review,
    Scores,
    validate_body,
)

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "TimestampedEntity",
    "new_id",
    "utcnow",
    # identity
    "ADMIN_ROLE",
    "Principal",
    "Profile",
    # providers
    "Provider",
    "ProviderKey",
    "ProviderSummary",
    # claims
    "Claim",
    "ClaimContact",
    "PendingClaim",
    # reviews
    "Review",
    "Scores",
    "validate_body",
    "MIN_BODY_LENGTH",
    "MIN_SCORE",
    "MAX_SCORE",
    # contact
    "ContactMessage",
    "ALLOWED_MESSAGE_TRANSITIONS",
    "can_transition",
    # enums
    "ClaimStatus",
    "MessageStatus",
    "ModerationAccess",
    "QueueOrder",
    "OPEN_MESSAGE_STATUSES",
]
