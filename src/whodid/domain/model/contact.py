"""Inbound support / contact messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from whodid.domain.model.entity import TimestampedEntity
from whodid.domain.model.enums import MessageStatus

if TYPE_CHECKING:
    from uuid import UUID

_OPEN_EXITS: Final = frozenset({MessageStatus.CLOSED, MessageStatus.ARCHIVED})

ALLOWED_MESSAGE_TRANSITIONS: Final[dict[MessageStatus, frozenset[MessageStatus]]] = {
    MessageStatus.NEW: frozenset({MessageStatus.READ, MessageStatus.ESCALATED}) | _OPEN_EXITS,
    MessageStatus.READ: frozenset({MessageStatus.ESCALATED}) | _OPEN_EXITS,
    MessageStatus.ESCALATED: frozenset({MessageStatus.READ}) | _OPEN_EXITS,
    MessageStatus.CLOSED: frozenset(),
    MessageStatus.ARCHIVED: frozenset(),
}


def can_transition(current: MessageStatus, target: MessageStatus) -> bool:
    return target in ALLOWED_MESSAGE_TRANSITIONS[current]


@dataclass(eq=False, kw_only=True)
class ContactMessage(TimestampedEntity):
    body: str
    name: str | None = None
    email: str | None = None
    from_principal_id: UUID | None = None
    status: MessageStatus = MessageStatus.NEW
