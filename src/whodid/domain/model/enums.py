"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ClaimStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ClaimStatus.PENDING


class MessageStatus(StrEnum):
    """Contact message lifecycle.

    ``new``, ``read`` and ``escalated`` form the open super-state;
    ``closed`` and ``archived`` are terminal.
    """

    NEW = "new"
    READ = "read"
    ESCALATED = "escalated"
    CLOSED = "closed"
    ARCHIVED = "archived"

    @property
    def is_open(self) -> bool:
        return self in OPEN_MESSAGE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not self.is_open


OPEN_MESSAGE_STATUSES: frozenset[MessageStatus] = frozenset(
    {MessageStatus.NEW, MessageStatus.READ, MessageStatus.ESCALATED}
)


class QueueOrder(StrEnum):
    OLDEST_FIRST = "oldest_first"
    NEWEST_FIRST = "newest_first"


class ModerationAccess(StrEnum):
    NEED_LOGIN = "need-login"
    FORBIDDEN = "forbidden"
    OK = "ok"
