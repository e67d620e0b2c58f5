"""Error taxonomy shared by every domain operation.

Callers render user-facing text; the core only preserves the kind of failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class WhodidError(Exception):
    """Base class for all domain errors."""


class ValidationError(WhodidError):
    """Malformed or missing input supplied by the submitter."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class Unauthenticated(WhodidError):
    """The operation requires a resolved principal and none was supplied."""


class Forbidden(WhodidError):
    """The principal lacks the admin role required by the operation."""


class InvalidTransition(WhodidError):
    """A state-machine precondition was violated (already decided, conflict)."""

    def __init__(self, message: str, *, current: str | None = None) -> None:
        super().__init__(message)
        self.current = current


class NotFound(WhodidError):
    """A referenced claim, provider or message does not exist."""

    def __init__(self, kind: str, identifier: UUID | str) -> None:
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class StorageError(WhodidError):
    """Transient infrastructure failure in the persistence layer."""


class DuplicateProviderError(StorageError):
    """Insert collided with the provider identity-key uniqueness constraint."""


class CollaboratorError(WhodidError):
    """An external collaborator (identity, payments) failed or misbehaved."""
