"""Principals and their stored profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from uuid import UUID

ADMIN_ROLE: Final[str] = "admin"


@dataclass(frozen=True, slots=True)
class Principal:
    """An authenticated identity as reported by the identity collaborator."""

    id: UUID
    email: str | None = None


@dataclass(eq=False, kw_only=True)
class Profile:
    """Role information keyed by principal id. Either admin signal suffices."""

    id: UUID
    role: str | None = None
    is_admin: bool | None = None

    @property
    def grants_admin(self) -> bool:
        if self.is_admin is True:
            return True
        return self.role is not None and self.role.strip().lower() == ADMIN_ROLE
