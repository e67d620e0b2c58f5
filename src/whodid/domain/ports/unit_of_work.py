"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from whodid.domain.ports.persistence import (
        ClaimRepository,
        ContactMessageRepository,
        ProfileRepository,
        ProviderRepository,
        ReviewRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    Leaving the context without ``commit`` discards every pending change, so all
    writes made through one unit of work land together or not at all.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ModerationRepositories(RepositoryCollection):
    """Repositories touched by submissions and moderation decisions."""

    profiles: ProfileRepository
    providers: ProviderRepository
    claims: ClaimRepository
    reviews: ReviewRepository
    messages: ContactMessageRepository


type ModerationUnitOfWork = UnitOfWork[ModerationRepositories]
type UnitOfWorkFactory = Callable[[], ModerationUnitOfWork]
