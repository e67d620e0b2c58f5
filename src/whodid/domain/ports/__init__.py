"""Domain port definitions for adapters."""

from __future__ import annotations

from .identity import IdentityProvider
from .payments import PaymentGateway
from .persistence import (
    ClaimRepository,
    ContactMessageRepository,
    ProfileRepository,
    ProviderRepository,
    Repository,
    ReviewRepository,
)
from .unit_of_work import (
    ModerationRepositories,
    ModerationUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "ClaimRepository",
    "ContactMessageRepository",
    "IdentityProvider",
    "ModerationRepositories",
    "ModerationUnitOfWork",
    "PaymentGateway",
    "ProfileRepository",
    "ProviderRepository",
    "Repository",
    "RepositoryCollection",
    "ReviewRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
