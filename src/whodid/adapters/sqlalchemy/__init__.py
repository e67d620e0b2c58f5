"""SQLAlchemy adapter package for whodid."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyClaimRepository,
    SqlAlchemyContactMessageRepository,
    SqlAlchemyProfileRepository,
    SqlAlchemyProviderRepository,
    SqlAlchemyReviewRepository,
)

__all__ = [
    "SqlAlchemyClaimRepository",
    "SqlAlchemyContactMessageRepository",
    "SqlAlchemyProfileRepository",
    "SqlAlchemyProviderRepository",
    "SqlAlchemyReviewRepository",
    "mapper_registry",
    "start_mappers",
]
