"""SQLAlchemy mapping metadata for the whodid domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from whodid.domain.model import (
    Claim,
    ClaimStatus,
    ContactMessage,
    MessageStatus,
    Profile,
    Provider,
    Review,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


def _status_enum(enum_cls: type[StrEnum], name: str) -> Enum:
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        values_callable=_enum_values,
        validate_strings=True,
        length=16,
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

profile_table = Table(
    "profile",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("role", String, nullable=True),
    Column("is_admin", Boolean, nullable=True),
)

provider_table = Table(
    "provider",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("zip", String, nullable=True),
    Column("service", String, nullable=True),
    Column("identity_key", String, nullable=False),
    Column("claimed", Boolean, nullable=False, default=False),
    Column("owner", UUIDColumnType, key="owner_id", nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint("identity_key", name="uq_provider_identity_key"),
)

claim_table = Table(
    "claim",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("status", _status_enum(ClaimStatus, "claim_status"), nullable=False),
    Column("business_email", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("website", String, nullable=True),
    Column("claimant", UUIDColumnType, key="claimant_id", nullable=False),
    Column("claimant_email", String, nullable=True),
    Column(
        "provider",
        UUIDColumnType,
        ForeignKey("provider.id"),
        key="provider_id",
        nullable=False,
    ),
    Column("decided_at", UTCDateTime(), nullable=True),
    Column("decided_by", UUIDColumnType, nullable=True),
    Index("ix_claim_status_created_at", "status", "created_at"),
)

review_table = Table(
    "review",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "provider",
        UUIDColumnType,
        ForeignKey("provider.id"),
        key="provider_id",
        nullable=False,
    ),
    Column("author", UUIDColumnType, key="author_id", nullable=False),
    Column("pricing_score", Integer, nullable=False),
    Column("service_score", Integer, nullable=False),
    Column("cleanliness_score", Integer, nullable=False),
    Column("body", Text, nullable=False),
    Column("anonymous", Boolean, nullable=False, default=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_review_author_created_at", "author_id", "created_at"),
)

contact_message_table = Table(
    "contact_message",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("name", String, nullable=True),
    Column("email", String, nullable=True),
    Column("body", Text, nullable=False),
    Column("from", UUIDColumnType, key="from_principal_id", nullable=True),
    Column("status", _status_enum(MessageStatus, "message_status"), nullable=False),
    Index("ix_contact_message_status_created_at", "status", "created_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Profile, profile_table)
    mapper_registry.map_imperatively(Provider, provider_table)
    mapper_registry.map_imperatively(Claim, claim_table)
    mapper_registry.map_imperatively(Review, review_table)
    mapper_registry.map_imperatively(ContactMessage, contact_message_table)

    configure_mappers()
    return mapper_registry

