"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, cast

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from whodid.adapters.sqlalchemy.mappings import (
    claim_table,
    contact_message_table,
    provider_table,
    review_table,
)
from whodid.domain.errors import DuplicateProviderError, StorageError
from whodid.domain.model import (
    Claim,
    ClaimStatus,
    ContactMessage,
    MessageStatus,
    OPEN_MESSAGE_STATUSES,
    PendingClaim,
    Profile,
    Provider,
    ProviderSummary,
    QueueOrder,
    Review,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session


def translate_errors[**P, T](func_: Callable[P, T]) -> Callable[P, T]:
    """Re-raise driver/ORM failures as the domain's ``StorageError``."""

    @functools.wraps(func_)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func_(*args, **kwargs)
        except StorageError:
            raise
        except SQLAlchemyError as exc:
            raise StorageError(f"{func_.__qualname__} failed: {exc}") from exc

    return wrapper


def _rowcount(result: object) -> int:
    return cast("CursorResult[object]", result).rowcount


class SqlAlchemyProfileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def get(self, entity_id: UUID) -> Profile | None:
        return self.session.get(Profile, entity_id)

    @translate_errors
    def upsert(self, profile: Profile) -> None:
        self.session.merge(profile)


class SqlAlchemyProviderRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def add(self, entity: Provider) -> None:
        self.session.add(entity)

    @translate_errors
    def get(self, entity_id: UUID) -> Provider | None:
        return self.session.get(Provider, entity_id)

    @translate_errors
    def find_by_identity_key(self, identity_key: str) -> Provider | None:
        stmt = select(Provider).where(provider_table.c.identity_key == identity_key).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def insert(self, provider: Provider) -> None:
        self.session.add(provider)
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise DuplicateProviderError(
                f"provider with identity key {provider.identity_key} already exists"
            ) from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"provider insert failed: {exc}") from exc

    @translate_errors
    def assign_owner(self, provider_id: UUID, owner_id: UUID) -> bool:
        stmt = (
            update(provider_table)
            .where(provider_table.c.id == provider_id)
            .where(
                or_(
                    provider_table.c.claimed.is_(False),
                    provider_table.c.owner_id == owner_id,
                )
            )
            .values(owner_id=owner_id, claimed=True)
        )
        return _rowcount(self.session.execute(stmt)) == 1

    @translate_errors
    def search(
        self, *, zip_prefix: str | None, service: str | None, limit: int
    ) -> Sequence[ProviderSummary]:
        stmt = (
            select(
                provider_table.c.id,
                provider_table.c.name,
                provider_table.c.zip,
                provider_table.c.service,
                provider_table.c.claimed,
                func.count(review_table.c.id),
                func.avg(review_table.c.pricing_score),
                func.avg(review_table.c.service_score),
                func.avg(review_table.c.cleanliness_score),
            )
            .select_from(provider_table)
            .outerjoin(review_table, review_table.c.provider_id == provider_table.c.id)
            .group_by(provider_table.c.id)
            .order_by(provider_table.c.name, provider_table.c.created_at)
            .limit(limit)
        )
        if zip_prefix:
            stmt = stmt.where(provider_table.c.zip.startswith(zip_prefix, autoescape=True))
        if service:
            stmt = stmt.where(provider_table.c.service.icontains(service, autoescape=True))
        return [
            ProviderSummary(
                id=row[0],
                name=row[1],
                zip=row[2],
                service=row[3],
                claimed=bool(row[4]),
                review_count=int(row[5]),
                pricing=_round_average(row[6]),
                service_score=_round_average(row[7]),
                cleanliness=_round_average(row[8]),
            )
            for row in self.session.execute(stmt).all()
        ]


def _round_average(value: object) -> float | None:
    if value is None:
        return None
    return round(float(cast("float", value)), 2)


class SqlAlchemyClaimRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def add(self, entity: Claim) -> None:
        self.session.add(entity)

    @translate_errors
    def get(self, entity_id: UUID) -> Claim | None:
        return self.session.get(Claim, entity_id)

    @translate_errors
    def decide(
        self,
        claim_id: UUID,
        *,
        status: ClaimStatus,
        decided_at: datetime,
        decided_by: UUID,
    ) -> bool:
        stmt = (
            update(claim_table)
            .where(claim_table.c.id == claim_id)
            .where(claim_table.c.status == ClaimStatus.PENDING)
            .values(status=status, decided_at=decided_at, decided_by=decided_by)
        )
        return _rowcount(self.session.execute(stmt)) == 1

    @translate_errors
    def list_pending(self) -> Sequence[PendingClaim]:
        stmt = (
            select(
                claim_table.c.id,
                claim_table.c.created_at,
                claim_table.c.business_email,
                claim_table.c.phone,
                claim_table.c.website,
                claim_table.c.claimant_id,
                claim_table.c.claimant_email,
                provider_table.c.id,
                provider_table.c.name,
                provider_table.c.zip,
                provider_table.c.service,
                provider_table.c.claimed,
                provider_table.c.owner_id,
            )
            .join(provider_table, provider_table.c.id == claim_table.c.provider_id)
            .where(claim_table.c.status == ClaimStatus.PENDING)
            .order_by(claim_table.c.created_at.asc(), claim_table.c.id)
        )
        return [
            PendingClaim(
                claim_id=row[0],
                created_at=row[1],
                business_email=row[2],
                phone=row[3],
                website=row[4],
                claimant_id=row[5],
                claimant_email=row[6],
                provider_id=row[7],
                provider_name=row[8],
                provider_zip=row[9],
                provider_service=row[10],
                provider_claimed=bool(row[11]),
                provider_owner_id=row[12],
            )
            for row in self.session.execute(stmt).all()
        ]


class SqlAlchemyReviewRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def add(self, entity: Review) -> None:
        self.session.add(entity)

    @translate_errors
    def get(self, entity_id: UUID) -> Review | None:
        return self.session.get(Review, entity_id)

    @translate_errors
    def list_by_author(self, author_id: UUID) -> Sequence[Review]:
        stmt = (
            select(Review)
            .where(review_table.c.author_id == author_id)
            .order_by(review_table.c.created_at.desc())
        )
        return list(self.session.execute(stmt).scalars())

    @translate_errors
    def list_by_provider(self, provider_id: UUID) -> Sequence[Review]:
        stmt = (
            select(Review)
            .where(review_table.c.provider_id == provider_id)
            .order_by(review_table.c.created_at.desc())
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyContactMessageRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def add(self, entity: ContactMessage) -> None:
        self.session.add(entity)

    @translate_errors
    def get(self, entity_id: UUID) -> ContactMessage | None:
        return self.session.get(ContactMessage, entity_id)

    @translate_errors
    def transition(
        self,
        message_id: UUID,
        *,
        expected: MessageStatus,
        target: MessageStatus,
    ) -> bool:
        stmt = (
            update(contact_message_table)
            .where(contact_message_table.c.id == message_id)
            .where(contact_message_table.c.status == expected)
            .values(status=target)
        )
        return _rowcount(self.session.execute(stmt)) == 1

    @translate_errors
    def list_open(self, *, order: QueueOrder) -> Sequence[ContactMessage]:
        created_at = contact_message_table.c.created_at
        ordering = created_at.desc() if order is QueueOrder.NEWEST_FIRST else created_at.asc()
        stmt = (
            select(ContactMessage)
            .where(contact_message_table.c.status.in_(sorted(OPEN_MESSAGE_STATUSES)))
            .order_by(ordering)
        )
        return list(self.session.execute(stmt).scalars())


if TYPE_CHECKING:
    from whodid.domain.ports.persistence import (
        ClaimRepository,
        ContactMessageRepository,
        ProfileRepository,
        ProviderRepository,
        ReviewRepository,
    )

    _session_stub = cast("Session", object())
    _profile_repo: ProfileRepository = SqlAlchemyProfileRepository(_session_stub)
    _provider_repo: ProviderRepository = SqlAlchemyProviderRepository(_session_stub)
    _claim_repo: ClaimRepository = SqlAlchemyClaimRepository(_session_stub)
    _review_repo: ReviewRepository = SqlAlchemyReviewRepository(_session_stub)
    _message_repo: ContactMessageRepository = SqlAlchemyContactMessageRepository(_session_stub)
