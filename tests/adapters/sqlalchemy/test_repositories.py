from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from whodid.adapters.sqlalchemy.repositories import (
    SqlAlchemyClaimRepository,
    SqlAlchemyContactMessageRepository,
    SqlAlchemyProfileRepository,
    SqlAlchemyProviderRepository,
)
from whodid.domain.errors import DuplicateProviderError
from whodid.domain.model import (
    Claim,
    ClaimStatus,
    ContactMessage,
    MessageStatus,
    Profile,
    Provider,
    QueueOrder,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def _provider(session: Session, name: str = "Ava", **kwargs: object) -> Provider:
    provider = Provider(name=name, created_at=NOW, **kwargs)  # type: ignore[arg-type]
    SqlAlchemyProviderRepository(session).insert(provider)
    return provider


def test_profile_upsert_updates_in_place(sqlite_session: Session) -> None:
    repo = SqlAlchemyProfileRepository(sqlite_session)
    principal_id = uuid4()

    repo.upsert(Profile(id=principal_id, role="member"))
    sqlite_session.commit()
    repo.upsert(Profile(id=principal_id, role="admin", is_admin=True))
    sqlite_session.commit()
    sqlite_session.expire_all()

    stored = repo.get(principal_id)
    assert stored is not None
    assert stored.role == "admin"
    assert stored.is_admin is True


def test_provider_insert_rejects_duplicate_identity(sqlite_session: Session) -> None:
    _provider(sqlite_session, "Ava", zip="10001")
    sqlite_session.commit()

    with pytest.raises(DuplicateProviderError):
        _provider(sqlite_session, "AVA", zip="10001")


def test_assign_owner_is_conditional(sqlite_session: Session) -> None:
    repo = SqlAlchemyProviderRepository(sqlite_session)
    provider = _provider(sqlite_session)
    owner, rival = uuid4(), uuid4()

    assert repo.assign_owner(provider.id, owner)
    assert repo.assign_owner(provider.id, owner)
    assert not repo.assign_owner(provider.id, rival)
    assert not repo.assign_owner(uuid4(), owner)


def test_claim_decide_only_from_pending(sqlite_session: Session) -> None:
    provider = _provider(sqlite_session)
    claims = SqlAlchemyClaimRepository(sqlite_session)
    claim = Claim(provider_id=provider.id, claimant_id=uuid4(), created_at=NOW)
    claims.add(claim)
    sqlite_session.flush()
    admin = uuid4()

    assert claims.decide(claim.id, status=ClaimStatus.REJECTED, decided_at=NOW, decided_by=admin)
    assert not claims.decide(claim.id, status=ClaimStatus.APPROVED, decided_at=NOW, decided_by=admin)
    sqlite_session.commit()
    sqlite_session.expire_all()

    stored = claims.get(claim.id)
    assert stored is not None
    assert stored.status is ClaimStatus.REJECTED
    assert stored.decided_by == admin
    assert stored.decided_at == NOW
    assert claims.list_pending() == []


def test_list_pending_joins_provider(sqlite_session: Session) -> None:
    provider = _provider(sqlite_session, "Ava", zip="10001", service="Hair")
    claims = SqlAlchemyClaimRepository(sqlite_session)
    later = Claim(provider_id=provider.id, claimant_id=uuid4(), created_at=NOW + timedelta(hours=1))
    earlier = Claim(
        provider_id=provider.id,
        claimant_id=uuid4(),
        claimant_email="c@example.com",
        website="ava.example",
        created_at=NOW,
    )
    claims.add(later)
    claims.add(earlier)
    sqlite_session.commit()

    rows = claims.list_pending()

    assert [row.claim_id for row in rows] == [earlier.id, later.id]
    assert rows[0].provider_name == "Ava"
    assert rows[0].provider_service == "Hair"
    assert rows[0].claimant_email == "c@example.com"
    assert rows[0].website == "ava.example"
    assert rows[0].created_at == NOW


def test_message_transition_is_keyed_on_status(sqlite_session: Session) -> None:
    messages = SqlAlchemyContactMessageRepository(sqlite_session)
    message = ContactMessage(body="hello", created_at=NOW)
    messages.add(message)
    sqlite_session.flush()

    assert messages.transition(message.id, expected=MessageStatus.NEW, target=MessageStatus.READ)
    assert not messages.transition(
        message.id, expected=MessageStatus.NEW, target=MessageStatus.CLOSED
    )


def test_list_open_excludes_terminal_and_orders(sqlite_session: Session) -> None:
    messages = SqlAlchemyContactMessageRepository(sqlite_session)
    first = ContactMessage(body="first", created_at=NOW)
    second = ContactMessage(body="second", created_at=NOW + timedelta(minutes=1))
    closed = ContactMessage(
        body="closed", created_at=NOW + timedelta(minutes=2), status=MessageStatus.CLOSED
    )
    escalated = ContactMessage(
        body="escalated", created_at=NOW + timedelta(minutes=3), status=MessageStatus.ESCALATED
    )
    for message in (first, second, closed, escalated):
        messages.add(message)
    sqlite_session.commit()

    oldest = messages.list_open(order=QueueOrder.OLDEST_FIRST)
    newest = messages.list_open(order=QueueOrder.NEWEST_FIRST)

    assert [m.body for m in oldest] == ["first", "second", "escalated"]
    assert [m.body for m in newest] == ["escalated", "second", "first"]
