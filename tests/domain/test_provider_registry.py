from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from whodid.domain.errors import NotFound, StorageError, ValidationError
from whodid.domain.model import Scores
from whodid.domain.providers import ProviderRegistry
from whodid.domain.retry import ReadRetryPolicy
from tests.helpers.moderation import (
    LookupMisses,
    StaleLookupProviders,
    make_principal,
    wrapped_unit_of_work_factory,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from whodid.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
    from whodid.app import Services

BODY = "Showed up on time and did a careful, tidy job."


def test_resolve_or_create_is_idempotent(services: Services) -> None:
    first = services.providers.resolve_or_create("Ava", "10001", "Hair")
    second = services.providers.resolve_or_create("Ava", "10001", "Hair")

    assert first == second


def test_resolve_or_create_ignores_name_case_and_padding(services: Services) -> None:
    first = services.providers.resolve_or_create("Ava", "10001", "Hair")
    second = services.providers.resolve_or_create("  ava ", " 10001 ", "Hair ")

    assert first == second
    provider = services.providers.get(first)
    assert provider.name == "Ava"
    assert not provider.claimed
    assert provider.owner_id is None


def test_absent_zip_matches_blank_zip(services: Services) -> None:
    first = services.providers.resolve_or_create("Ava", None, None)
    second = services.providers.resolve_or_create("Ava", "  ", "")

    assert first == second
    assert first != services.providers.resolve_or_create("Ava", "10001", None)


def test_resolve_or_create_requires_name(services: Services) -> None:
    with pytest.raises(ValidationError):
        services.providers.resolve_or_create("   ", "10001", "Hair")


def test_concurrent_creator_is_absorbed(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    winner = ProviderRegistry(sqlite_unit_of_work).resolve_or_create("Ava", "10001", "Hair")

    misses = LookupMisses(remaining=1)
    racing = ProviderRegistry(
        wrapped_unit_of_work_factory(providers=partial(StaleLookupProviders, misses=misses))
    )

    assert racing.resolve_or_create("ava", "10001", "Hair") == winner
    assert misses.remaining == 0


def test_unreadable_winner_surfaces_storage_error(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    ProviderRegistry(sqlite_unit_of_work).resolve_or_create("Ava", "10001", "Hair")
    blind = ProviderRegistry(
        wrapped_unit_of_work_factory(
            providers=partial(StaleLookupProviders, misses=LookupMisses(remaining=10))
        ),
        read_retry=ReadRetryPolicy(attempts=1),
    )

    with pytest.raises(StorageError):
        blind.resolve_or_create("Ava", "10001", "Hair")


def test_get_unknown_provider(services: Services) -> None:
    with pytest.raises(NotFound):
        services.providers.get(uuid4())


def test_search_filters_and_aggregates(services: Services) -> None:
    author = make_principal()
    ava = services.providers.resolve_or_create("Ava", "10001", "Hair Salon")
    services.providers.resolve_or_create("Bea", "10002", "Nails")
    cid = services.providers.resolve_or_create("Cid", "94110", "hair color")

    services.reviews.submit(ava, author, Scores(4, 5, 3), BODY)
    services.reviews.submit(ava, author, Scores(2, 4, 4), BODY)

    hair = services.providers.search(service="HAIR")
    assert [summary.id for summary in hair] == [ava, cid]
    assert hair[0].review_count == 2
    assert hair[0].pricing == 3.0
    assert hair[0].service_score == 4.5
    assert hair[0].cleanliness == 3.5
    assert hair[1].review_count == 0
    assert hair[1].pricing is None

    new_york = services.providers.search(zip_prefix="100")
    assert [summary.name for summary in new_york] == ["Ava", "Bea"]

    assert services.providers.search(zip_prefix="100", service="hair")[0].id == ava
    assert services.providers.search(service="%") == []
