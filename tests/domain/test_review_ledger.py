from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from whodid.domain.errors import NotFound, Unauthenticated, ValidationError
from whodid.domain.model import Scores

if TYPE_CHECKING:
    from whodid.app import Services
    from whodid.domain.model import Principal

GOOD = Scores(pricing=4, service=5, cleanliness=3)


def test_body_length_boundary(services: Services, member: Principal) -> None:
    provider_id = services.providers.resolve_or_create("Ava", "10001", "Hair")

    with pytest.raises(ValidationError):
        services.reviews.submit(provider_id, member, GOOD, "x" * 29)

    review_id = services.reviews.submit(provider_id, member, GOOD, "x" * 30)
    assert [review.id for review in services.reviews.list_by_author(member)] == [review_id]


@pytest.mark.parametrize("score", [0, 6])
def test_out_of_range_scores_rejected(services: Services, member: Principal, score: int) -> None:
    provider_id = services.providers.resolve_or_create("Ava")

    with pytest.raises(ValidationError):
        services.reviews.submit(
            provider_id, member, Scores(pricing=score, service=3, cleanliness=3), "y" * 40
        )


@pytest.mark.parametrize("score", [1, 5])
def test_boundary_scores_accepted(services: Services, member: Principal, score: int) -> None:
    provider_id = services.providers.resolve_or_create("Ava")

    services.reviews.submit(
        provider_id, member, Scores(pricing=score, service=score, cleanliness=score), "y" * 40
    )

    (review,) = services.reviews.list_by_provider(provider_id)
    assert review.scores == Scores(pricing=score, service=score, cleanliness=score)


def test_review_requires_principal_and_provider(services: Services, member: Principal) -> None:
    with pytest.raises(Unauthenticated):
        services.reviews.submit(uuid4(), None, GOOD, "z" * 40)
    with pytest.raises(NotFound):
        services.reviews.submit(uuid4(), member, GOOD, "z" * 40)
    with pytest.raises(Unauthenticated):
        services.reviews.list_by_author(None)


def test_review_body_is_trimmed_and_anonymous_by_default(
    services: Services, member: Principal
) -> None:
    provider_id = services.providers.resolve_or_create("Ava")

    services.reviews.submit(provider_id, member, GOOD, "   " + "w" * 30 + "\n")

    (review,) = services.reviews.list_by_author(member)
    assert review.body == "w" * 30
    assert review.anonymous
    assert review.author_id == member.id


def test_list_by_author_is_newest_first(services: Services, member: Principal) -> None:
    ava = services.providers.resolve_or_create("Ava")
    bea = services.providers.resolve_or_create("Bea")

    older = services.reviews.submit(ava, member, GOOD, "a" * 30)
    newer = services.reviews.submit(bea, member, GOOD, "b" * 30, anonymous=False)

    reviews = services.reviews.list_by_author(member)
    assert [review.id for review in reviews] == [newer, older]
    assert not reviews[0].anonymous


def test_submit_for_validates_before_creating_provider(
    services: Services, member: Principal
) -> None:
    with pytest.raises(ValidationError):
        services.reviews.submit_for("Ghost", "10001", "Hair", member, GOOD, "too short")

    assert services.providers.search() == []

    review_id = services.reviews.submit_for("Ghost", "10001", "Hair", member, GOOD, "q" * 30)
    provider_id = services.providers.resolve_or_create("ghost", "10001", "Hair")
    assert [review.id for review in services.reviews.list_by_provider(provider_id)] == [review_id]
