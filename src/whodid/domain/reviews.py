"""Review ledger: append-only provider reviews."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whodid.domain.errors import NotFound, Unauthenticated
from whodid.domain.model import Review, utcnow, validate_body
from whodid.domain.retry import ReadRetryPolicy, retrying_read

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime
    from uuid import UUID

    from whodid.domain.model import Principal, Scores
    from whodid.domain.ports import UnitOfWorkFactory
    from whodid.domain.providers import ProviderRegistry

log = logging.getLogger(__name__)


class ReviewLedger:
    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        registry: ProviderRegistry,
        *,
        clock: Callable[[], datetime] = utcnow,
        read_retry: ReadRetryPolicy | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._registry = registry
        self._clock = clock
        self._read_retry = read_retry or ReadRetryPolicy()

    def submit(
        self,
        provider_id: UUID,
        author: Principal | None,
        scores: Scores,
        body: str | None,
        *,
        anonymous: bool = True,
    ) -> UUID:
        principal = self._validate(author, scores, body)
        text = validate_body(body)

        with self._uow_factory() as uow:
            if uow.repositories.providers.get(provider_id) is None:
                raise NotFound("provider", provider_id)
            review = Review(
                provider_id=provider_id,
                author_id=principal.id,
                pricing_score=scores.pricing,
                service_score=scores.service,
                cleanliness_score=scores.cleanliness,
                body=text,
                anonymous=anonymous,
                created_at=self._clock(),
            )
            uow.repositories.reviews.add(review)
            uow.commit()

        log.info("Review %s recorded for provider %s", review.id, provider_id)
        return review.id

    def submit_for(
        self,
        name: str | None,
        zip: str | None,  # noqa: A002
        service: str | None,
        author: Principal | None,
        scores: Scores,
        body: str | None,
        *,
        anonymous: bool = True,
    ) -> UUID:
        """Validate the review, then resolve its provider and record it.

        Validation runs before the provider is resolved so that a rejected review
        never leaves a freshly created provider behind.
        """

        self._validate(author, scores, body)
        provider_id = self._registry.resolve_or_create(name, zip, service)
        return self.submit(provider_id, author, scores, body, anonymous=anonymous)

    def list_by_author(self, author: Principal | None) -> Sequence[Review]:
        if author is None:
            raise Unauthenticated("You must be signed in to see your reviews.")

        def load() -> Sequence[Review]:
            with self._uow_factory() as uow:
                return uow.repositories.reviews.list_by_author(author.id)

        return retrying_read(load, policy=self._read_retry, description="reviews by author")

    def list_by_provider(self, provider_id: UUID) -> Sequence[Review]:
        def load() -> Sequence[Review]:
            with self._uow_factory() as uow:
                return uow.repositories.reviews.list_by_provider(provider_id)

        return retrying_read(load, policy=self._read_retry, description="reviews by provider")

    @staticmethod
    def _validate(author: Principal | None, scores: Scores, body: str | None) -> Principal:
        if author is None:
            raise Unauthenticated("You must be signed in to post a review.")
        validate_body(body)
        scores.validate()
        return author
