"""Provider registry: find-or-create identity records from free text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whodid.domain.errors import DuplicateProviderError, NotFound, StorageError
from whodid.domain.model import Provider, ProviderKey
from whodid.domain.retry import ReadRetryPolicy, retrying_read

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from whodid.domain.model import ProviderSummary
    from whodid.domain.ports import UnitOfWorkFactory

log = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50


class ProviderRegistry:
    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        *,
        read_retry: ReadRetryPolicy | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._read_retry = read_retry or ReadRetryPolicy()

    def resolve_or_create(
        self,
        name: str | None,
        zip: str | None = None,  # noqa: A002
        service: str | None = None,
    ) -> UUID:
        """Return the id of the provider matching the input, creating it if needed.

        Names compare case-insensitively; blank zip/service count as absent. A
        concurrent creator winning the insert race is resolved by reading its row.
        """

        key = ProviderKey.from_input(name, zip, service)
        existing = self._lookup(key)
        if existing is not None:
            return existing

        try:
            return self._insert(key)
        except DuplicateProviderError:
            log.warning("Provider %r was created concurrently; re-reading", key.name)

        winner = self._lookup(key)
        if winner is None:
            raise StorageError(
                f"provider {key.name!r} collided on insert but could not be read back"
            )
        return winner

    def get(self, provider_id: UUID) -> Provider:
        def load() -> Provider | None:
            with self._uow_factory() as uow:
                return uow.repositories.providers.get(provider_id)

        provider = retrying_read(load, policy=self._read_retry, description="provider get")
        if provider is None:
            raise NotFound("provider", provider_id)
        return provider

    def search(
        self,
        *,
        zip_prefix: str | None = None,
        service: str | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> Sequence[ProviderSummary]:
        zip_prefix = (zip_prefix or "").strip() or None
        service = (service or "").strip() or None

        def load() -> Sequence[ProviderSummary]:
            with self._uow_factory() as uow:
                return uow.repositories.providers.search(
                    zip_prefix=zip_prefix, service=service, limit=limit
                )

        return retrying_read(load, policy=self._read_retry, description="provider search")

    def _lookup(self, key: ProviderKey) -> UUID | None:
        def load() -> UUID | None:
            with self._uow_factory() as uow:
                provider = uow.repositories.providers.find_by_identity_key(key.identity_key)
                return provider.id if provider is not None else None

        return retrying_read(load, policy=self._read_retry, description="provider lookup")

    def _insert(self, key: ProviderKey) -> UUID:
        with self._uow_factory() as uow:
            provider = Provider.from_key(key)
            uow.repositories.providers.insert(provider)
            uow.commit()
        log.info("Created provider %s (%r, zip=%s, service=%s)", provider.id, key.name, key.zip, key.service)
        return provider.id
