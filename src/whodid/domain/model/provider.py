"""Service-provider identity records."""

from __future__ import annotations

import json
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING

from whodid.domain.errors import ValidationError
from whodid.domain.model.entity import TimestampedEntity

if TYPE_CHECKING:
    from uuid import UUID


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    text = unicodedata.normalize("NFKC", value).strip()
    return text or None


@dataclass(frozen=True, slots=True)
class ProviderKey:
    """Normalized (name, zip, service) triple used to deduplicate providers.

    ``name`` keeps the submitted spelling for display; ``identity_key`` folds its
    case so equivalent input collapses to one record.
    """

    name: str
    zip: str | None = None
    service: str | None = None

    @classmethod
    def from_input(
        cls,
        name: str | None,
        zip: str | None = None,  # noqa: A002
        service: str | None = None,
    ) -> ProviderKey:
        cleaned_name = _clean(name)
        if cleaned_name is None:
            raise ValidationError("Provider name is required", field="name")
        return cls(name=cleaned_name, zip=_clean(zip), service=_clean(service))

    @property
    def identity_key(self) -> str:
        # absent and blank collapse to "" so the storage constraint treats them as equal
        parts = (self.name.casefold(), self.zip or "", self.service or "")
        return json.dumps(parts, separators=(",", ":"), ensure_ascii=False)


@dataclass(eq=False, kw_only=True)
class Provider(TimestampedEntity):
    name: str
    zip: str | None = None
    service: str | None = None
    claimed: bool = False
    owner_id: UUID | None = None
    identity_key: str = ""

    def __post_init__(self) -> None:
        if not self.identity_key:
            self.identity_key = ProviderKey(
                name=self.name, zip=self.zip, service=self.service
            ).identity_key

    @classmethod
    def from_key(cls, key: ProviderKey) -> Provider:
        return cls(name=key.name, zip=key.zip, service=key.service, identity_key=key.identity_key)


@dataclass(frozen=True, slots=True)
class ProviderSummary:
    """Search result row: a provider plus its review scorecard."""

    id: UUID
    name: str
    zip: str | None
    service: str | None
    claimed: bool
    review_count: int
    pricing: float | None
    service_score: float | None
    cleanliness: float | None
