"""Append-only provider reviews."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from whodid.domain.errors import ValidationError
from whodid.domain.model.entity import TimestampedEntity

if TYPE_CHECKING:
    from uuid import UUID

MIN_SCORE: Final[int] = 1
MAX_SCORE: Final[int] = 5
MIN_BODY_LENGTH: Final[int] = 30


@dataclass(frozen=True, slots=True)
class Scores:
    pricing: int
    service: int
    cleanliness: int

    def validate(self) -> None:
        for label, value in (
            ("pricing", self.pricing),
            ("service", self.service),
            ("cleanliness", self.cleanliness),
        ):
            # bool is an int subclass; a checkbox value is not a score
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{label} score must be an integer", field=label)
            if not MIN_SCORE <= value <= MAX_SCORE:
                raise ValidationError(
                    f"{label} score must be between {MIN_SCORE} and {MAX_SCORE}",
                    field=label,
                )


def validate_body(body: str | None) -> str:
    text = (body or "").strip()
    if len(text) < MIN_BODY_LENGTH:
        raise ValidationError(
            f"Please write at least {MIN_BODY_LENGTH} characters.", field="body"
        )
    return text


@dataclass(eq=False, kw_only=True)
class Review(TimestampedEntity):
    provider_id: UUID
    author_id: UUID
    pricing_score: int
    service_score: int
    cleanliness_score: int
    body: str
    anonymous: bool = True

    @property
    def scores(self) -> Scores:
        return Scores(
            pricing=self.pricing_score,
            service=self.service_score,
            cleanliness=self.cleanliness_score,
        )
