from __future__ import annotations

import pytest

from whodid.domain.errors import ValidationError
from whodid.domain.model import MIN_BODY_LENGTH, Scores, validate_body


def test_body_must_reach_minimum_after_trimming() -> None:
    with pytest.raises(ValidationError):
        validate_body("x" * (MIN_BODY_LENGTH - 1))
    with pytest.raises(ValidationError):
        validate_body("   " + "x" * (MIN_BODY_LENGTH - 1) + "   ")

    assert validate_body("  " + "x" * MIN_BODY_LENGTH + "  ") == "x" * MIN_BODY_LENGTH


def test_missing_body_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_body(None)

    assert excinfo.value.field == "body"


@pytest.mark.parametrize("value", [1, 5])
def test_scores_accept_bounds(value: int) -> None:
    Scores(pricing=value, service=value, cleanliness=value).validate()


@pytest.mark.parametrize("value", [0, 6, -1])
def test_scores_reject_out_of_range(value: int) -> None:
    with pytest.raises(ValidationError) as excinfo:
        Scores(pricing=3, service=value, cleanliness=3).validate()

    assert excinfo.value.field == "service"


@pytest.mark.parametrize("value", [True, 3.0, "3", None])
def test_scores_reject_non_integers(value: object) -> None:
    scores = Scores(pricing=3, service=3, cleanliness=value)  # type: ignore[arg-type]

    with pytest.raises(ValidationError) as excinfo:
        scores.validate()

    assert excinfo.value.field == "cleanliness"
