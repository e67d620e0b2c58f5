"""Bounded retry for idempotent storage reads."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from whodid.domain.errors import StorageError

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReadRetryPolicy:
    attempts: int = 2
    backoff_seconds: float = 0.05

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("ReadRetryPolicy.attempts must be at least 1")


def retrying_read[T](
    operation: Callable[[], T],
    *,
    policy: ReadRetryPolicy,
    description: str,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run a read-only ``operation``, retrying on ``StorageError``.

    Only reads go through here. Mutations are retried by callers, and only where
    a conditional update makes the retry harmless.
    """

    attempt = 1
    while True:
        try:
            return operation()
        except StorageError as exc:
            if attempt >= policy.attempts:
                raise
            delay = policy.backoff_seconds * (2 ** (attempt - 1))
            log.warning(
                "%s failed (attempt %s/%s), retrying in %.2fs: %s",
                description,
                attempt,
                policy.attempts,
                delay,
                exc,
            )
            sleep(delay)
            attempt += 1
