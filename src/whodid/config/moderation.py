"""Moderation queue and read-retry settings."""

from __future__ import annotations

from dataclasses import dataclass

from whodid.domain.model.enums import QueueOrder

from .env import int_env_var, optional_env_var
from .errors import ConfigurationError

DEFAULT_READ_RETRY_ATTEMPTS = 2
DEFAULT_READ_RETRY_BACKOFF_SECONDS = 0.05


@dataclass(frozen=True, slots=True)
class ModerationConfig:
    contact_queue_order: QueueOrder = QueueOrder.OLDEST_FIRST
    read_retry_attempts: int = DEFAULT_READ_RETRY_ATTEMPTS
    read_retry_backoff_seconds: float = DEFAULT_READ_RETRY_BACKOFF_SECONDS


def get_moderation_config() -> ModerationConfig:
    raw_order = optional_env_var("WHODID_CONTACT_QUEUE_ORDER")
    try:
        order = QueueOrder(raw_order.lower()) if raw_order else QueueOrder.OLDEST_FIRST
    except ValueError as exc:
        allowed = ", ".join(member.value for member in QueueOrder)
        raise ConfigurationError(
            f"WHODID_CONTACT_QUEUE_ORDER must be one of: {allowed}"
        ) from exc

    attempts = int_env_var("WHODID_READ_RETRY_ATTEMPTS", DEFAULT_READ_RETRY_ATTEMPTS)
    if attempts < 1:
        raise ConfigurationError("WHODID_READ_RETRY_ATTEMPTS must be at least 1")

    return ModerationConfig(contact_queue_order=order, read_retry_attempts=attempts)
