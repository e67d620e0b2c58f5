"""Application configuration helpers."""

from __future__ import annotations

from .env import int_env_var, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .identity import IdentityConfig, get_identity_config
from .logging import configure_logging
from .moderation import ModerationConfig, get_moderation_config
from .payments import PaymentsConfig, get_payments_config
from .storage import DatabaseConfig, data_dir, get_database_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "IdentityConfig",
    "MissingConfigurationError",
    "ModerationConfig",
    "PaymentsConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "data_dir",
    "get_database_config",
    "get_identity_config",
    "get_moderation_config",
    "get_payments_config",
    "int_env_var",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
