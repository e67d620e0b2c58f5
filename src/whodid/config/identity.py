"""Identity collaborator configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars


@dataclass(frozen=True, slots=True)
class IdentityConfig:
    """Holds the auth service endpoint used to resolve the calling principal."""

    auth_url: str
    api_key: str

    @classmethod
    def from_environment(cls) -> IdentityConfig:
        values = require_env_vars(("WHODID_AUTH_URL", "WHODID_AUTH_API_KEY"))
        return cls(
            auth_url=values["WHODID_AUTH_URL"].rstrip("/"),
            api_key=values["WHODID_AUTH_API_KEY"],
        )


def get_identity_config() -> IdentityConfig:
    return IdentityConfig.from_environment()
