"""Payment collaborator configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var, require_env_var

DEFAULT_SITE_URL: Final[str] = "http://localhost:3000"
STRIPE_API_BASE_URL: Final[str] = "https://api.stripe.com"


@dataclass(frozen=True, slots=True)
class PaymentsConfig:
    secret_key: str
    site_url: str = DEFAULT_SITE_URL
    currency: str = "usd"
    api_base_url: str = STRIPE_API_BASE_URL

    @property
    def success_url(self) -> str:
        return f"{self.site_url.rstrip('/')}/help?paid=1"

    @property
    def cancel_url(self) -> str:
        return f"{self.site_url.rstrip('/')}/resolve?canceled=1"

    @classmethod
    def from_environment(cls) -> PaymentsConfig:
        return cls(
            secret_key=require_env_var("STRIPE_SECRET_KEY"),
            site_url=optional_env_var("WHODID_SITE_URL") or DEFAULT_SITE_URL,
        )


def get_payments_config() -> PaymentsConfig:
    return PaymentsConfig.from_environment()
