"""Stripe Checkout gateway: create a payment session, return its redirect URL."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError as PydanticValidationError

from whodid.adapters.http_resilience import ResilientClient
from whodid.config.http_resilience import ResilienceConfig
from whodid.config.payments import PaymentsConfig
from whodid.domain.errors import CollaboratorError

from .schema import CheckoutSession, StripeErrorResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

log = getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS: Final[float] = 20.0
CHECKOUT_SESSIONS_PATH: Final[str] = "/v1/checkout/sessions"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def build_checkout_form(
    *,
    amount_cents: int,
    description: str,
    metadata: Mapping[str, str],
    config: PaymentsConfig,
    customer_email: str | None = None,
) -> dict[str, str]:
    """Flatten a one-item payment session into Stripe's bracketed form encoding."""

    form: dict[str, str] = {
        "mode": "payment",
        "payment_method_types[0]": "card",
        "line_items[0][quantity]": "1",
        "line_items[0][price_data][currency]": config.currency,
        "line_items[0][price_data][unit_amount]": str(amount_cents),
        "line_items[0][price_data][product_data][name]": description,
        "success_url": config.success_url,
        "cancel_url": config.cancel_url,
    }
    if "providerId" in metadata:
        form["line_items[0][price_data][product_data][metadata][providerId]"] = metadata[
            "providerId"
        ]
    for key, value in metadata.items():
        form[f"metadata[{key}]"] = value
    if customer_email:
        form["customer_email"] = customer_email
    return form


@dataclass(slots=True)
class StripeCheckoutGateway:
    config: PaymentsConfig = field(default_factory=PaymentsConfig.from_environment)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def create_payment_redirect(
        self,
        amount_cents: int,
        description: str,
        metadata: Mapping[str, str],
        *,
        customer_email: str | None = None,
    ) -> str:
        form = build_checkout_form(
            amount_cents=amount_cents,
            description=description,
            metadata=metadata,
            config=self.config,
            customer_email=customer_email,
        )
        resilience = ResilienceConfig(
            name="stripe",
            base_url=self.config.api_base_url,
            timeout_seconds=_DEFAULT_TIMEOUT_SECONDS,
            default_headers={"Authorization": f"Bearer {self.config.secret_key}"},
        )
        try:
            with self.client_factory(resilience) as client:
                response = client.post(CHECKOUT_SESSIONS_PATH, data=form)
        except httpx.HTTPError as exc:
            raise CollaboratorError(f"payment session request failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            log.error("Stripe error %s: %s", response.status_code, message)
            raise CollaboratorError(f"payment session rejected: {message}")

        try:
            session = CheckoutSession.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise CollaboratorError("unexpected payment session payload") from exc
        if not session.url:
            raise CollaboratorError(f"payment session {session.id} has no redirect url")

        log.info("Created checkout session %s for %s cents", session.id, amount_cents)
        return session.url


def _error_message(response: httpx.Response) -> str:
    try:
        return StripeErrorResponse.model_validate(response.json()).error.message or "Stripe error"
    except (ValueError, PydanticValidationError):
        return response.text[:200] or "Stripe error"


if TYPE_CHECKING:
    from whodid.domain.ports.payments import PaymentGateway

    _gateway_check: PaymentGateway = StripeCheckoutGateway()
