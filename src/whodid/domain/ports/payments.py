"""Port for the payment collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class PaymentGateway(Protocol):
    """Opaque payment service: create a payment intent, return a redirect URL."""

    def create_payment_redirect(
        self,
        amount_cents: int,
        description: str,
        metadata: Mapping[str, str],
        *,
        customer_email: str | None = None,
    ) -> str: ...
