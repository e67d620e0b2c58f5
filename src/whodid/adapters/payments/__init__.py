"""Payment collaborator adapters."""

from __future__ import annotations

from .client import StripeCheckoutGateway, build_checkout_form
from .schema import CheckoutSession, StripeErrorResponse

__all__ = [
    "CheckoutSession",
    "StripeCheckoutGateway",
    "StripeErrorResponse",
    "build_checkout_form",
]
