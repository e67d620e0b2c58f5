"""Paid "resolve an issue" checkout."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from whodid.domain.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from whodid.domain.model import Principal
    from whodid.domain.ports import PaymentGateway
    from whodid.domain.providers import ProviderRegistry

log = logging.getLogger(__name__)

MIN_AMOUNT_CENTS: Final[int] = 50
CHECKOUT_SOURCE: Final[str] = "resolve_checkout"


@dataclass(frozen=True, slots=True)
class ResolutionOption:
    label: str
    price_cents: int


DEFAULT_OPTIONS: Final[tuple[ResolutionOption, ...]] = (
    ResolutionOption("Refund", 499),
    ResolutionOption("Fix/Redo", 499),
    ResolutionOption("Report service provider", 499),
    ResolutionOption("Civil suit steps", 1000),
)


class ResolutionCheckout:
    def __init__(
        self,
        gateway: PaymentGateway,
        registry: ProviderRegistry,
        options: Sequence[ResolutionOption] = DEFAULT_OPTIONS,
    ) -> None:
        self._gateway = gateway
        self._registry = registry
        self._options = tuple(options)

    def options(self) -> tuple[ResolutionOption, ...]:
        return self._options

    def start(
        self,
        option_label: str,
        provider_id: UUID | None = None,
        customer_email: str | None = None,
        customer_name: str | None = None,
        principal: Principal | None = None,
    ) -> str:
        """Create a payment for the chosen option and return the redirect URL."""

        option = self._find(option_label)
        if option.price_cents < MIN_AMOUNT_CENTS:
            raise ValidationError(
                f"Amount must be at least {MIN_AMOUNT_CENTS} cents.", field="amount"
            )

        service = ""
        if provider_id is not None:
            service = self._registry.get(provider_id).service or ""

        email = (customer_email or "").strip() or (principal.email if principal else None)
        metadata = {
            "providerId": str(provider_id) if provider_id is not None else "",
            "service": service,
            "customerName": (customer_name or "").strip(),
            "source": CHECKOUT_SOURCE,
        }
        url = self._gateway.create_payment_redirect(
            option.price_cents,
            f"Resolve: {option.label}",
            metadata,
            customer_email=email or None,
        )
        log.info("Started %r checkout for provider %s", option.label, provider_id)
        return url

    def _find(self, label: str) -> ResolutionOption:
        wanted = (label or "").strip()
        for option in self._options:
            if option.label == wanted:
                return option
        raise ValidationError(f"Unknown resolution option: {label!r}", field="option")
