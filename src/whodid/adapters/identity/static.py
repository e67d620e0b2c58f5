"""Fixed-principal identity provider for the CLI and tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from whodid.domain.model import Principal


@dataclass(frozen=True, slots=True)
class StaticIdentityProvider:
    principal: Principal | None = None

    def get_current_principal(self) -> Principal | None:
        return self.principal
