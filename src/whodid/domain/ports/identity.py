"""Port for the identity collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from whodid.domain.model import Principal


@runtime_checkable
class IdentityProvider(Protocol):
    """Resolves the principal behind the current request, if any."""

    def get_current_principal(self) -> Principal | None: ...
