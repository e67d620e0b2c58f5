"""HTTP client resolving the calling principal from an auth service."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError as PydanticValidationError

from whodid.adapters.http_resilience import ResilientClient
from whodid.config.http_resilience import ResilienceConfig
from whodid.config.identity import IdentityConfig
from whodid.domain.errors import CollaboratorError
from whodid.domain.model import Principal

from .schema import AuthError, AuthUser

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS: Final[float] = 5.0
_UNAUTHENTICATED_STATUSES: Final[frozenset[int]] = frozenset({401, 403})


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpIdentityProvider:
    """Resolve ``access_token`` to a principal via ``GET <auth_url>/user``.

    A missing, expired or rejected token yields ``None``; transport failures and
    malformed payloads raise ``CollaboratorError`` so they are never mistaken for
    an anonymous caller that could be allowed through.
    """

    access_token: str | None
    config: IdentityConfig = field(default_factory=IdentityConfig.from_environment)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def get_current_principal(self) -> Principal | None:
        if not self.access_token:
            return None

        resilience = ResilienceConfig(
            name="identity",
            base_url=self.config.auth_url,
            timeout_seconds=_DEFAULT_TIMEOUT_SECONDS,
            default_headers={"apikey": self.config.api_key},
        )
        try:
            with self.client_factory(resilience) as client:
                response = client.get(
                    "/user", headers={"Authorization": f"Bearer {self.access_token}"}
                )
        except httpx.HTTPError as exc:
            raise CollaboratorError(f"identity lookup failed: {exc}") from exc

        if response.status_code in _UNAUTHENTICATED_STATUSES:
            log.info("Auth service rejected token (status=%s)", response.status_code)
            return None
        if response.is_error:
            detail = _error_text(response)
            raise CollaboratorError(
                f"identity lookup failed with status {response.status_code}: {detail}"
            )

        try:
            user = AuthUser.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise CollaboratorError("unexpected auth service payload") from exc
        return Principal(id=user.id, email=user.email)


def _error_text(response: httpx.Response) -> str:
    try:
        return AuthError.model_validate(response.json()).text
    except (ValueError, PydanticValidationError):
        return response.text[:200]


if TYPE_CHECKING:
    from whodid.domain.ports.identity import IdentityProvider

    _provider_check: IdentityProvider = HttpIdentityProvider(access_token=None)
