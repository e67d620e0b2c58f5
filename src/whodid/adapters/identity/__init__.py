"""Identity collaborator adapters."""

from __future__ import annotations

from .client import HttpIdentityProvider
from .schema import AuthError, AuthUser
from .static import StaticIdentityProvider

__all__ = ["AuthError", "AuthUser", "HttpIdentityProvider", "StaticIdentityProvider"]
