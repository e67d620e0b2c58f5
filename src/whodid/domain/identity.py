"""Identity resolution and fail-closed admin checks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whodid.domain.errors import Forbidden, StorageError, Unauthenticated
from whodid.domain.retry import ReadRetryPolicy, retrying_read

if TYPE_CHECKING:
    from whodid.domain.model import Principal, Profile
    from whodid.domain.ports import IdentityProvider, UnitOfWorkFactory

log = logging.getLogger(__name__)


class IdentityResolver:
    """Answers "who is calling" and "may they moderate".

    Profiles are read-only here. A profile read that still fails after its
    retries counts as "not an admin".
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        unit_of_work_factory: UnitOfWorkFactory,
        *,
        read_retry: ReadRetryPolicy | None = None,
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = unit_of_work_factory
        self._read_retry = read_retry or ReadRetryPolicy()

    def current_principal(self) -> Principal | None:
        return self._identity_provider.get_current_principal()

    def is_admin(self, principal: Principal | None) -> bool:
        if principal is None:
            return False

        def load() -> Profile | None:
            with self._uow_factory() as uow:
                return uow.repositories.profiles.get(principal.id)

        try:
            profile = retrying_read(
                load, policy=self._read_retry, description=f"profile {principal.id}"
            )
        # RuntimeError covers a storage adapter that was never started
        except (StorageError, RuntimeError) as exc:
            log.warning(
                "Profile lookup failed for %s; treating as non-admin: %s", principal.id, exc
            )
            return False
        if profile is None:
            return False
        return profile.grants_admin

    def require_admin(self, principal: Principal | None) -> Principal:
        """Return ``principal`` if it may moderate, else raise."""

        if principal is None:
            raise Unauthenticated("You must be signed in to moderate.")
        if not self.is_admin(principal):
            raise Forbidden("This action is restricted to administrators.")
        return principal
