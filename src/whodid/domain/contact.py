"""Contact triage queue for inbound support messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whodid.domain.errors import InvalidTransition, NotFound, ValidationError
from whodid.domain.model import ContactMessage, MessageStatus, QueueOrder, can_transition, utcnow
from whodid.domain.retry import ReadRetryPolicy, retrying_read

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime
    from uuid import UUID

    from whodid.domain.identity import IdentityResolver
    from whodid.domain.model import Principal
    from whodid.domain.ports import UnitOfWorkFactory

log = logging.getLogger(__name__)


def _blank_to_none(value: str | None) -> str | None:
    stripped = (value or "").strip()
    return stripped or None


class ContactTriageQueue:
    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        identity: IdentityResolver,
        *,
        order: QueueOrder = QueueOrder.OLDEST_FIRST,
        clock: Callable[[], datetime] = utcnow,
        read_retry: ReadRetryPolicy | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._identity = identity
        self._order = order
        self._clock = clock
        self._read_retry = read_retry or ReadRetryPolicy()

    @property
    def order(self) -> QueueOrder:
        return self._order

    def submit(
        self,
        name: str | None,
        email: str | None,
        body: str | None,
        from_principal: Principal | None = None,
    ) -> UUID:
        text = (body or "").strip()
        if not text:
            raise ValidationError("Please enter a message.", field="body")

        message = ContactMessage(
            body=text,
            name=_blank_to_none(name),
            email=_blank_to_none(email),
            from_principal_id=from_principal.id if from_principal is not None else None,
            created_at=self._clock(),
        )
        with self._uow_factory() as uow:
            uow.repositories.messages.add(message)
            uow.commit()

        log.info("Contact message %s received", message.id)
        return message.id

    def set_status(
        self,
        message_id: UUID,
        new_status: MessageStatus | str,
        acting_admin: Principal | None,
    ) -> None:
        """Move a message along the triage state machine.

        The update is keyed on the status observed here, so a concurrent triage
        of the same message makes this call fail instead of being overwritten.
        """

        admin = self._identity.require_admin(acting_admin)
        try:
            target = MessageStatus(new_status)
        except ValueError as exc:
            raise ValidationError(f"Unknown message status: {new_status!r}", field="status") from exc

        with self._uow_factory() as uow:
            messages = uow.repositories.messages
            message = messages.get(message_id)
            if message is None:
                raise NotFound("message", message_id)
            current = message.status
            if not can_transition(current, target):
                raise InvalidTransition(
                    f"message {message_id} cannot move from {current.value} to {target.value}",
                    current=current.value,
                )
            if not messages.transition(message_id, expected=current, target=target):
                raise InvalidTransition(
                    f"message {message_id} changed status concurrently",
                    current=current.value,
                )
            uow.commit()

        log.info("Message %s %s -> %s by %s", message_id, current.value, target.value, admin.id)

    def list_open(self) -> Sequence[ContactMessage]:
        def load() -> Sequence[ContactMessage]:
            with self._uow_factory() as uow:
                return uow.repositories.messages.list_open(order=self._order)

        return retrying_read(load, policy=self._read_retry, description="open messages")
