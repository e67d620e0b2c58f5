from __future__ import annotations

import pytest

from whodid.domain.model import (
    ALLOWED_MESSAGE_TRANSITIONS,
    OPEN_MESSAGE_STATUSES,
    MessageStatus,
    can_transition,
)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (MessageStatus.NEW, MessageStatus.READ),
        (MessageStatus.NEW, MessageStatus.ESCALATED),
        (MessageStatus.NEW, MessageStatus.CLOSED),
        (MessageStatus.NEW, MessageStatus.ARCHIVED),
        (MessageStatus.READ, MessageStatus.ESCALATED),
        (MessageStatus.READ, MessageStatus.CLOSED),
        (MessageStatus.ESCALATED, MessageStatus.READ),
        (MessageStatus.ESCALATED, MessageStatus.ARCHIVED),
    ],
)
def test_legal_transitions(current: MessageStatus, target: MessageStatus) -> None:
    assert can_transition(current, target)


def test_nothing_returns_to_new_or_stays_put() -> None:
    for status in MessageStatus:
        assert not can_transition(status, MessageStatus.NEW)
        assert not can_transition(status, status)


def test_terminal_states_have_no_exits() -> None:
    for status in (MessageStatus.CLOSED, MessageStatus.ARCHIVED):
        assert status.is_terminal
        assert not ALLOWED_MESSAGE_TRANSITIONS[status]


def test_open_super_state() -> None:
    assert {status for status in MessageStatus if status.is_open} == OPEN_MESSAGE_STATUSES
