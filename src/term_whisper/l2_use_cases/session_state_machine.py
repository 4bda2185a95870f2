"""Use case: guard SessionState transitions and publish every accepted state."""

from __future__ import annotations

import logging
from collections.abc import Callable

from term_whisper.l1_entities.errors import InvalidTransitionError
from term_whisper.l1_entities.session_state import (
    REFRESHABLE_STATUSES,
    SUCCESS_TRANSITIONS,
    TERMINAL_STATUSES,
    Idle,
    SessionState,
    SessionStatus,
)

log = logging.getLogger('tw.session')


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    """Whether *current* may move to *target*."""
    if current in TERMINAL_STATUSES:
        return False
    if target is SessionStatus.ERROR:
        return True
    if current is target:
        return current in REFRESHABLE_STATUSES
    return SUCCESS_TRANSITIONS.get(current) is target


class SessionStateMachine:
    """Single owner of the current SessionState.

    Only the session driver calls ``transition()``; listeners receive the new
    (immutable) snapshot after each accepted transition.
    """

    def __init__(self, on_change: Callable[[SessionState], None] | None = None) -> None:
        self._state: SessionState = Idle()
        self._on_change = on_change

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def is_terminal(self) -> bool:
        return self._state.status in TERMINAL_STATUSES

    def transition(self, new_state: SessionState) -> None:
        current = self._state.status
        if not can_transition(current, new_state.status):
            raise InvalidTransitionError(f'Cannot move from {current.value} to {new_state.status.value}')
        if current is not new_state.status:
            log.debug('Session %s -> %s', current.value, new_state.status.value)
        self._state = new_state
        if self._on_change is not None:
            self._on_change(new_state)
