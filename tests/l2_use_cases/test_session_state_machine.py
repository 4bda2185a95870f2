"""Tests for SessionStateMachine transitions."""

from __future__ import annotations

import pytest

from term_whisper.l1_entities.errors import InvalidTransitionError
from term_whisper.l1_entities.session_state import (
    Completed,
    Error,
    LoadingAudio,
    LoadingModel,
    SessionStatus,
    Transcribing,
)
from term_whisper.l1_entities.transcript import TranscriptionResult
from term_whisper.l2_use_cases.session_state_machine import SessionStateMachine, can_transition

_DONE = Completed(result=TranscriptionResult(text='ok'), elapsed=0.5)


class TestCanTransition:
    @pytest.mark.parametrize(
        ('current', 'target'),
        [
            (SessionStatus.IDLE, SessionStatus.LOADING_MODEL),
            (SessionStatus.LOADING_MODEL, SessionStatus.LOADING_AUDIO),
            (SessionStatus.LOADING_AUDIO, SessionStatus.TRANSCRIBING),
            (SessionStatus.TRANSCRIBING, SessionStatus.COMPLETED),
        ],
    )
    def test_forward_edges(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        'current',
        [
            SessionStatus.IDLE,
            SessionStatus.LOADING_MODEL,
            SessionStatus.LOADING_AUDIO,
            SessionStatus.TRANSCRIBING,
        ],
    )
    def test_error_reachable_from_non_terminal(self, current):
        assert can_transition(current, SessionStatus.ERROR)

    @pytest.mark.parametrize('current', [SessionStatus.COMPLETED, SessionStatus.ERROR])
    def test_terminal_states_are_final(self, current):
        for target in SessionStatus:
            assert not can_transition(current, target)

    def test_no_skipping_phases(self):
        assert not can_transition(SessionStatus.IDLE, SessionStatus.TRANSCRIBING)
        assert not can_transition(SessionStatus.LOADING_MODEL, SessionStatus.COMPLETED)

    def test_no_going_back(self):
        assert not can_transition(SessionStatus.LOADING_AUDIO, SessionStatus.LOADING_MODEL)

    def test_loading_statuses_refresh_in_place(self):
        assert can_transition(SessionStatus.LOADING_MODEL, SessionStatus.LOADING_MODEL)
        assert can_transition(SessionStatus.LOADING_AUDIO, SessionStatus.LOADING_AUDIO)
        assert not can_transition(SessionStatus.TRANSCRIBING, SessionStatus.TRANSCRIBING)


class TestSessionStateMachine:
    def test_starts_idle(self):
        machine = SessionStateMachine()
        assert machine.status is SessionStatus.IDLE
        assert not machine.is_terminal

    def test_full_happy_path_notifies_each_state(self):
        seen = []
        machine = SessionStateMachine(on_change=seen.append)

        machine.transition(LoadingModel())
        machine.transition(LoadingModel(detail='Downloading: config 50%'))
        machine.transition(LoadingAudio())
        machine.transition(Transcribing(start_time=1.0))
        machine.transition(_DONE)

        assert [s.status for s in seen] == [
            SessionStatus.LOADING_MODEL,
            SessionStatus.LOADING_MODEL,
            SessionStatus.LOADING_AUDIO,
            SessionStatus.TRANSCRIBING,
            SessionStatus.COMPLETED,
        ]
        assert machine.is_terminal
        assert machine.state is _DONE

    def test_illegal_transition_raises_and_keeps_state(self):
        seen = []
        machine = SessionStateMachine(on_change=seen.append)

        with pytest.raises(InvalidTransitionError):
            machine.transition(Transcribing(start_time=0.0))

        assert machine.status is SessionStatus.IDLE
        assert seen == []

    def test_error_is_final(self):
        machine = SessionStateMachine()
        machine.transition(LoadingModel())
        machine.transition(Error(message='boom'))

        with pytest.raises(InvalidTransitionError):
            machine.transition(LoadingAudio())
        assert machine.state.message == 'boom'
