"""Textual Message subclasses — contracts between the session worker and the App."""

from __future__ import annotations

from textual.message import Message

from term_whisper.l1_entities.session_state import SessionState


class SessionStateChanged(Message):
    """Posted by the session worker after every accepted state change."""

    def __init__(self, state: SessionState) -> None:
        super().__init__()
        self.state = state
