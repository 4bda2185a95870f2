"""Transcription session state — a closed, discriminated union of frozen variants."""

from __future__ import annotations

import enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from term_whisper.l1_entities.progress import ProgressItem
from term_whisper.l1_entities.transcript import TranscriptionResult

UNKNOWN_ERROR = 'Unknown error occurred'


class SessionStatus(enum.Enum):
    IDLE = 'idle'
    LOADING_MODEL = 'loading_model'
    LOADING_AUDIO = 'loading_audio'
    TRANSCRIBING = 'transcribing'
    COMPLETED = 'completed'
    ERROR = 'error'


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)


class Idle(_State):
    status: Literal[SessionStatus.IDLE] = SessionStatus.IDLE


class LoadingModel(_State):
    status: Literal[SessionStatus.LOADING_MODEL] = SessionStatus.LOADING_MODEL
    progress: tuple[ProgressItem, ...] = ()
    detail: str = 'Initializing model pipeline...'


class LoadingAudio(_State):
    status: Literal[SessionStatus.LOADING_AUDIO] = SessionStatus.LOADING_AUDIO
    message: str = 'Loading...'


class Transcribing(_State):
    status: Literal[SessionStatus.TRANSCRIBING] = SessionStatus.TRANSCRIBING
    start_time: float


class Completed(_State):
    status: Literal[SessionStatus.COMPLETED] = SessionStatus.COMPLETED
    result: TranscriptionResult
    elapsed: float = Field(description='Inference wall time in seconds, rounded to two decimals')

    @property
    def duration(self) -> str:
        return f'{self.elapsed:.2f}'


class Error(_State):
    status: Literal[SessionStatus.ERROR] = SessionStatus.ERROR
    message: str = UNKNOWN_ERROR
    kind: str = ''


SessionState = Annotated[
    Idle | LoadingModel | LoadingAudio | Transcribing | Completed | Error,
    Field(discriminator='status'),
]

TERMINAL_STATUSES = frozenset({SessionStatus.COMPLETED, SessionStatus.ERROR})

# Forward edges only; ERROR is reachable from every non-terminal status.
SUCCESS_TRANSITIONS: dict[SessionStatus, SessionStatus] = {
    SessionStatus.IDLE: SessionStatus.LOADING_MODEL,
    SessionStatus.LOADING_MODEL: SessionStatus.LOADING_AUDIO,
    SessionStatus.LOADING_AUDIO: SessionStatus.TRANSCRIBING,
    SessionStatus.TRANSCRIBING: SessionStatus.COMPLETED,
}

# Statuses whose payload may be refreshed without leaving the status.
REFRESHABLE_STATUSES = frozenset({SessionStatus.LOADING_MODEL, SessionStatus.LOADING_AUDIO})
