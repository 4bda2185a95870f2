"""Progress panel — one status row each for the model, audio and transcription phases."""

from __future__ import annotations

from typing import Literal, NamedTuple

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widgets import Static

from term_whisper.l1_entities.progress import short_name
from term_whisper.l1_entities.session_state import (
    Completed,
    LoadingAudio,
    LoadingModel,
    SessionState,
    SessionStatus,
    Transcribing,
)

RowStatus = Literal['pending', 'loading', 'done']

_SPINNER_FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏'
_NAME_WIDTH = 15
_LABEL_WIDTH = 15


class RowState(NamedTuple):
    status: RowStatus
    detail: str = ''
    active: bool = False


def _short_label(file: str) -> str:
    name = short_name(file)
    return name[:_NAME_WIDTH] + '...' if len(name) > _NAME_WIDTH else name


def model_row(state: SessionState) -> RowState:
    if isinstance(state, LoadingModel):
        if state.progress:
            detail = ' | '.join(f'{_short_label(p.file)} ({p.percent:.0f}%)' for p in state.progress)
        else:
            detail = 'Initializing...'
        return RowState('loading', detail, active=True)
    if state.status in (SessionStatus.IDLE, SessionStatus.ERROR):
        return RowState('pending')
    return RowState('done', 'Ready')


def audio_row(state: SessionState) -> RowState:
    if isinstance(state, LoadingAudio):
        return RowState('loading', state.message, active=True)
    if isinstance(state, Transcribing | Completed):
        return RowState('done', 'Loaded (16kHz Mono)')
    return RowState('pending')


def transcribe_row(state: SessionState) -> RowState:
    if isinstance(state, Transcribing):
        return RowState('loading', 'Processing...', active=True)
    if isinstance(state, Completed):
        return RowState('done', f'Completed in {state.duration}s')
    return RowState('pending')


class StatusRow(Static):
    """Icon, label and detail for one pipeline phase."""

    DEFAULT_CSS = """
    StatusRow {
        height: 1;
    }
    """

    row: reactive[RowState] = reactive(RowState('pending'))

    def __init__(self, label: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.label = label
        self._frame = 0

    def on_mount(self) -> None:
        self.set_interval(0.08, self._tick)

    def _tick(self) -> None:
        if self.row.status == 'loading':
            self._frame = (self._frame + 1) % len(_SPINNER_FRAMES)
            self.refresh()

    def render(self) -> Text:
        status, detail, active = self.row
        if status == 'loading':
            icon, color = _SPINNER_FRAMES[self._frame], 'yellow'
        elif status == 'done':
            icon, color = '✔', 'green'
        else:
            icon, color = '○', 'grey50'

        text = Text()
        text.append(f'{icon:<2} ', style=color)
        text.append(f'{self.label:<{_LABEL_WIDTH}}', style=f'bold {color}' if active else color)
        if detail:
            text.append(' ' + detail, style='white' if active else 'grey50')
        return text


class ProgressPanel(Vertical):
    """Bordered panel of the three status rows."""

    DEFAULT_CSS = """
    ProgressPanel {
        height: auto;
        border: round $accent;
        padding: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield StatusRow('Model', id='row-model')
        yield StatusRow('Audio', id='row-audio')
        yield StatusRow('Transcribe', id='row-transcribe')

    def update_state(self, state: SessionState) -> None:
        self.query_one('#row-model', StatusRow).row = model_row(state)
        self.query_one('#row-audio', StatusRow).row = audio_row(state)
        self.query_one('#row-transcribe', StatusRow).row = transcribe_row(state)
