"""Batch runner — headless transcription of one source with a one-line spinner status."""

from __future__ import annotations

import asyncio
import logging
from typing import assert_never

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from term_whisper.l1_entities.progress import short_name
from term_whisper.l1_entities.session_state import (
    Completed,
    Error,
    Idle,
    LoadingAudio,
    LoadingModel,
    SessionState,
    SessionStatus,
    Transcribing,
)
from term_whisper.l1_entities.transcript import TranscriptionResult, format_timestamp
from term_whisper.l4_frameworks_and_drivers.container import DependencyContainer

log = logging.getLogger('tw.batch')

_FAILURE_LABELS = {
    SessionStatus.LOADING_MODEL: 'Failed to load model',
    SessionStatus.LOADING_AUDIO: 'Failed to load audio',
    SessionStatus.TRANSCRIBING: 'Transcription failed',
}


def display_name(source: str) -> str:
    """Last path segment of a URL or file path."""
    return source.rstrip('/').rsplit('/', 1)[-1] or source


def model_progress_text(state: LoadingModel) -> Text:
    """Spinner text for the model phase: one coloured entry per in-flight file."""
    if not state.progress:
        return Text(state.detail)
    text = Text('Downloading: ')
    for i, item in enumerate(state.progress):
        if i:
            text.append(' | ', style='dim')
        text.append(short_name(item.file), style='blue')
        text.append(f' {item.percent:.0f}%', style='yellow')
    return text


def print_banner(console: Console) -> None:
    console.print(
        Panel(
            Text(' 🎙️  Term Whisper Transcriber ', style='bold cyan'),
            box=box.ROUNDED,
            border_style='cyan',
            padding=1,
            expand=False,
        )
    )


def print_transcript(console: Console, result: TranscriptionResult) -> None:
    console.print()
    console.print(Text('📜 Full Transcript:', style='bold'))
    console.print(Panel(Text(result.text, style='white'), box=box.ASCII, border_style='grey50', padding=1))

    if result.segments:
        console.print(Text('⏱️  Segments:', style='bold'))
        for seg in result.segments:
            console.print(
                Text.assemble(
                    ('[', 'dim'),
                    (format_timestamp(seg.start), 'yellow'),
                    (' -> ', 'dim'),
                    (format_timestamp(seg.end), 'yellow'),
                    ('] ', 'dim'),
                    seg.text,
                )
            )
    console.print()


class SpinnerRenderer:
    """Renders SessionState snapshots as a rich spinner plus ✔ / ✖ milestone lines."""

    def __init__(self, console: Console, source_name: str) -> None:
        self._console = console
        self._source_name = source_name
        self._status = console.status('Initializing model pipeline...', spinner='dots')
        self._previous: SessionStatus = SessionStatus.IDLE

    def __enter__(self) -> SpinnerRenderer:
        self._status.start()
        return self

    def __exit__(self, *args) -> None:
        self._status.stop()

    def _succeed(self, message: str) -> None:
        self._console.print(Text(f'✔ {message}', style='green'))

    def _fail(self, message: str) -> None:
        self._console.print(Text(f'✖ {message}', style='red'))

    def __call__(self, state: SessionState) -> None:
        previous, self._previous = self._previous, state.status

        if isinstance(state, Idle):
            return
        if isinstance(state, LoadingModel):
            self._status.update(model_progress_text(state))
        elif isinstance(state, LoadingAudio):
            if previous is SessionStatus.LOADING_MODEL:
                self._succeed('Whisper model ready')
            self._status.update(state.message)
        elif isinstance(state, Transcribing):
            self._succeed(f'Audio loaded: {self._source_name} (16kHz Mono)')
            self._status.update('Transcribing (Inference)...')
        elif isinstance(state, Completed):
            self._status.stop()
            self._succeed(f'Transcription complete in {state.duration}s')
        elif isinstance(state, Error):
            self._status.stop()
            self._fail(_FAILURE_LABELS.get(previous, 'Transcription failed'))
            self._console.print(Text(f'Error: {state.message}', style='bold red'))
        else:
            assert_never(state)


def run_batch(container: DependencyContainer, source: str, console: Console | None = None) -> TranscriptionResult:
    """Transcribe *source* with spinner feedback. Blocks until done; exits 1 on failure."""
    console = console or Console()
    print_banner(console)

    renderer = SpinnerRenderer(console, display_name(source))
    session = container.session(on_state=renderer)
    with renderer:
        state = asyncio.run(session.run(source))

    if not isinstance(state, Completed):
        log.error('Batch run ended in %s', state.status.value)
        raise SystemExit(1)

    print_transcript(console, state.result)
    return state.result
