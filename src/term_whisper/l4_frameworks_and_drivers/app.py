"""TranscriberApp — interactive TUI for one transcription run."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from term_whisper.l1_entities.session_state import Completed, Error, Idle, SessionState
from term_whisper.l3_interface_adapters.gateways.paths import LOG_DIR
from term_whisper.l4_frameworks_and_drivers.container import DependencyContainer
from term_whisper.l4_frameworks_and_drivers.logging_setup import setup_file_logging
from term_whisper.l4_frameworks_and_drivers.messages import SessionStateChanged
from term_whisper.l4_frameworks_and_drivers.widgets.error_panel import ErrorPanel
from term_whisper.l4_frameworks_and_drivers.widgets.progress_panel import ProgressPanel
from term_whisper.l4_frameworks_and_drivers.widgets.transcript_panel import TranscriptPanel

log = logging.getLogger('tw.app')


class TranscriberApp(TextualApp):
    """Header, source line, progress rows, then the transcript or an error panel.

    The run never exits the app on its own; the result stays on screen until quit.
    """

    CSS = """
    Screen {
        padding: 1;
    }
    #header {
        width: 100%;
        content-align: center middle;
        margin-bottom: 1;
    }
    #source {
        margin-bottom: 1;
    }
    #transcript-panel {
        display: none;
        margin-top: 1;
    }
    #hints {
        dock: bottom;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding('q', 'quit', 'Quit', priority=True),
    ]

    def __init__(
        self,
        source: str,
        container: DependencyContainer,
        log_dir: Path = LOG_DIR,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._source = source
        self._container = container
        self.session_state: SessionState = Idle()

        setup_file_logging(log_dir)

    def compose(self) -> ComposeResult:
        yield Static(Text('Term Whisper', style='bold magenta'), id='header')
        yield Static(Text.assemble('Source: ', (self._source, 'cyan')), id='source')
        yield ProgressPanel(id='progress-panel')
        yield ErrorPanel(id='error-panel')
        yield TranscriptPanel(id='transcript-panel')
        yield Static(r'\[c] copy transcript  \[q] quit', id='hints')

    def on_mount(self) -> None:
        self.query_one('#progress-panel', ProgressPanel).update_state(self.session_state)
        self._start_session()

    def _start_session(self) -> None:  # pragma: no cover -- thin worker launcher; patched out in tests
        self.run_worker(self._run_session(), group='session', exclusive=True)

    async def _run_session(self) -> SessionState:
        session = self._container.session(on_state=self._publish_state)
        log.info('Starting transcription of %s', self._source)
        return await session.run(self._source)

    def _publish_state(self, state: SessionState) -> None:
        self.post_message(SessionStateChanged(state))

    # --- Message Handlers ---

    def on_session_state_changed(self, message: SessionStateChanged) -> None:
        state = message.state
        self.session_state = state

        if isinstance(state, Error):
            self.query_one('#progress-panel', ProgressPanel).display = False
            self.query_one('#error-panel', ErrorPanel).show_error(state.message)
            return

        self.query_one('#progress-panel', ProgressPanel).update_state(state)
        if isinstance(state, Completed):
            panel = self.query_one('#transcript-panel', TranscriptPanel)
            panel.display = True
            panel.show_result(state.result)
            panel.focus()
