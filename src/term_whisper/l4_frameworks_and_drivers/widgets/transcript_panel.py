"""Transcript panel — full transcript and timestamped segments in a RichLog."""

from __future__ import annotations

import pyperclip
from rich.markup import escape
from textual.binding import Binding
from textual.widgets import RichLog

from term_whisper.l1_entities.transcript import TranscriptionResult


class TranscriptPanel(RichLog):
    """Scrollable transcript display using RichLog."""

    DEFAULT_CSS = """
    TranscriptPanel {
        border: solid $primary;
        scrollbar-size: 1 1;
        height: 1fr;
    }
    TranscriptPanel:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [Binding('c', 'copy_content', 'Copy', show=False)]

    def __init__(self, title: str = 'Transcript', **kwargs) -> None:
        super().__init__(highlight=False, markup=True, wrap=True, auto_scroll=False, **kwargs)
        self.border_title = title
        self._all_text: list[str] = []

    @property
    def plain_text(self) -> str:
        return '\n'.join(self._all_text)

    def show_result(self, result: TranscriptionResult) -> None:
        """Write the full transcript, then one line per segment."""
        self.clear()
        self._all_text = [result.text]
        self.write('[bold underline]Full Transcript:[/]')
        self.write(escape(result.text))

        if result.segments:
            self.write('')
            self.write('[bold underline]Segments:[/]')
            for seg in result.segments:
                self._all_text.append(f'[{seg.time_range}] {seg.text}')
                self.write(f'[dim]\\[{seg.time_range}][/dim] {escape(seg.text)}')

    def action_copy_content(self) -> None:
        """Copy full transcript text to system clipboard."""
        if not self._all_text:
            self.app.notify('No transcript to copy', severity='warning', timeout=2)
            return
        pyperclip.copy(self.plain_text)
        self.app.notify('Transcript copied', timeout=2)
