"""Error panel — highlighted terminal failure message."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static


class ErrorPanel(Static):
    """Double red border; replaces the progress panel once a run fails."""

    DEFAULT_CSS = """
    ErrorPanel {
        height: auto;
        border: double $error;
        padding: 1;
        display: none;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__('', **kwargs)
        self.message = ''

    def show_error(self, message: str) -> None:
        self.message = message
        self.update(Text(f'Error: {message}', style='bold red'))
        self.display = True
