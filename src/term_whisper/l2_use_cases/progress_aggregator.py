"""Use case: fold per-file model download events into one throttled summary."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from types import MappingProxyType

from term_whisper.l1_entities.progress import (
    ProgressEvent,
    ProgressItem,
    ProgressPhase,
    ProgressSummary,
    short_name,
)

RENDER_THROTTLE = 0.1  # seconds between progress-driven renders
INITIALIZING_TEXT = 'Loading model components...'


class ProgressAggregator:
    """Tracks in-flight files → percent and decides when a render is due.

    Does NO rendering itself. ``on_event()`` mutates the table and answers
    "should the display refresh now?"; ``render()`` builds the summary.
    State transitions (initiate / done) always render; bursts of progress
    updates render at most once per ``throttle`` seconds.
    """

    def __init__(
        self,
        throttle: float = RENDER_THROTTLE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._throttle = throttle
        self._clock = clock
        self._table: dict[str, float] = {}
        self._last_render: float | None = None
        self._last_event: ProgressEvent | None = None

    @property
    def table(self) -> Mapping[str, float]:
        return MappingProxyType(self._table)

    @property
    def is_idle(self) -> bool:
        """True when no file is currently downloading."""
        return not self._table

    def on_event(self, event: ProgressEvent) -> bool:
        """Apply *event* to the table. Returns True if a visible render is due."""
        if event.phase is ProgressPhase.INITIATE:
            self._table.setdefault(event.file, 0.0)
        elif event.phase is ProgressPhase.PROGRESS:
            self._table[event.file] = event.percent if event.percent is not None else 0.0
        else:
            self._table.pop(event.file, None)
        self._last_event = event

        now = self._clock()
        if event.phase is not ProgressPhase.PROGRESS or self._throttle_elapsed(now):
            self._last_render = now
            return True
        return False

    def _throttle_elapsed(self, now: float) -> bool:
        return self._last_render is None or now - self._last_render >= self._throttle

    def items(self) -> tuple[ProgressItem, ...]:
        return tuple(ProgressItem(file=f, percent=p) for f, p in self._table.items())

    def render(self) -> ProgressSummary:
        if not self.is_idle:
            items = self.items()
            parts = [f'{short_name(item.file)} {item.percent:.0f}%' for item in items]
            return ProgressSummary(text='Downloading: ' + ' | '.join(parts), items=items)

        last = self._last_event
        if last is not None and last.phase is ProgressPhase.DONE:
            return ProgressSummary(text=f'Loaded {last.file}')
        return ProgressSummary(text=INITIALIZING_TEXT)
