"""Port: model download and construction."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from term_whisper.l1_entities.progress import ProgressEvent
from term_whisper.l2_use_cases.ports.transcriber import Transcriber


class ModelLoader(Protocol):
    """Fetches model files (reporting per-file progress) and builds a transcriber.

    ``on_event`` may be called from any thread.
    """

    def load(self, model_id: str, on_event: Callable[[ProgressEvent], None]) -> Transcriber:
        """Return a ready transcriber. Raises ModelLoadError on failure."""
        ...
