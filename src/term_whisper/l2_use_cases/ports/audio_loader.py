"""Port: audio acquisition split into its I/O and CPU-bound halves."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import numpy as np

DOWNLOADING_MESSAGE = 'Downloading audio from URL...'
LOCAL_FILE_MESSAGE = 'Loading local audio file...'
PROCESSING_MESSAGE = 'Processing audio (Resampling & Converting)...'


class AudioLoader(Protocol):
    def fetch(self, source: str, on_status: Callable[[str], None] | None = None) -> bytes:
        """Read the complete byte buffer for *source* (URL or local path)."""
        ...

    def decode(self, data: bytes) -> np.ndarray:
        """Decode WAV bytes into a read-only float32 mono buffer at 16 kHz."""
        ...
