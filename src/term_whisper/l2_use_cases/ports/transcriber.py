"""Port: speech-to-text transcription engine."""

from __future__ import annotations

from typing import Protocol

import numpy as np

from term_whisper.l1_entities.transcript import TranscriptionResult


class Transcriber(Protocol):
    """A loaded model, ready to transcribe. Zero framework types leak through."""

    def transcribe(
        self,
        audio: np.ndarray,
        *,
        chunk_length_s: float,
        stride_length_s: float,
        language: str,
        task: str,
        return_timestamps: bool,
    ) -> TranscriptionResult:
        """Transcribe a 16 kHz mono float32 buffer."""
        ...
