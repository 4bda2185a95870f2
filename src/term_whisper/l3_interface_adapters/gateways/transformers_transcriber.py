"""Gateway: transformers ASR pipeline — implements Transcriber port."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from term_whisper.l1_entities.audio_constants import SAMPLE_RATE
from term_whisper.l1_entities.errors import InferenceError
from term_whisper.l1_entities.transcript import TranscriptionResult


class TransformersTranscriber:
    """Adapter over a ``transformers`` automatic-speech-recognition pipeline.

    Language and task go through ``generate_kwargs``; the pipeline output
    ``{'text', 'chunks'}`` is converted to a TranscriptionResult.
    """

    def __init__(self, asr: Callable) -> None:
        self._asr = asr

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
        # The pipeline consumes its input dict and needs a writable array.
        inputs = {'raw': np.array(audio, dtype=np.float32), 'sampling_rate': SAMPLE_RATE}
        try:
            output = self._asr(
                inputs,
                chunk_length_s=chunk_length_s,
                stride_length_s=stride_length_s,
                return_timestamps=return_timestamps,
                generate_kwargs={'language': language, 'task': task},
            )
        except Exception as exc:
            raise InferenceError(f'Transcription failed: {exc}') from exc
        return TranscriptionResult.from_pipeline_output(output)
