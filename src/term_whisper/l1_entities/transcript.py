"""Transcript entities and timestamp formatting."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def format_timestamp(seconds: float | None) -> str:
    """Format seconds as mm:ss.ss; unknown times render as '...'."""
    if seconds is None:
        return '...'
    minutes = math.floor(seconds / 60)
    secs = seconds % 60
    return f'{minutes:02d}:{secs:05.2f}'


class TranscriptSegment(BaseModel):
    """A timestamped span of the transcript."""

    model_config = ConfigDict(frozen=True)

    start: float | None = Field(description='Offset in seconds from the start of the audio; None when unknown')
    end: float | None = Field(default=None, description='Offset in seconds; None when the model left it open')
    text: str

    @property
    def time_range(self) -> str:
        return f'{format_timestamp(self.start)} -> {format_timestamp(self.end)}'


class TranscriptionResult(BaseModel):
    """Full transcript plus its ordered segments."""

    model_config = ConfigDict(frozen=True)

    text: str
    segments: tuple[TranscriptSegment, ...] = ()

    @classmethod
    def from_pipeline_output(cls, output: dict[str, Any]) -> TranscriptionResult:
        """Build from the ASR pipeline's ``{'text', 'chunks'}`` output.

        Text is trimmed; segment order is kept as produced.
        """
        segments = []
        for chunk in output.get('chunks') or []:
            start, end = chunk['timestamp']
            segments.append(
                TranscriptSegment(
                    start=start,
                    end=end,
                    text=chunk['text'].strip(),
                )
            )
        return cls(text=(output.get('text') or '').strip(), segments=tuple(segments))
