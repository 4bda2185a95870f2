"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TranscriptionConfig(BaseModel):
    model: str
    dtype: str
    device: str
    chunk_length_s: float
    stride_length_s: float
    language: str
    task: str
    return_timestamps: bool
    allow_local_models: bool
    fetch_timeout: float = Field(gt=0)
    suppressed_warnings: list[str] = Field(default_factory=list)

    def pipeline_options(self) -> dict:
        """Keyword options for one transcription call."""
        return {
            'chunk_length_s': self.chunk_length_s,
            'stride_length_s': self.stride_length_s,
            'language': self.language,
            'task': self.task,
            'return_timestamps': self.return_timestamps,
        }


class AppConfig(BaseModel):
    transcription: TranscriptionConfig
    default_audio: str
