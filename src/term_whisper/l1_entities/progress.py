"""Model-loading progress entities."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class ProgressPhase(enum.Enum):
    INITIATE = 'initiate'
    PROGRESS = 'progress'
    DONE = 'done'


class ProgressEvent(BaseModel):
    """One lifecycle notification for one model file.

    Events for the same ``file`` arrive initiate → progress* → done; events for
    different files interleave in any order.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    phase: ProgressPhase
    percent: float | None = Field(default=None, ge=0, le=100)

    @classmethod
    def initiate(cls, file: str) -> ProgressEvent:
        return cls(file=file, phase=ProgressPhase.INITIATE)

    @classmethod
    def progress(cls, file: str, percent: float | None) -> ProgressEvent:
        return cls(file=file, phase=ProgressPhase.PROGRESS, percent=percent)

    @classmethod
    def done(cls, file: str) -> ProgressEvent:
        return cls(file=file, phase=ProgressPhase.DONE)


class ProgressItem(BaseModel):
    """Snapshot of one in-flight file."""

    model_config = ConfigDict(frozen=True)

    file: str
    percent: float


class ProgressSummary(BaseModel):
    """Rendered view of the progress table."""

    model_config = ConfigDict(frozen=True)

    text: str
    items: tuple[ProgressItem, ...] = ()


def short_name(file: str) -> str:
    """'onnx/decoder_model_merged.onnx' -> 'decoder_model_merged'."""
    base = file.rsplit('/', 1)[-1]
    return base.split('.', 1)[0] or base
