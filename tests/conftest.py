"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import io
from collections.abc import Callable

import numpy as np
import pytest
import soundfile as sf

from term_whisper.l1_entities.config import AppConfig
from term_whisper.l1_entities.progress import ProgressEvent
from term_whisper.l1_entities.transcript import TranscriptionResult, TranscriptSegment
from term_whisper.l2_use_cases.ports.audio_loader import DOWNLOADING_MESSAGE
from term_whisper.l4_frameworks_and_drivers.config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeTranscriber:
    """Fake transcriber for L2 use case tests."""

    def __init__(self, result: TranscriptionResult | None = None, error: Exception | None = None):
        self._result = result or TranscriptionResult(text='')
        self._error = error
        self.transcribe_calls: list[tuple[np.ndarray, dict]] = []

    def transcribe(self, audio: np.ndarray, **options) -> TranscriptionResult:
        self.transcribe_calls.append((audio, options))
        if self._error is not None:
            raise self._error
        return self._result


class FakeModelLoader:
    """Fake model loader — replays *events* then returns *transcriber* (or raises *error*)."""

    def __init__(
        self,
        transcriber: FakeTranscriber | None = None,
        events: list[ProgressEvent] | None = None,
        error: Exception | None = None,
    ):
        self.transcriber = transcriber or FakeTranscriber()
        self._events = list(events or [])
        self._error = error
        self.load_calls: list[str] = []

    def load(self, model_id: str, on_event: Callable[[ProgressEvent], None]) -> FakeTranscriber:
        self.load_calls.append(model_id)
        for event in self._events:
            on_event(event)
        if self._error is not None:
            raise self._error
        return self.transcriber


class FakeAudioLoader:
    """Fake audio loader — emits *statuses* while fetching, returns *audio* on decode."""

    def __init__(
        self,
        audio: np.ndarray | None = None,
        statuses: tuple[str, ...] = (DOWNLOADING_MESSAGE,),
        fetch_error: Exception | None = None,
        decode_error: Exception | None = None,
    ):
        self._audio = audio if audio is not None else np.zeros(16000, dtype=np.float32)
        self._statuses = statuses
        self._fetch_error = fetch_error
        self._decode_error = decode_error
        self.fetch_calls: list[str] = []
        self.decode_calls: int = 0

    def fetch(self, source: str, on_status: Callable[[str], None] | None = None) -> bytes:
        self.fetch_calls.append(source)
        for status in self._statuses:
            if on_status:
                on_status(status)
        if self._fetch_error is not None:
            raise self._fetch_error
        return b'RIFF-fake'

    def decode(self, data: bytes) -> np.ndarray:
        self.decode_calls += 1
        if self._decode_error is not None:
            raise self._decode_error
        return self._audio


def make_wav_bytes(samples: np.ndarray, sample_rate: int, subtype: str = 'PCM_16', fmt: str = 'WAV') -> bytes:
    """Encode *samples* (frames × channels or 1-D) into an in-memory audio file."""
    buf = io.BytesIO()
    sf.write(buf, samples, sample_rate, format=fmt, subtype=subtype)
    return buf.getvalue()


HELLO_WORLD = TranscriptionResult(
    text='hello world',
    segments=(
        TranscriptSegment(start=0.0, end=1.0, text='hello'),
        TranscriptSegment(start=1.0, end=2.0, text='world'),
    ),
)


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def fake_transcriber() -> FakeTranscriber:
    return FakeTranscriber(result=HELLO_WORLD)


@pytest.fixture
def fake_model_loader(fake_transcriber: FakeTranscriber) -> FakeModelLoader:
    return FakeModelLoader(transcriber=fake_transcriber)


@pytest.fixture
def fake_audio_loader() -> FakeAudioLoader:
    return FakeAudioLoader()
