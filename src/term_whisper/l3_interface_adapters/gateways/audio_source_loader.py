"""Gateway: audio source loader — URL or local WAV to float32 mono PCM at 16 kHz."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from math import gcd
from pathlib import Path

import numpy as np
import requests
import soundfile as sf
from scipy.signal import resample_poly

from term_whisper.l1_entities.audio_constants import SAMPLE_RATE
from term_whisper.l1_entities.errors import AudioNotFoundError, DecodeError, FetchError
from term_whisper.l2_use_cases.ports.audio_loader import (
    DOWNLOADING_MESSAGE,
    LOCAL_FILE_MESSAGE,
    PROCESSING_MESSAGE,
)

log = logging.getLogger('tw.audio')

_REMOTE_SCHEMES = ('http://', 'https://')
_DEFAULT_TIMEOUT = 60.0  # seconds


def is_remote(source: str) -> bool:
    return source.startswith(_REMOTE_SCHEMES)


def fetch_audio_bytes(
    source: str,
    on_status: Callable[[str], None] | None = None,
    timeout: float = _DEFAULT_TIMEOUT,
) -> bytes:
    """Return the complete byte buffer of *source*.

    Raises:
        FetchError: remote request failed or returned a non-OK status.
        AudioNotFoundError: local path does not exist.
    """
    if is_remote(source):
        if on_status:
            on_status(DOWNLOADING_MESSAGE)
        try:
            response = requests.get(source, timeout=timeout)
        except requests.RequestException as exc:
            raise FetchError(f'Failed to fetch audio: {exc}') from exc
        if not response.ok:
            raise FetchError(f'Failed to fetch audio: {response.status_code} {response.reason}')
        log.debug('Fetched %d bytes from %s', len(response.content), source)
        return response.content

    if on_status:
        on_status(LOCAL_FILE_MESSAGE)
    path = Path(source).expanduser()
    if not path.is_file():
        raise AudioNotFoundError(f'File not found: {source}')
    return path.read_bytes()


def decode_wav(data: bytes) -> np.ndarray:
    """Decode WAV *data* into a read-only float32 mono buffer at 16 kHz.

    Multi-channel input keeps the first channel only (no averaging downmix).
    A WAV with no frames decodes to an empty buffer.

    Raises:
        DecodeError: *data* is not a readable WAV container.
    """
    try:
        with sf.SoundFile(io.BytesIO(data)) as wav:
            if not wav.format.startswith('WAV') and wav.format != 'RF64':
                raise DecodeError(f'Unsupported audio container: {wav.format} (expected WAV)')
            rate = wav.samplerate
            frames = wav.read(dtype='float32', always_2d=True)
    except sf.LibsndfileError as exc:
        raise DecodeError(f'Invalid WAV data: {exc}') from exc

    mono = frames[:, 0]
    if rate != SAMPLE_RATE and mono.size:
        divisor = gcd(SAMPLE_RATE, rate)
        mono = resample_poly(mono, SAMPLE_RATE // divisor, rate // divisor)

    audio = np.ascontiguousarray(mono, dtype=np.float32)
    audio.flags.writeable = False
    return audio


def acquire(
    source: str,
    on_status: Callable[[str], None] | None = None,
    timeout: float = _DEFAULT_TIMEOUT,
) -> np.ndarray:
    """Fetch and decode *source* in one blocking call.

    Convenience entry point for scripts; the session runs the fetch and decode
    halves separately through AudioSourceLoader so it can yield in between.
    """
    data = fetch_audio_bytes(source, on_status, timeout=timeout)
    if on_status:
        on_status(PROCESSING_MESSAGE)
    return decode_wav(data)


class AudioSourceLoader:
    """AudioLoader adapter around ``fetch_audio_bytes`` / ``decode_wav``."""

    def __init__(self, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    def fetch(self, source: str, on_status: Callable[[str], None] | None = None) -> bytes:
        return fetch_audio_bytes(source, on_status, timeout=self._timeout)

    def decode(self, data: bytes) -> np.ndarray:
        return decode_wav(data)
