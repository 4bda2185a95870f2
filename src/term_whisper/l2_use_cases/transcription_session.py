"""Use case: drive one transcription run — model load, audio load, inference."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable
from contextlib import AbstractContextManager

import numpy as np

from term_whisper.l1_entities.audio_constants import SAMPLE_RATE
from term_whisper.l1_entities.config import TranscriptionConfig
from term_whisper.l1_entities.errors import InferenceError, InvalidTransitionError, ModelLoadError
from term_whisper.l1_entities.progress import ProgressEvent
from term_whisper.l1_entities.session_state import (
    UNKNOWN_ERROR,
    Completed,
    Error,
    LoadingAudio,
    LoadingModel,
    SessionState,
    SessionStatus,
    Transcribing,
)
from term_whisper.l2_use_cases.ports.audio_loader import PROCESSING_MESSAGE, AudioLoader
from term_whisper.l2_use_cases.ports.model_loader import ModelLoader
from term_whisper.l2_use_cases.ports.transcriber import Transcriber
from term_whisper.l2_use_cases.progress_aggregator import RENDER_THROTTLE, ProgressAggregator
from term_whisper.l2_use_cases.session_state_machine import SessionStateMachine

log = logging.getLogger('tw.session')

RENDER_YIELD = 0.01  # seconds; lets the display paint the processing status before decode


class TranscriptionSession:
    """Single-shot batch run exposing one SessionState snapshot at a time.

    Blocking work (downloads, file/network reads, decode, inference) runs in
    worker threads; every state mutation happens on the event loop thread.
    Progress events from download threads are queued and folded into a
    ProgressAggregator by one consumer task.
    """

    def __init__(
        self,
        config: TranscriptionConfig,
        model_loader: ModelLoader,
        audio_loader: AudioLoader,
        on_state: Callable[[SessionState], None] | None = None,
        log_guard: Callable[[], AbstractContextManager] = contextlib.nullcontext,
        clock: Callable[[], float] = time.perf_counter,
        throttle: float = RENDER_THROTTLE,
        render_yield: float = RENDER_YIELD,
    ) -> None:
        self._config = config
        self._model_loader = model_loader
        self._audio_loader = audio_loader
        self._log_guard = log_guard
        self._clock = clock
        self._throttle = throttle
        self._render_yield = render_yield
        self._machine = SessionStateMachine(on_change=on_state)

    @property
    def state(self) -> SessionState:
        return self._machine.state

    async def run(self, source: str) -> SessionState:
        """Transcribe *source*. Returns the terminal state; pipeline failures never raise."""
        if self._machine.status is not SessionStatus.IDLE:
            raise InvalidTransitionError('A transcription session runs only once')
        with self._log_guard():
            try:
                transcriber = await self._load_model()
                audio = await self._load_audio(source)
                await self._transcribe(transcriber, audio)
            except Exception as exc:
                log.error('Transcription run failed: %s', exc, exc_info=True)
                self._machine.transition(Error(message=str(exc) or UNKNOWN_ERROR, kind=type(exc).__name__))
        return self._machine.state

    # --- Phases ---

    async def _load_model(self) -> Transcriber:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[ProgressEvent | None] = asyncio.Queue()
        aggregator = ProgressAggregator(throttle=self._throttle)

        self._machine.transition(LoadingModel())
        consumer = asyncio.create_task(self._consume_progress(queue, aggregator))

        def on_event(event: ProgressEvent) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, event)

        model_id = self._config.model
        log.info('Loading model %s', model_id)
        try:
            return await asyncio.to_thread(self._model_loader.load, model_id, on_event)
        except ModelLoadError:
            raise
        except Exception as exc:
            raise ModelLoadError(str(exc)) from exc
        finally:
            # Events queued by download threads precede the sentinel.
            queue.put_nowait(None)
            await consumer

    async def _consume_progress(
        self,
        queue: asyncio.Queue[ProgressEvent | None],
        aggregator: ProgressAggregator,
    ) -> None:
        while (event := await queue.get()) is not None:
            if aggregator.on_event(event):
                summary = aggregator.render()
                self._machine.transition(LoadingModel(progress=summary.items, detail=summary.text))

    async def _load_audio(self, source: str) -> np.ndarray:
        loop = asyncio.get_running_loop()
        self._machine.transition(LoadingAudio())

        def on_status(message: str) -> None:
            loop.call_soon_threadsafe(self._set_audio_status, message)

        log.info('Loading audio from %s', source)
        data = await asyncio.to_thread(self._audio_loader.fetch, source, on_status)

        self._set_audio_status(PROCESSING_MESSAGE)
        await asyncio.sleep(self._render_yield)
        return await asyncio.to_thread(self._audio_loader.decode, data)

    def _set_audio_status(self, message: str) -> None:
        if self._machine.status is SessionStatus.LOADING_AUDIO:
            self._machine.transition(LoadingAudio(message=message))

    async def _transcribe(self, transcriber: Transcriber, audio: np.ndarray) -> None:
        start = self._clock()
        self._machine.transition(Transcribing(start_time=start))
        log.info('Transcribing %.1fs of audio', len(audio) / SAMPLE_RATE)
        try:
            result = await asyncio.to_thread(transcriber.transcribe, audio, **self._config.pipeline_options())
        except InferenceError:
            raise
        except Exception as exc:
            raise InferenceError(str(exc)) from exc
        elapsed = round(self._clock() - start, 2)
        log.info('Transcription finished in %.2fs (%d segments)', elapsed, len(result.segments))
        self._machine.transition(Completed(result=result, elapsed=elapsed))
