"""Tests for the batch runner — spinner milestones, transcript output, exit code."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from term_whisper.l1_entities.errors import FetchError, ModelLoadError
from term_whisper.l1_entities.progress import ProgressItem
from term_whisper.l1_entities.session_state import Error, LoadingAudio, LoadingModel
from term_whisper.l1_entities.transcript import TranscriptionResult, TranscriptSegment
from term_whisper.l4_frameworks_and_drivers.batch_runner import (
    SpinnerRenderer,
    display_name,
    model_progress_text,
    print_transcript,
    run_batch,
)
from term_whisper.l4_frameworks_and_drivers.container import DependencyContainer
from tests.conftest import HELLO_WORLD, FakeAudioLoader, FakeModelLoader


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=100, force_terminal=False, color_system=None), buf


class TestDisplayName:
    def test_url(self):
        assert display_name('https://example.com/audio/jfk.wav') == 'jfk.wav'

    def test_path(self):
        assert display_name('/home/me/rec.wav') == 'rec.wav'

    def test_bare_name(self):
        assert display_name('rec.wav') == 'rec.wav'


class TestModelProgressText:
    def test_detail_without_progress(self):
        assert model_progress_text(LoadingModel()).plain == 'Initializing model pipeline...'

    def test_in_flight_files(self):
        state = LoadingModel(
            progress=(
                ProgressItem(file='model.safetensors', percent=42.4),
                ProgressItem(file='tokenizer.json', percent=100.0),
            )
        )
        assert model_progress_text(state).plain == 'Downloading: model 42% | tokenizer 100%'


class TestPrintTranscript:
    def test_text_and_segments(self):
        console, buf = _console()
        print_transcript(console, HELLO_WORLD)
        out = buf.getvalue()

        assert 'Full Transcript:' in out
        assert 'hello world' in out
        assert 'Segments:' in out
        assert '[00:00.00 -> 00:01.00] hello' in out
        assert '[00:01.00 -> 00:02.00] world' in out

    def test_open_ended_segment(self):
        console, buf = _console()
        result = TranscriptionResult(text='tail', segments=(TranscriptSegment(start=3.0, end=None, text='tail'),))
        print_transcript(console, result)
        assert '[00:03.00 -> ...] tail' in buf.getvalue()

    def test_no_segments_header_without_segments(self):
        console, buf = _console()
        print_transcript(console, TranscriptionResult(text='only text'))
        assert 'Segments:' not in buf.getvalue()


class TestSpinnerRenderer:
    def test_error_label_follows_failed_phase(self):
        console, buf = _console()
        renderer = SpinnerRenderer(console, 'a.wav')
        with renderer:
            renderer(LoadingModel())
            renderer(LoadingAudio())
            renderer(Error(message='Failed to fetch audio: 404 Not Found'))
        out = buf.getvalue()

        assert '✔ Whisper model ready' in out
        assert '✖ Failed to load audio' in out
        assert 'Error: Failed to fetch audio: 404 Not Found' in out

    def test_audio_refresh_does_not_repeat_model_ready(self):
        console, buf = _console()
        renderer = SpinnerRenderer(console, 'a.wav')
        with renderer:
            renderer(LoadingModel())
            renderer(LoadingAudio())
            renderer(LoadingAudio(message='Processing...'))
        assert buf.getvalue().count('Whisper model ready') == 1


class TestRunBatch:
    def test_success_prints_milestones_and_transcript(self, default_config, fake_model_loader, fake_audio_loader):
        console, buf = _console()
        container = DependencyContainer(default_config, model_loader=fake_model_loader, audio_loader=fake_audio_loader)

        result = run_batch(container, 'https://example.com/jfk.wav', console=console)

        out = buf.getvalue()
        assert result == HELLO_WORLD
        assert 'Term Whisper Transcriber' in out
        assert '✔ Whisper model ready' in out
        assert '✔ Audio loaded: jfk.wav (16kHz Mono)' in out
        assert '✔ Transcription complete in' in out
        assert '[00:00.00 -> 00:01.00] hello' in out

    def test_model_failure_exits_1(self, default_config, fake_audio_loader):
        console, buf = _console()
        loader = FakeModelLoader(error=ModelLoadError('Model openai/nope has no config.json'))
        container = DependencyContainer(default_config, model_loader=loader, audio_loader=fake_audio_loader)

        with pytest.raises(SystemExit) as exc_info:
            run_batch(container, 'jfk.wav', console=console)

        out = buf.getvalue()
        assert exc_info.value.code == 1
        assert '✖ Failed to load model' in out
        assert 'Error: Model openai/nope has no config.json' in out
        assert 'Full Transcript' not in out

    def test_fetch_failure_exits_1(self, default_config, fake_model_loader):
        console, buf = _console()
        audio = FakeAudioLoader(fetch_error=FetchError('Failed to fetch audio: 404 Not Found'))
        container = DependencyContainer(default_config, model_loader=fake_model_loader, audio_loader=audio)

        with pytest.raises(SystemExit) as exc_info:
            run_batch(container, 'https://example.com/missing.wav', console=console)

        assert exc_info.value.code == 1
        assert '✖ Failed to load audio' in buf.getvalue()
        assert fake_model_loader.transcriber.transcribe_calls == []
