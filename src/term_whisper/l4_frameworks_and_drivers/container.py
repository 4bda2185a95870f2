"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from term_whisper.l1_entities.config import AppConfig
from term_whisper.l1_entities.session_state import SessionState
from term_whisper.l2_use_cases.ports.audio_loader import AudioLoader
from term_whisper.l2_use_cases.ports.model_loader import ModelLoader
from term_whisper.l2_use_cases.transcription_session import TranscriptionSession
from term_whisper.l3_interface_adapters.gateways.audio_source_loader import AudioSourceLoader
from term_whisper.l3_interface_adapters.gateways.hf_model_loader import HfModelLoader
from term_whisper.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader
from term_whisper.l4_frameworks_and_drivers.logging_setup import configure_library_logging, suppress_log_messages


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        model_loader: ModelLoader | None = None,
        audio_loader: AudioLoader | None = None,
    ) -> None:
        self.config = config
        tc = config.transcription
        self.model_loader: ModelLoader = model_loader or HfModelLoader(
            dtype=tc.dtype,
            device=tc.device,
            allow_local_models=tc.allow_local_models,
        )
        self.audio_loader: AudioLoader = audio_loader or AudioSourceLoader(timeout=tc.fetch_timeout)

    def session(self, on_state: Callable[[SessionState], None] | None = None) -> TranscriptionSession:
        tc = self.config.transcription
        return TranscriptionSession(
            config=tc,
            model_loader=self.model_loader,
            audio_loader=self.audio_loader,
            on_state=on_state,
            log_guard=partial(suppress_log_messages, tc.suppressed_warnings, prepare=configure_library_logging),
        )

    @staticmethod
    def config_loader() -> YamlConfigLoader:
        return YamlConfigLoader()
