"""Application defaults and config assembly — lives in L4, not domain."""

from __future__ import annotations

import copy

from term_whisper.l1_entities.config import AppConfig
from term_whisper.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

DEFAULT_AUDIO_URL = 'https://huggingface.co/datasets/Xenova/transformers.js-docs/resolve/main/jfk.wav'

APP_CONFIG_DEFAULTS: dict = {
    'transcription': {
        'model': 'openai/whisper-tiny',
        'dtype': 'float32',
        'device': 'cpu',
        'chunk_length_s': 30.0,
        'stride_length_s': 5.0,
        'language': 'english',
        'task': 'transcribe',
        'return_timestamps': True,
        'allow_local_models': False,
        'fetch_timeout': 60.0,
        'suppressed_warnings': ['content-length', 'attention mask'],
    },
    'default_audio': DEFAULT_AUDIO_URL,
}

# Per entry point: the batch CLI always pulls from the Hub, the TUI may use a local model directory.
BATCH_OVERRIDES: dict = {'transcription': {'allow_local_models': False}}
TUI_OVERRIDES: dict = {'transcription': {'allow_local_models': True}}


def build_app_config(raw: dict, overrides: dict | None = None) -> AppConfig:
    """Merge *raw* user settings on top of defaults, then *overrides*, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, copy.deepcopy(raw))
    if overrides:
        deep_merge(merged, copy.deepcopy(overrides))
    return AppConfig.model_validate(merged)
