"""Gateway: HuggingFace model loader — implements ModelLoader port."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from huggingface_hub import hf_hub_download, list_repo_files

from term_whisper.l1_entities.errors import ModelLoadError
from term_whisper.l1_entities.progress import ProgressEvent
from term_whisper.l3_interface_adapters.gateways.transformers_transcriber import TransformersTranscriber

log = logging.getLogger('tw.model')

ASR_TASK = 'automatic-speech-recognition'
MODEL_FILE_PATTERNS = ('*.json', '*.txt', '*.safetensors')
_DOWNLOAD_WORKERS = 4


def _make_progress_class(file: str, on_event: Callable[[ProgressEvent], None]) -> type:
    """Create a tqdm-compatible class that reports *file* download progress as events."""

    class _ProgressReporter:
        def __init__(self, *args, **kwargs):
            self.total: int = kwargs.get('total', 0) or 0
            self.n: int = kwargs.get('initial', 0) or 0
            self._report()

        def _report(self) -> None:
            if self.total > 0:
                on_event(ProgressEvent.progress(file, min(self.n / self.total * 100, 100.0)))

        def update(self, n: int = 1) -> None:
            self.n += n
            self._report()

        def close(self) -> None:
            pass

        def set_description(self, *a, **kw) -> None:
            pass

        def set_description_str(self, *a, **kw) -> None:
            pass

        def refresh(self) -> None:
            pass

        def __enter__(self):
            return self

        def __exit__(self, *args):
            self.close()

    return _ProgressReporter


def select_model_files(files: list[str]) -> list[str]:
    """Top-level config, tokenizer and safetensors weight files of a repo."""
    return [f for f in files if '/' not in f and any(fnmatch.fnmatch(f, p) for p in MODEL_FILE_PATTERNS)]


def _default_pipeline_factory(model_dir: str, dtype: str, device: str):
    from transformers import pipeline  # noqa: PLC0415 -- deferred: torch stack loaded only when a model is built

    return pipeline(ASR_TASK, model=model_dir, dtype=dtype, device=device)


class HfModelLoader:
    """Downloads model files from the Hub (one event stream per file) and builds the ASR pipeline.

    With ``allow_local_models`` an existing local directory is used as-is and
    no download events are emitted.
    """

    def __init__(
        self,
        dtype: str = 'float32',
        device: str = 'cpu',
        allow_local_models: bool = False,
        pipeline_factory: Callable[[str, str, str], Callable] = _default_pipeline_factory,
        max_workers: int = _DOWNLOAD_WORKERS,
    ) -> None:
        self._dtype = dtype
        self._device = device
        self._allow_local_models = allow_local_models
        self._pipeline_factory = pipeline_factory
        self._max_workers = max_workers

    def resolve(self, model_id: str, on_event: Callable[[ProgressEvent], None]) -> str:
        """Return a local directory holding the model files."""
        if self._allow_local_models:
            local = Path(model_id).expanduser()
            if local.is_dir():
                log.info('Using local model directory %s', local)
                return str(local)

        try:
            files = select_model_files(list_repo_files(model_id))
        except Exception as exc:
            raise ModelLoadError(f'Cannot list files for model {model_id}: {exc}') from exc
        if 'config.json' not in files:
            raise ModelLoadError(f'Model {model_id} has no config.json')

        def _download(filename: str) -> str:
            on_event(ProgressEvent.initiate(filename))
            path = hf_hub_download(
                repo_id=model_id,
                filename=filename,
                tqdm_class=_make_progress_class(filename, on_event),
            )
            on_event(ProgressEvent.done(filename))
            return path

        try:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                paths = dict(zip(files, pool.map(_download, files), strict=True))
        except Exception as exc:
            raise ModelLoadError(f'Failed to download model {model_id}: {exc}') from exc

        return str(Path(paths['config.json']).parent)

    def load(self, model_id: str, on_event: Callable[[ProgressEvent], None]) -> TransformersTranscriber:
        model_dir = self.resolve(model_id, on_event)
        try:
            asr = self._pipeline_factory(model_dir, self._dtype, self._device)
        except Exception as exc:
            raise ModelLoadError(f'Failed to construct pipeline for {model_id}: {exc}') from exc
        log.info('Model %s ready (%s, %s)', model_id, self._dtype, self._device)
        return TransformersTranscriber(asr)
