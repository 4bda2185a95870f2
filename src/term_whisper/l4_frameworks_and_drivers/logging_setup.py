"""File-based debug logging setup and scoped suppression of noisy library messages."""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

LOG_FILE_NAME = 'tw_debug.log'

# Loggers of the ML stack that print download/inference chatter.
NOISY_LOGGERS = ('transformers', 'huggingface_hub')


def setup_file_logging(log_dir: Path) -> Path:
    """Configure file-based debug logging into *log_dir*. Safe to call twice."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME
    root = logging.getLogger('tw')
    root.setLevel(logging.DEBUG)
    for existing in root.handlers:
        if isinstance(existing, logging.FileHandler) and existing.baseFilename == os.path.abspath(log_path):
            return log_path
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    root.addHandler(handler)
    logging.getLogger('tw.app').info('Debug logging started → %s', log_path)
    return log_path


class LogMessageFilter(logging.Filter):
    """Drops records whose rendered message contains any of *patterns*."""

    def __init__(self, patterns: Iterable[str]) -> None:
        super().__init__()
        self.patterns = tuple(p.lower() for p in patterns if p)
        self.dropped = 0

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage().lower()
        if any(p in message for p in self.patterns):
            self.dropped += 1
            return False
        return True


def configure_library_logging() -> None:
    """Install the transformers library's default stderr handler now rather than on its first import."""
    from transformers.utils import logging as transformers_logging  # noqa: PLC0415 -- deferred: loads the transformers package

    transformers_logging.get_logger()


@contextlib.contextmanager
def suppress_log_messages(
    patterns: Iterable[str],
    logger_names: Iterable[str] = NOISY_LOGGERS,
    prepare: Callable[[], None] | None = None,
) -> Iterator[LogMessageFilter]:
    """Attach a LogMessageFilter to the named loggers and their handlers for the block's duration.

    Handler-level attachment also catches records propagated from child loggers.
    *prepare* runs first so handlers a library adds on import are in place to be filtered.
    """
    if prepare is not None:
        prepare()
    message_filter = LogMessageFilter(patterns)
    targets: list[logging.Filterer] = []
    for name in logger_names:
        logger = logging.getLogger(name)
        targets.append(logger)
        targets.extend(logger.handlers)
    for target in targets:
        target.addFilter(message_filter)
    try:
        yield message_filter
    finally:
        for target in targets:
            target.removeFilter(message_filter)
