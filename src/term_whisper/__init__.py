"""term-whisper: terminal speech-to-text with live progress."""

__version__ = '0.1.0'
