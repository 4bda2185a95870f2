"""Domain error types."""


class TranscriptionError(Exception):
    """Base class for every failure that ends a transcription run."""


class AudioNotFoundError(TranscriptionError, FileNotFoundError):
    """Raised when a local audio path does not exist."""


class FetchError(TranscriptionError):
    """Raised when a remote audio fetch fails (non-OK response or network error)."""


class DecodeError(TranscriptionError):
    """Raised when the audio bytes are not a valid WAV container."""


class ModelLoadError(TranscriptionError):
    """Raised when the speech-recognition model cannot be downloaded or constructed."""


class InferenceError(TranscriptionError):
    """Raised when the transcription call fails."""


class InvalidTransitionError(Exception):
    """Raised when the session is driven into a state its current state cannot reach."""
