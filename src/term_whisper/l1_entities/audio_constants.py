"""Audio format expected by the speech-recognition stage."""

SAMPLE_RATE = 16000
