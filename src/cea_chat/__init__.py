"""Voice-enabled chat client for a hosted completion API, with a TTS proxy."""

__version__ = "0.1.0"
