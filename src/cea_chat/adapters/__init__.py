"""Upstream vendor integrations."""

from .elevenlabs import ElevenLabsClient, VoiceSettings

__all__ = ["ElevenLabsClient", "VoiceSettings"]
