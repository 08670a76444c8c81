"""Voice input and output module boundaries."""

from .catalog import VoiceCatalog
from .input import ListeningState, SpeechInputAdapter, UnavailableRecognition
from .interfaces import (
    AudioPlayer,
    LocalSynthesisCapability,
    RecognitionEnded,
    RecognitionError,
    RecognitionEvent,
    RecognitionResult,
    RemoteSynthesizer,
    SpeechRecognitionCapability,
    Utterance,
    VoiceBackendUnavailableError,
)
from .output import PREFERRED_VOICES, SpeechOutcome, SpeechOutputAdapter, UnavailableSynthesis, select_voice
from .remote import ProxySpeechClient

__all__ = [
    "AudioPlayer",
    "ListeningState",
    "LocalSynthesisCapability",
    "PREFERRED_VOICES",
    "ProxySpeechClient",
    "RecognitionEnded",
    "RecognitionError",
    "RecognitionEvent",
    "RecognitionResult",
    "RemoteSynthesizer",
    "SpeechInputAdapter",
    "SpeechOutcome",
    "SpeechOutputAdapter",
    "SpeechRecognitionCapability",
    "UnavailableRecognition",
    "UnavailableSynthesis",
    "Utterance",
    "VoiceBackendUnavailableError",
    "VoiceCatalog",
    "select_voice",
]
