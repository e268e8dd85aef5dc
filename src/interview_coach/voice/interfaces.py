"""Contracts for speech recognition and spoken output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """Recognizer settings: one final result, best alternative only, fixed locale."""

    language: str = "en-US"
    phrase_time_limit: float | None = 30.0
    timeout: float | None = 10.0


class SpeechRecognizer(Protocol):
    """Captures one utterance from the microphone and transcribes it."""

    def listen_once(self) -> str:
        """Block until a single utterance is finalized; return its best transcript.

        Raises ``SpeechCaptureError`` with a short reason on failure.
        """


class RecognizerFactory(Protocol):
    """Builds a recognizer for the platform's speech capability."""

    def __call__(self, config: CaptureConfig) -> SpeechRecognizer: ...


class SpeechOutput(Protocol):
    """Speaks text aloud."""

    def say(self, text: str) -> None:
        """Speak ``text`` and return once playback finished."""
