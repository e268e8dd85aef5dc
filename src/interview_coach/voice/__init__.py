"""Speech capture and read-aloud module boundaries."""

from .capture import (
    CaptureEvent,
    CaptureState,
    Failed,
    Recognized,
    SpeechCapture,
    SpeechCaptureError,
    SpeechUnavailableError,
)
from .interfaces import CaptureConfig, RecognizerFactory, SpeechOutput, SpeechRecognizer
from .output import QuestionReader, ReadAloudConfig

__all__ = [
    "CaptureConfig",
    "CaptureEvent",
    "CaptureState",
    "Failed",
    "QuestionReader",
    "ReadAloudConfig",
    "Recognized",
    "RecognizerFactory",
    "SpeechCapture",
    "SpeechCaptureError",
    "SpeechOutput",
    "SpeechRecognizer",
    "SpeechUnavailableError",
]
