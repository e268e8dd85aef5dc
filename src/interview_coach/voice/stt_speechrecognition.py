"""Microphone speech-to-text backend powered by ``speech_recognition``."""

from __future__ import annotations

from .capture import SpeechCaptureError
from .interfaces import CaptureConfig, RecognizerFactory


class SpeechRecognitionRecognizer:
    """Listen for one phrase and return Google's best transcription of it."""

    def __init__(
        self,
        *,
        language: str = "en-US",
        phrase_time_limit: float | None = 30.0,
        timeout: float | None = 10.0,
        sample_rate: int = 16_000,
        adjust_noise_seconds: float = 0.3,
    ) -> None:
        try:
            import speech_recognition as sr
        except ImportError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "Speech recognition backend unavailable. Install extras with: pip install 'interview-coach[voice]'"
            ) from exc
        self._sr = sr
        self._recognizer = sr.Recognizer()
        self._microphone = sr.Microphone(sample_rate=sample_rate)
        self._language = language
        self._phrase_time_limit = phrase_time_limit
        self._timeout = timeout
        self._adjust_noise_seconds = max(0.0, adjust_noise_seconds)

    @classmethod
    def from_config(cls, config: CaptureConfig) -> "SpeechRecognitionRecognizer":
        return cls(
            language=config.language,
            phrase_time_limit=config.phrase_time_limit,
            timeout=config.timeout,
        )

    def listen_once(self) -> str:
        try:
            with self._microphone as source:
                if self._adjust_noise_seconds > 0:
                    self._recognizer.adjust_for_ambient_noise(source, duration=self._adjust_noise_seconds)
                audio = self._recognizer.listen(
                    source,
                    timeout=self._timeout,
                    phrase_time_limit=self._phrase_time_limit,
                )
        except self._sr.WaitTimeoutError as exc:
            raise SpeechCaptureError("no-speech") from exc

        try:
            # show_all=False keeps only the top alternative.
            return self._recognizer.recognize_google(audio, language=self._language, show_all=False)
        except self._sr.UnknownValueError as exc:
            raise SpeechCaptureError("no-speech") from exc
        except self._sr.RequestError as exc:
            raise SpeechCaptureError("network") from exc


def detect_recognizer_factory() -> RecognizerFactory | None:
    """Return a factory when the library and a microphone backend are present."""
    try:
        import speech_recognition as sr
    except ImportError:
        return None

    try:
        sr.Microphone.get_pyaudio()
        if not sr.Microphone.list_microphone_names():
            return None
    except (AttributeError, OSError):
        return None
    return SpeechRecognitionRecognizer.from_config
