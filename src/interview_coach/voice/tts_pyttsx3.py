"""Text-to-speech backend powered by ``pyttsx3``."""

from __future__ import annotations


class Pyttsx3SpeechOutput:
    """Speaker playback using a local pyttsx3 engine instance."""

    def __init__(self, *, voice_id: str | None = None, rate: int | None = None, volume: float | None = None) -> None:
        try:
            import pyttsx3
        except ImportError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "Read-aloud backend unavailable. Install extras with: pip install 'interview-coach[voice]'"
            ) from exc

        self._engine = pyttsx3.init()
        if voice_id:
            self._engine.setProperty("voice", voice_id)
        if rate is not None:
            self._engine.setProperty("rate", rate)
        if volume is not None:
            self._engine.setProperty("volume", max(0.0, min(1.0, volume)))

    def say(self, text: str) -> None:
        text = text.strip()
        if not text:
            return
        self._engine.say(text)
        self._engine.runAndWait()
