"""Single-shot speech capture sessions.

Each call to :meth:`SpeechCapture.start` runs one blocking recognizer call in a
worker thread and resolves a future with exactly one terminal event.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from .interfaces import CaptureConfig, RecognizerFactory, SpeechRecognizer


class CaptureState(str, Enum):
    """Whether a capture session is currently running."""

    IDLE = "idle"
    LISTENING = "listening"


@dataclass(frozen=True, slots=True)
class Recognized:
    text: str


@dataclass(frozen=True, slots=True)
class Failed:
    reason: str


CaptureEvent = Recognized | Failed


class SpeechCaptureError(RuntimeError):
    """Raised by recognizers when an utterance could not be transcribed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SpeechUnavailableError(RuntimeError):
    """Raised when no speech capability exists in this environment."""


class SpeechCapture:
    """Exclusive, cancellable wrapper around an injected recognizer factory."""

    def __init__(
        self,
        recognizer_factory: RecognizerFactory | None,
        config: CaptureConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._factory = recognizer_factory
        self._config = config or CaptureConfig()
        self._logger = logger or logging.getLogger("interview_coach.voice.capture")
        self._recognizer: SpeechRecognizer | None = None
        self._task: asyncio.Task[Recognized | Failed] | None = None
        self._state = CaptureState.IDLE
        self._closed = False

    @property
    def available(self) -> bool:
        return self._factory is not None

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> asyncio.Future[Recognized | Failed] | None:
        """Begin one capture session.

        Returns ``None`` without side effects when a session is already running
        or the capture has been closed.
        """
        if self._factory is None:
            raise SpeechUnavailableError("No speech recognizer is available in this environment")
        if self._closed or self._state == CaptureState.LISTENING:
            return None

        self._state = CaptureState.LISTENING
        self._task = asyncio.get_running_loop().create_task(self._run(), name="speech-capture")
        self._logger.info("capture_started", extra={"language": self._config.language})
        return self._task

    def close(self) -> None:
        """Tear down; an in-flight session is cancelled and never delivers its event."""
        self._closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
            self._logger.info("capture_cancelled")
        self._task = None
        self._state = CaptureState.IDLE

    async def _run(self) -> Recognized | Failed:
        try:
            text = await asyncio.to_thread(self._listen)
        except SpeechCaptureError as exc:
            event: Recognized | Failed = Failed(exc.reason)
        except Exception as exc:  # noqa: BLE001 - every backend failure ends the session.
            event = Failed(f"{type(exc).__name__}: {exc}")
        else:
            event = Recognized(text) if text and text.strip() else Failed("no-speech")
        finally:
            if not self._closed:
                self._state = CaptureState.IDLE
                self._task = None

        if isinstance(event, Failed):
            self._logger.warning("capture_failed", extra={"reason": event.reason})
        else:
            self._logger.info("capture_recognized", extra={"chars": len(event.text)})
        return event

    def _listen(self) -> str:
        if self._recognizer is None:
            self._recognizer = self._factory(self._config)
        return self._recognizer.listen_once()
