"""Session orchestration: question, spoken answer, and feedback state."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from interview_coach.llm.errors import (
    ApiReportedError,
    CoachError,
    MissingCredentialError,
    UnusableResponseError,
)
from interview_coach.messages import (
    ANALYZING_PLACEHOLDER,
    FEEDBACK_MESSAGES,
    MISSING_API_KEY,
    QUESTION_MESSAGES,
    QUESTION_PLACEHOLDER,
    SPEECH_UNAVAILABLE,
    FlowMessages,
    api_error,
)
from interview_coach.voice.capture import CaptureEvent, CaptureState, Failed, Recognized, SpeechCapture


class QuestionSource(Protocol):
    async def fetch_question(self) -> str: ...


class AnswerEvaluator(Protocol):
    async def evaluate(self, question: str, answer: str) -> str: ...


@dataclass(slots=True)
class SessionState:
    question: str = QUESTION_PLACEHOLDER
    transcript: str = ""
    feedback: str = ""
    capture_state: CaptureState = CaptureState.IDLE
    loading_question: bool = False
    evaluating: bool = False
    speech_available: bool = False
    notice: str | None = None


def describe_error(exc: CoachError, messages: FlowMessages) -> str:
    """Map a request failure to the inline text shown for that flow."""
    if isinstance(exc, MissingCredentialError):
        return MISSING_API_KEY
    if isinstance(exc, ApiReportedError):
        return api_error(exc.message)
    if isinstance(exc, UnusableResponseError):
        return messages.no_result
    return messages.transport


class InterviewSession:
    """Owns the transient state of one practice session and its transitions.

    Every mutation is followed by a call to ``on_change`` so a view can
    re-render. Overlap guards are soft: they stop repeated triggers from the
    view, not concurrent programmatic callers.
    """

    def __init__(
        self,
        questions: QuestionSource,
        evaluator: AnswerEvaluator,
        capture: SpeechCapture | None = None,
        *,
        credential_configured: bool = True,
        on_change: Callable[[SessionState], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._questions = questions
        self._evaluator = evaluator
        self._capture = capture
        self._credential_configured = credential_configured
        self._on_change = on_change
        self._logger = logger or logging.getLogger("interview_coach.session")
        self._closed = False
        self._state = SessionState(speech_available=bool(capture and capture.available))

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        """Report capability gaps up front, then load the first question."""
        if not self._state.speech_available:
            self._state.notice = SPEECH_UNAVAILABLE
            self._logger.warning("speech_unavailable")

        if not self._credential_configured:
            self._state.question = MISSING_API_KEY
            self._logger.warning("api_key_missing")
            self._render()
            return

        await self.new_question()

    async def new_question(self) -> None:
        if self._state.loading_question or self._closed:
            return
        if not self._credential_configured:
            self._state.question = MISSING_API_KEY
            self._render()
            return

        self._state.loading_question = True
        self._state.question = QUESTION_PLACEHOLDER
        self._state.transcript = ""
        self._state.feedback = ""
        self._render()

        try:
            self._state.question = await self._questions.fetch_question()
        except CoachError as exc:
            self._state.question = describe_error(exc, QUESTION_MESSAGES)
            self._logger.warning("question_failed", extra={"reason": type(exc).__name__})
        finally:
            self._state.loading_question = False
        self._render()

    async def start_listening(self) -> None:
        """Run one capture session and evaluate the answer it yields."""
        if self._capture is None or not self._state.speech_available or self._closed:
            return
        if self._state.capture_state == CaptureState.LISTENING or self._state.loading_question:
            return

        future = self._capture.start()
        if future is None:
            return

        self._state.transcript = ""
        self._state.feedback = ""
        self._state.capture_state = CaptureState.LISTENING
        self._render()

        try:
            event = await future
        except asyncio.CancelledError:
            if self._closed:
                return
            raise
        await self.handle_capture_event(event)

    async def handle_capture_event(self, event: CaptureEvent) -> None:
        """Apply one terminal capture event to the session."""
        if self._closed:
            return

        if isinstance(event, Failed):
            self._state.capture_state = CaptureState.IDLE
            self._logger.warning("speech_capture_failed", extra={"reason": event.reason})
            self._render()
            return

        if isinstance(event, Recognized):
            self._state.transcript = event.text
            self._state.capture_state = CaptureState.IDLE
            self._render()
            await self._evaluate(event.text)

    async def evaluate_answer(self, answer: str, *, question: str | None = None) -> None:
        """Evaluate a typed answer exactly like a recognized one."""
        if self._closed or self._state.evaluating:
            return
        if question is not None:
            self._state.question = question
        self._state.transcript = answer
        self._render()
        await self._evaluate(answer)

    def close(self) -> None:
        """Tear down; a capture still listening is cancelled and its result dropped."""
        if self._closed:
            return
        self._closed = True
        if self._capture is not None:
            self._capture.close()
        self._state.capture_state = CaptureState.IDLE
        self._logger.info("session_closed")

    async def _evaluate(self, answer: str) -> None:
        if not answer.strip():
            return
        if not self._credential_configured:
            self._state.feedback = MISSING_API_KEY
            self._render()
            return

        question = self._state.question
        self._state.evaluating = True
        self._state.feedback = ANALYZING_PLACEHOLDER
        self._render()

        try:
            feedback = await self._evaluator.evaluate(question, answer)
        except CoachError as exc:
            feedback = describe_error(exc, FEEDBACK_MESSAGES)
            self._logger.warning("feedback_failed", extra={"reason": type(exc).__name__})
        finally:
            self._state.evaluating = False

        if self._closed:
            return
        self._state.feedback = feedback
        self._render()

    def _render(self) -> None:
        if self._on_change is not None and not self._closed:
            self._on_change(self._state)
