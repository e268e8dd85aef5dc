from __future__ import annotations

import asyncio
import threading

import httpx

from interview_coach.feedback import FeedbackEvaluator
from interview_coach.llm.client import ChatCompletionClient
from interview_coach.llm.errors import ApiReportedError, ChatTransportError, UnusableResponseError
from interview_coach.messages import (
    ANALYZING_PLACEHOLDER,
    FEEDBACK_MESSAGES,
    MISSING_API_KEY,
    QUESTION_MESSAGES,
    QUESTION_PLACEHOLDER,
    SPEECH_UNAVAILABLE,
)
from interview_coach.questions import QuestionProvider
from interview_coach.session import InterviewSession
from interview_coach.voice.capture import CaptureState, Failed, Recognized, SpeechCapture


class StubQuestions:
    def __init__(self, question: str = "Explain closures in JavaScript.", error: Exception | None = None) -> None:
        self.question = question
        self.error = error
        self.calls = 0

    async def fetch_question(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.question


class StubEvaluator:
    def __init__(self, feedback: str = "Clear and accurate.", error: Exception | None = None) -> None:
        self.feedback = feedback
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def evaluate(self, question: str, answer: str) -> str:
        self.calls.append((question, answer))
        if self.error is not None:
            raise self.error
        return self.feedback


class GatedRecognizer:
    def __init__(self, transcript: str) -> None:
        self.transcript = transcript
        self.release = threading.Event()
        self.calls = 0

    def listen_once(self) -> str:
        self.calls += 1
        self.release.wait(timeout=5)
        return self.transcript


def _capture(recognizer: GatedRecognizer) -> SpeechCapture:
    return SpeechCapture(lambda config: recognizer)


def test_start_loads_trimmed_question() -> None:
    questions = StubQuestions("What is event delegation?")
    session = InterviewSession(questions, StubEvaluator())

    asyncio.run(session.start())

    assert session.state.question == "What is event delegation?"
    assert session.state.loading_question is False
    assert questions.calls == 1


def test_missing_credential_sets_message_without_network_call() -> None:
    questions = StubQuestions()
    session = InterviewSession(questions, StubEvaluator(), credential_configured=False)

    asyncio.run(session.start())

    assert session.state.question == MISSING_API_KEY
    assert questions.calls == 0


def test_missing_credential_blocks_feedback_call() -> None:
    evaluator = StubEvaluator()
    session = InterviewSession(StubQuestions(), evaluator, credential_configured=False)

    asyncio.run(session.handle_capture_event(Recognized("My answer")))

    assert session.state.transcript == "My answer"
    assert session.state.feedback == MISSING_API_KEY
    assert evaluator.calls == []


def test_question_errors_never_leave_placeholder() -> None:
    cases = [
        (ApiReportedError("quota exceeded"), "⚠️ API Error: quota exceeded"),
        (UnusableResponseError("no choices"), QUESTION_MESSAGES.no_result),
        (ChatTransportError("timeout"), QUESTION_MESSAGES.transport),
    ]
    for error, expected in cases:
        session = InterviewSession(StubQuestions(error=error), StubEvaluator())
        asyncio.run(session.start())

        assert session.state.question == expected
        assert session.state.question != QUESTION_PLACEHOLDER
        assert session.state.loading_question is False


def test_new_question_clears_previous_answer() -> None:
    rendered: list[tuple[str, str, str]] = []
    session = InterviewSession(
        StubQuestions("Q2"),
        StubEvaluator(),
        on_change=lambda state: rendered.append((state.question, state.transcript, state.feedback)),
    )
    session.state.transcript = "old answer"
    session.state.feedback = "old feedback"

    asyncio.run(session.new_question())

    assert rendered[0] == (QUESTION_PLACEHOLDER, "", "")
    assert rendered[-1] == ("Q2", "", "")


def test_recognized_sets_transcript_and_triggers_one_evaluation() -> None:
    evaluator = StubEvaluator("Good use of lexical scope.")
    feedback_seen: list[str] = []
    session = InterviewSession(
        StubQuestions("Explain closures."),
        evaluator,
        on_change=lambda state: feedback_seen.append(state.feedback),
    )

    async def _run() -> None:
        await session.start()
        await session.handle_capture_event(Recognized("What is a closure?"))

    asyncio.run(_run())

    assert session.state.transcript == "What is a closure?"
    assert session.state.capture_state == CaptureState.IDLE
    assert evaluator.calls == [("Explain closures.", "What is a closure?")]
    assert ANALYZING_PLACEHOLDER in feedback_seen
    assert session.state.feedback == "Good use of lexical scope."


def test_failed_event_only_stops_listening() -> None:
    evaluator = StubEvaluator()
    session = InterviewSession(StubQuestions(), evaluator)
    session.state.capture_state = CaptureState.LISTENING
    session.state.transcript = "earlier"
    session.state.feedback = "earlier feedback"

    asyncio.run(session.handle_capture_event(Failed("no-speech")))

    assert session.state.capture_state == CaptureState.IDLE
    assert session.state.transcript == "earlier"
    assert session.state.feedback == "earlier feedback"
    assert evaluator.calls == []


def test_feedback_errors_map_to_inline_text() -> None:
    cases = [
        (ApiReportedError("quota exceeded"), "⚠️ API Error: quota exceeded"),
        (UnusableResponseError("no choices"), FEEDBACK_MESSAGES.no_result),
        (ChatTransportError("reset"), FEEDBACK_MESSAGES.transport),
    ]
    for error, expected in cases:
        session = InterviewSession(StubQuestions(), StubEvaluator(error=error))
        asyncio.run(session.handle_capture_event(Recognized("answer")))

        assert session.state.feedback == expected
        assert session.state.evaluating is False


def test_spoken_answer_flows_into_feedback() -> None:
    recognizer = GatedRecognizer("It captures variables from the outer scope.")
    evaluator = StubEvaluator("Solid.")
    session = InterviewSession(StubQuestions("What is a closure?"), evaluator, _capture(recognizer))

    async def _run() -> None:
        await session.start()
        recognizer.release.set()
        await session.start_listening()

    asyncio.run(_run())

    assert session.state.transcript == "It captures variables from the outer scope."
    assert session.state.feedback == "Solid."
    assert evaluator.calls == [("What is a closure?", "It captures variables from the outer scope.")]


def test_start_listening_while_listening_is_noop() -> None:
    recognizer = GatedRecognizer("What is a closure?")
    evaluator = StubEvaluator()
    session = InterviewSession(StubQuestions("Explain closures."), evaluator, _capture(recognizer))

    async def _run():
        await session.start()
        first = asyncio.create_task(session.start_listening())
        await asyncio.sleep(0)
        assert session.state.capture_state == CaptureState.LISTENING
        before = (session.state.transcript, session.state.feedback)

        await session.start_listening()
        after = (session.state.capture_state, session.state.transcript, session.state.feedback)

        recognizer.release.set()
        await asyncio.wait_for(first, timeout=5)
        return before, after

    before, after = asyncio.run(_run())

    assert after == (CaptureState.LISTENING, *before)
    assert recognizer.calls == 1
    assert evaluator.calls == [("Explain closures.", "What is a closure?")]


def test_listening_is_blocked_while_question_loads() -> None:
    recognizer = GatedRecognizer("answer")
    recognizer.release.set()
    session = InterviewSession(StubQuestions(), StubEvaluator(), _capture(recognizer))
    session.state.loading_question = True

    asyncio.run(session.start_listening())

    assert recognizer.calls == 0
    assert session.state.capture_state == CaptureState.IDLE


def test_speech_unavailable_is_reported_at_start() -> None:
    session = InterviewSession(StubQuestions(), StubEvaluator(), SpeechCapture(None))

    async def _run() -> None:
        await session.start()
        await session.start_listening()

    asyncio.run(_run())

    assert session.state.speech_available is False
    assert session.state.notice == SPEECH_UNAVAILABLE
    assert session.state.capture_state == CaptureState.IDLE


def test_close_while_listening_drops_terminal_event() -> None:
    recognizer = GatedRecognizer("late answer")
    evaluator = StubEvaluator()
    renders: list[str] = []
    session = InterviewSession(
        StubQuestions(),
        evaluator,
        _capture(recognizer),
        on_change=lambda state: renders.append(state.capture_state.value),
    )

    async def _run() -> None:
        await session.start()
        listening = asyncio.create_task(session.start_listening())
        await asyncio.sleep(0)
        session.close()
        recognizer.release.set()
        await asyncio.wait_for(listening, timeout=5)

    asyncio.run(_run())
    assert session.closed is True
    assert session.state.transcript == ""
    assert session.state.capture_state == CaptureState.IDLE
    assert evaluator.calls == []
    assert renders[-1] == "listening"


def test_typed_answer_uses_given_question() -> None:
    evaluator = StubEvaluator("Mention the event loop.")
    session = InterviewSession(StubQuestions(), evaluator)

    asyncio.run(session.evaluate_answer("Promises run later.", question="How do promises work?"))

    assert session.state.question == "How do promises work?"
    assert session.state.transcript == "Promises run later."
    assert evaluator.calls == [("How do promises work?", "Promises run later.")]


def test_blank_typed_answer_is_not_evaluated() -> None:
    evaluator = StubEvaluator()
    session = InterviewSession(StubQuestions(), evaluator)

    asyncio.run(session.evaluate_answer("   ", question="Q"))

    assert evaluator.calls == []
    assert session.state.feedback == ""


def test_unencodable_api_key_settles_on_transport_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"content": "unused"}}]})

    client = ChatCompletionClient("sk-abc’def", transport=httpx.MockTransport(handler))
    session = InterviewSession(QuestionProvider(client), FeedbackEvaluator(client))

    async def _run() -> None:
        await session.start()
        await session.handle_capture_event(Recognized("An answer."))

    asyncio.run(_run())

    assert session.state.question == QUESTION_MESSAGES.transport
    assert session.state.loading_question is False
    assert session.state.feedback == FEEDBACK_MESSAGES.transport
