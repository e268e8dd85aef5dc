"""CLI startup entrypoint for the interview coach."""

from __future__ import annotations

import asyncio

import typer
from rich import print
from rich.console import Console

from interview_coach.config import Settings, settings
from interview_coach.feedback import FeedbackEvaluator
from interview_coach.llm import ChatCompletionClient
from interview_coach.messages import MISSING_API_KEY, is_status_text
from interview_coach.questions import QuestionProvider
from interview_coach.session import InterviewSession, SessionState
from interview_coach.telemetry import configure_logging
from interview_coach.view import TerminalView, available_actions
from interview_coach.voice import CaptureConfig, QuestionReader, SpeechCapture

app = typer.Typer(help="Spoken interview practice with AI feedback")


def _build_client(config: Settings) -> ChatCompletionClient:
    return ChatCompletionClient(
        config.openai_api_key,
        base_url=config.openai_base_url,
        model=config.model,
        timeout_seconds=config.request_timeout_seconds,
    )


def _build_capture(config: Settings) -> SpeechCapture:
    factory = None
    if config.voice_enabled:
        from interview_coach.voice.stt_speechrecognition import detect_recognizer_factory

        factory = detect_recognizer_factory()
    return SpeechCapture(
        factory,
        CaptureConfig(
            language=config.speech_language,
            phrase_time_limit=config.phrase_time_limit,
            timeout=config.listen_timeout,
        ),
    )


def _build_session(
    config: Settings,
    *,
    topic: str | None = None,
    capture: SpeechCapture | None = None,
    on_change=None,
) -> InterviewSession:
    client = _build_client(config)
    effective_topic = topic or config.question_topic
    return InterviewSession(
        questions=QuestionProvider(client, topic=effective_topic),
        evaluator=FeedbackEvaluator(client, topic=effective_topic),
        capture=capture,
        credential_configured=client.configured,
        on_change=on_change,
    )


def _build_reader() -> QuestionReader:
    try:
        from interview_coach.voice.tts_pyttsx3 import Pyttsx3SpeechOutput

        return QuestionReader(Pyttsx3SpeechOutput())
    except RuntimeError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    except ImportError:
        print({"error": "Voice extras are missing. Install with: pip install 'interview-coach[voice]'"})
        raise typer.Exit(code=1)


async def _read_aloud(reader: QuestionReader | None, state: SessionState) -> None:
    if reader is not None:
        await asyncio.to_thread(reader.read, state.question)


async def _practice_loop(session: InterviewSession, view: TerminalView, reader: QuestionReader | None) -> None:
    try:
        await session.start()
        await _read_aloud(reader, session.state)

        while True:
            view.render(session.state)
            try:
                choice = (await asyncio.to_thread(view.console.input, "> ")).strip().lower()
            except EOFError:
                return

            actions = available_actions(session.state)
            if choice in ("q", "quit", "exit"):
                return
            if choice in ("n", "new") and actions.new_question:
                await session.new_question()
                await _read_aloud(reader, session.state)
            elif choice in ("s", "speak") and actions.speak:
                await session.start_listening()
            elif choice in ("t", "type") and actions.type_answer:
                answer = await asyncio.to_thread(view.console.input, "Your answer: ")
                await session.evaluate_answer(answer)
            elif choice:
                view.console.print(f"'{choice}' is not available right now.", style="dim", markup=False)
    finally:
        session.close()


@app.command()
def practice(
    topic: str = typer.Option(None, help="Interview topic, e.g. Python or SQL"),
    read_aloud: bool = typer.Option(False, help="Speak each new question with the local TTS engine"),
) -> None:
    """Run an interactive practice session: question, spoken answer, feedback."""
    configure_logging(settings.log_level)
    view = TerminalView(Console())
    reader = _build_reader() if read_aloud else None
    session = _build_session(settings, topic=topic, capture=_build_capture(settings), on_change=view.show_status)

    try:
        asyncio.run(_practice_loop(session, view, reader))
    except KeyboardInterrupt:
        pass
    finally:
        session.close()
    print({"practice": "stopped"})


@app.command()
def ask(topic: str = typer.Option(None, help="Interview topic, e.g. Python or SQL")) -> None:
    """Print one generated interview question."""
    configure_logging(settings.log_level)
    session = _build_session(settings, topic=topic)
    asyncio.run(session.new_question())

    question = session.state.question
    if is_status_text(question):
        print({"error": question})
        raise typer.Exit(code=1)
    print({"question": question})


@app.command()
def evaluate(
    question: str = typer.Option(..., help="The interview question that was asked"),
    answer: str = typer.Option(..., help="The candidate's answer text"),
    topic: str = typer.Option(None, help="Interview topic used to frame the feedback"),
) -> None:
    """Print AI feedback for a typed answer."""
    configure_logging(settings.log_level)
    session = _build_session(settings, topic=topic)
    asyncio.run(session.evaluate_answer(answer, question=question))

    feedback = session.state.feedback
    if not feedback or is_status_text(feedback):
        print({"error": feedback or "Answer is empty"})
        raise typer.Exit(code=1)
    print({"question": question, "feedback": feedback})


@app.command("config")
def show_config() -> None:
    """Show the effective runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "model": settings.model,
            "openai_base_url": settings.openai_base_url,
            "openai_api_key": settings.masked_api_key() or MISSING_API_KEY,
            "question_topic": settings.question_topic,
            "speech_language": settings.speech_language,
            "voice_enabled": settings.voice_enabled,
        }
    )


if __name__ == "__main__":
    app()
