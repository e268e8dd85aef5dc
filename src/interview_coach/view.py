"""Terminal presentation of a practice session."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from interview_coach.messages import ANALYZING_PLACEHOLDER, FEEDBACK_EMPTY, TRANSCRIPT_EMPTY
from interview_coach.session import SessionState
from interview_coach.voice.capture import CaptureState


@dataclass(frozen=True, slots=True)
class ViewActions:
    """Which controls are currently enabled."""

    new_question: bool
    speak: bool
    type_answer: bool


def available_actions(state: SessionState) -> ViewActions:
    listening = state.capture_state == CaptureState.LISTENING
    busy = state.loading_question or state.evaluating
    return ViewActions(
        new_question=not state.loading_question,
        speak=state.speech_available and not listening and not state.loading_question,
        type_answer=not listening and not busy,
    )


def _action_hint(label: str, key: str, enabled: bool) -> Text:
    if enabled:
        return Text.assemble((f"[{key}]", "bold green"), f" {label}")
    return Text(f"[{key}] {label}", style="dim strike")


class TerminalView:
    """Renders session state with rich panels."""

    def __init__(self, console: Console | None = None, *, title: str = "🎤 Interview Coach") -> None:
        self._console = console or Console()
        self._title = title

    @property
    def console(self) -> Console:
        return self._console

    def render(self, state: SessionState) -> None:
        self._console.print(self.build(state))

    def build(self, state: SessionState) -> Group:
        actions = available_actions(state)
        listening = state.capture_state == CaptureState.LISTENING

        question = Panel(Text(state.question), title="Question", border_style="magenta")

        if listening:
            answer_text = Text("Listening...", style="bold yellow")
        else:
            answer_text = Text(state.transcript or TRANSCRIPT_EMPTY, style="" if state.transcript else "dim")
        answer = Panel(answer_text, title="Your Response", border_style="green")

        feedback_style = "italic" if state.feedback == ANALYZING_PLACEHOLDER else ""
        feedback = Panel(
            Text(state.feedback or FEEDBACK_EMPTY, style=feedback_style if state.feedback else "dim"),
            title="AI Feedback",
            border_style="blue",
        )

        hints = Text("  ").join(
            [
                _action_hint("Loading..." if state.loading_question else "New question", "n", actions.new_question),
                _action_hint("Listening..." if listening else "Speak your answer", "s", actions.speak),
                _action_hint("Type your answer", "t", actions.type_answer),
                _action_hint("Quit", "q", True),
            ]
        )

        parts = [Text(self._title, style="bold"), question, answer, feedback]
        if state.notice:
            parts.append(Text(state.notice, style="yellow"))
        parts.append(hints)
        return Group(*parts)

    def show_status(self, state: SessionState) -> None:
        """Print a one-line progress note for in-flight transitions."""
        if state.loading_question:
            self._console.print(Text("⏳ Loading question...", style="dim"))
        elif state.capture_state == CaptureState.LISTENING:
            self._console.print(Text("🎙️ Listening... speak your answer now.", style="yellow"))
        elif state.evaluating:
            self._console.print(Text(f"🤖 {ANALYZING_PLACEHOLDER}", style="italic dim"))
