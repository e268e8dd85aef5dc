"""User-facing status and error texts shown inline by the view."""

from __future__ import annotations

from dataclasses import dataclass

WARNING_MARKER = "⚠️"

QUESTION_PLACEHOLDER = "Loading question..."
ANALYZING_PLACEHOLDER = "Analyzing your answer with AI..."
MISSING_API_KEY = f"{WARNING_MARKER} Please set your OpenAI API key in .env"
SPEECH_UNAVAILABLE = (
    "Speech recognition is not available in this environment. "
    "Install the voice extras: pip install 'interview-coach[voice]'"
)

TRANSCRIPT_EMPTY = "🎙️ Your spoken answer will appear here..."
FEEDBACK_EMPTY = "🤖 AI feedback will appear here after you answer."


def api_error(message: str) -> str:
    return f"{WARNING_MARKER} API Error: {message}"


@dataclass(frozen=True, slots=True)
class FlowMessages:
    """Fallback texts for one request flow."""

    no_result: str
    transport: str


QUESTION_MESSAGES = FlowMessages(
    no_result=(
        f"{WARNING_MARKER} Unable to fetch a new question. This may be due to API quota being exceeded or "
        "temporary server issues. Please check your OpenAI billing/plan or try again later."
    ),
    transport=f"{WARNING_MARKER} Error loading question. Check your API key, billing, and network connection.",
)

FEEDBACK_MESSAGES = FlowMessages(
    no_result=(
        f"{WARNING_MARKER} Unable to get feedback. This may be due to API quota being exceeded or "
        "temporary server issues. Please check your OpenAI billing/plan or try again later."
    ),
    transport=f"{WARNING_MARKER} Error getting feedback. Check your API key, billing, and network connection.",
)


def is_status_text(text: str) -> bool:
    """True for placeholders and warnings, i.e. anything that is not real content."""
    return text.startswith(WARNING_MARKER) or text in (QUESTION_PLACEHOLDER, ANALYZING_PLACEHOLDER)
