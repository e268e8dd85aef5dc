"""Interview question generation."""

from __future__ import annotations

import logging
from typing import Protocol

QUESTION_TEMPERATURE = 0.9
QUESTION_MAX_TOKENS = 60

_PROMPT_TEMPLATE = (
    "Generate a single, clear, and concise {topic} interview question suitable for a mid-level developer. "
    "Make it unique each time. Return only the question without any numbering or extra text."
)


class CompletionBackend(Protocol):
    """Anything that can turn a prompt into reply text."""

    async def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str: ...


def build_question_prompt(topic: str = "JavaScript") -> str:
    return _PROMPT_TEMPLATE.format(topic=topic.strip() or "JavaScript")


class QuestionProvider:
    """Asks the chat-completion backend for one fresh interview question."""

    def __init__(
        self,
        backend: CompletionBackend,
        *,
        topic: str = "JavaScript",
        logger: logging.Logger | None = None,
    ) -> None:
        self._backend = backend
        self._topic = topic
        self._logger = logger or logging.getLogger("interview_coach.questions")

    @property
    def topic(self) -> str:
        return self._topic

    async def fetch_question(self) -> str:
        """Return the generated question text; backend errors propagate."""
        self._logger.info("question_requested", extra={"topic": self._topic})
        question = await self._backend.complete(
            build_question_prompt(self._topic),
            temperature=QUESTION_TEMPERATURE,
            max_tokens=QUESTION_MAX_TOKENS,
        )
        self._logger.info("question_received", extra={"chars": len(question)})
        return question
