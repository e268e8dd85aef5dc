"""AI feedback on a candidate's spoken answer."""

from __future__ import annotations

import logging

from interview_coach.questions import CompletionBackend

FEEDBACK_TEMPERATURE = 0.7
FEEDBACK_MAX_TOKENS = 300

_PROMPT_TEMPLATE = """
You are an expert {topic} interviewer. The candidate answered the question below.

Question: {question}

Candidate's answer: {answer}

Please provide constructive, detailed feedback on the answer, highlighting strengths, weaknesses, and suggestions for improvement. Keep it concise but helpful.
"""


def build_feedback_prompt(question: str, answer: str, *, topic: str = "JavaScript") -> str:
    # Inputs travel inside a JSON body, so they are embedded verbatim.
    return _PROMPT_TEMPLATE.format(topic=topic, question=question, answer=answer)


class FeedbackEvaluator:
    """Requests interviewer-style feedback for one question/answer pair."""

    def __init__(
        self,
        backend: CompletionBackend,
        *,
        topic: str = "JavaScript",
        logger: logging.Logger | None = None,
    ) -> None:
        self._backend = backend
        self._topic = topic
        self._logger = logger or logging.getLogger("interview_coach.feedback")

    async def evaluate(self, question: str, answer: str) -> str:
        self._logger.info(
            "feedback_requested",
            extra={"question_chars": len(question), "answer_chars": len(answer)},
        )
        return await self._backend.complete(
            build_feedback_prompt(question, answer, topic=self._topic),
            temperature=FEEDBACK_TEMPERATURE,
            max_tokens=FEEDBACK_MAX_TOKENS,
        )
