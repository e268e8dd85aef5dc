"""Read generated questions aloud."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from interview_coach.messages import is_status_text

from .interfaces import SpeechOutput


@dataclass(slots=True)
class ReadAloudConfig:
    """Controls for spoken questions."""

    enabled: bool = True
    max_chars: int = 400


class QuestionReader:
    """Speaks real questions; placeholders and warnings stay silent."""

    def __init__(
        self,
        output: SpeechOutput,
        config: ReadAloudConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._output = output
        self._config = config or ReadAloudConfig()
        self._logger = logger or logging.getLogger("interview_coach.voice.output")

    def read(self, question: str) -> bool:
        """Speak ``question`` and report whether anything was said."""
        if not self._config.enabled:
            return False

        normalized = " ".join(question.split())
        if not normalized or is_status_text(normalized):
            return False

        self._output.say(normalized[: self._config.max_chars])
        self._logger.debug("question_read_aloud", extra={"chars": len(normalized)})
        return True
