"""Async client for an OpenAI-compatible chat-completion endpoint."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

import httpx

from .errors import ApiReportedError, ChatTransportError, MissingCredentialError, UnusableResponseError

DEFAULT_BASE_URL = "https://api.openai.com/v1"


@dataclass(slots=True)
class ChatCompletionRequest:
    """Request body for a single-turn completion."""

    model: str
    prompt: str
    temperature: float
    max_tokens: int

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        prompt = payload.pop("prompt")
        payload["messages"] = [{"role": "user", "content": prompt}]
        return payload


def parse_completion(data: Any) -> str:
    """Return the trimmed first choice, or raise the matching failure.

    A body with an ``error`` member is a reported failure regardless of the
    HTTP status it arrived with. Anything without a non-blank
    ``choices[0].message.content`` is unusable.
    """
    if not isinstance(data, dict):
        raise UnusableResponseError("Response body is not a JSON object")

    error = data.get("error")
    if error is not None:
        if isinstance(error, dict):
            raise ApiReportedError(str(error.get("message") or ""))
        raise ApiReportedError(str(error))

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise UnusableResponseError("Response carried no choices")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content.strip():
        raise UnusableResponseError("First choice carried no message content")
    return content.strip()


class ChatCompletionClient:
    """Posts prompts to ``{base_url}/chat/completions`` with a bearer credential."""

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        model: str = "gpt-4o-mini",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._api_key = api_key.strip() if api_key else None
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._logger = logger or logging.getLogger("interview_coach.llm.client")

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        """Send one user prompt and return the trimmed reply text."""
        if not self.configured:
            raise MissingCredentialError("No API key configured for the chat-completion endpoint")

        request = ChatCompletionRequest(
            model=self._model,
            prompt=prompt,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        url = f"{self._base_url}/chat/completions"

        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport) as client:
                response = await client.post(url, headers=headers, json=request.to_payload())
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError covers header values httpx cannot ASCII-encode.
            self._logger.warning("chat_completion_transport_failed", extra={"error": f"{type(exc).__name__}: {exc}"})
            raise ChatTransportError(f"Request to {url} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            self._logger.warning("chat_completion_invalid_json", extra={"status_code": response.status_code})
            raise ChatTransportError(f"Response from {url} was not JSON") from exc

        self._logger.debug(
            "chat_completion_response",
            extra={"status_code": response.status_code, "body": data},
        )
        try:
            return parse_completion(data)
        except (ApiReportedError, UnusableResponseError) as exc:
            self._logger.warning(
                "chat_completion_failed",
                extra={"status_code": response.status_code, "reason": type(exc).__name__, "detail": str(exc)},
            )
            raise
