"""Chat-completion client and its error taxonomy."""

from .client import ChatCompletionClient, ChatCompletionRequest, parse_completion
from .errors import (
    ApiReportedError,
    ChatTransportError,
    CoachError,
    MissingCredentialError,
    UnusableResponseError,
)

__all__ = [
    "ApiReportedError",
    "ChatCompletionClient",
    "ChatCompletionRequest",
    "ChatTransportError",
    "CoachError",
    "MissingCredentialError",
    "UnusableResponseError",
    "parse_completion",
]
