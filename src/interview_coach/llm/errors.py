"""Failure kinds reported by the chat-completion client."""


class CoachError(RuntimeError):
    """Base class for chat-completion failures surfaced to the session."""


class MissingCredentialError(CoachError):
    """Raised when no API key is configured; no request is attempted."""


class ApiReportedError(CoachError):
    """The remote service answered with a structured ``error`` object."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnusableResponseError(CoachError):
    """The response carried neither an error nor a usable first choice."""


class ChatTransportError(CoachError):
    """Network failure, timeout, or a body that is not JSON."""
