"""Domain exception hierarchy for the Gemini chat application."""

from __future__ import annotations


class GeminiChatError(RuntimeError):
    """Base class for all domain-level chat errors."""


class RemoteApiError(GeminiChatError):
    """Raised when the remote response body carries an ``error`` object."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeminiConnectionError(GeminiChatError):
    """Raised when the generateContent endpoint cannot be reached."""


class GeminiResponseError(GeminiChatError):
    """Raised when the response body is not valid JSON."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialError(GeminiChatError):
    """Raised when a client is built without an API key."""


class ConfigValidationError(GeminiChatError):
    """Raised when configuration cannot be validated safely."""
