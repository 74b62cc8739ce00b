"""Map raw remote error text to the message shown in the conversation.

Gemini does not hand back structured error codes we can rely on, so the
rules below match substrings of the error message. Keep all matching in
``classify_error`` so the rules can be swapped in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SAFETY_FALLBACK_REPLY = (
    "Sorry, I couldn't generate a response. "
    "The response might have been blocked due to safety settings."
)

INVALID_CREDENTIAL_TEXT = (
    "❌ Invalid API Key! Please check GEMINI_API_KEY or gemini.api_key in your config."
)
ENDPOINT_NOT_ACTIVATED_TEXT = (
    "❌ API Not Activated or Model Error! Please visit https://aistudio.google.com/ "
    "and run a test prompt to activate your key. If the error persists, there "
    "might be a billing or model access issue."
)
ACCESS_DENIED_TEXT = (
    '❌ API Access Denied! Please ensure the "Generative Language API" is '
    "enabled for your project."
)
GENERIC_FAILURE_TEMPLATE = (
    "❌ Error: {message}\n\nPlease check your network connection and API key status."
)


class ErrorCategory(str, Enum):
    """User-facing buckets for failed completion requests."""

    INVALID_CREDENTIAL = "invalid_credential"
    ENDPOINT_NOT_ACTIVATED = "endpoint_not_activated"
    ACCESS_DENIED = "access_denied"
    GENERIC_REMOTE_FAILURE = "generic_remote_failure"


@dataclass(frozen=True)
class ClassifiedError:
    """Category plus the text rendered as a bot message."""

    category: ErrorCategory
    text: str


# First match wins.
_MARKER_RULES: tuple[tuple[tuple[str, ...], ErrorCategory, str], ...] = (
    (("API_KEY_INVALID",), ErrorCategory.INVALID_CREDENTIAL, INVALID_CREDENTIAL_TEXT),
    (
        ("404", "not found"),
        ErrorCategory.ENDPOINT_NOT_ACTIVATED,
        ENDPOINT_NOT_ACTIVATED_TEXT,
    ),
    (("403",), ErrorCategory.ACCESS_DENIED, ACCESS_DENIED_TEXT),
)


def classify_error(message: str) -> ClassifiedError:
    """Return the category and display text for a raw error message."""
    for markers, category, text in _MARKER_RULES:
        if any(marker in message for marker in markers):
            return ClassifiedError(category=category, text=text)
    return ClassifiedError(
        category=ErrorCategory.GENERIC_REMOTE_FAILURE,
        text=GENERIC_FAILURE_TEMPLATE.format(message=message),
    )
