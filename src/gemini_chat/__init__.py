"""Top-level package for geminiterm."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import GeminiChatApp
    from .chat import GeminiClient
    from .classification import ErrorCategory, classify_error
    from .config import ensure_config_dir, has_credential, load_config
    from .controller import InputController
    from .exceptions import (
        ConfigValidationError,
        GeminiChatError,
        GeminiConnectionError,
        GeminiResponseError,
        MissingCredentialError,
        RemoteApiError,
    )
    from .state import ConversationSnapshot, ConversationState, Message, Sender

_LAZY_EXPORTS: dict[str, str] = {
    "GeminiChatApp": ".app",
    "GeminiClient": ".chat",
    "ErrorCategory": ".classification",
    "classify_error": ".classification",
    "ensure_config_dir": ".config",
    "has_credential": ".config",
    "load_config": ".config",
    "InputController": ".controller",
    "ConfigValidationError": ".exceptions",
    "GeminiChatError": ".exceptions",
    "GeminiConnectionError": ".exceptions",
    "GeminiResponseError": ".exceptions",
    "MissingCredentialError": ".exceptions",
    "RemoteApiError": ".exceptions",
    "ConversationSnapshot": ".state",
    "ConversationState": ".state",
    "Message": ".state",
    "Sender": ".state",
}

__all__ = sorted(_LAZY_EXPORTS)


def __getattr__(name: str) -> Any:
    """Lazily import symbols so importing the package does not pull in Textual."""
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(import_module(module_name, __name__), name)
