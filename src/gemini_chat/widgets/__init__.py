"""Widget exports for gemini_chat UI."""

from .conversation import ConversationView
from .input_box import InputBox, MessageInput
from .message import MessageBubble
from .setup_notice import SetupNotice
from .sidebar import Sidebar
from .typing_indicator import TypingIndicator
from .welcome import SUGGESTIONS, WelcomeView

__all__ = [
    "SUGGESTIONS",
    "ConversationView",
    "InputBox",
    "MessageBubble",
    "MessageInput",
    "SetupNotice",
    "Sidebar",
    "TypingIndicator",
    "WelcomeView",
]
