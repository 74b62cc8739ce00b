"""In-memory conversation state with snapshot publication."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import logging

LOGGER = logging.getLogger(__name__)


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    BOT = "bot"


@dataclass(frozen=True)
class Message:
    """A single immutable chat entry."""

    text: str
    sender: Sender
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ConversationSnapshot:
    """Read-only view of the conversation handed to subscribers."""

    messages: tuple[Message, ...]
    pending_input: str
    is_awaiting_reply: bool

    @property
    def is_empty(self) -> bool:
        return not self.messages

    @property
    def can_send(self) -> bool:
        """True when the staged input has content and no reply is pending."""
        return bool(self.pending_input.strip()) and not self.is_awaiting_reply


Listener = Callable[[ConversationSnapshot], None]


class ConversationState:
    """Own the append-only message list, staged input, and awaiting flag."""

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._pending_input = ""
        self._is_awaiting_reply = False
        self._listeners: list[Listener] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def pending_input(self) -> str:
        return self._pending_input

    @property
    def is_awaiting_reply(self) -> bool:
        return self._is_awaiting_reply

    def snapshot(self) -> ConversationSnapshot:
        """Return the current state as an immutable snapshot."""
        return ConversationSnapshot(
            messages=tuple(self._messages),
            pending_input=self._pending_input,
            is_awaiting_reply=self._is_awaiting_reply,
        )

    def subscribe(self, listener: Listener) -> None:
        """Register a listener called with a snapshot after every mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def append_user_message(self, text: str) -> bool:
        """Append a user message and mark a reply as pending.

        Returns False without touching state when ``text`` is blank.
        """
        if not text.strip():
            return False
        self._messages.append(Message(text=text, sender=Sender.USER))
        self._pending_input = ""
        self._is_awaiting_reply = True
        LOGGER.debug(
            "state.user_message.appended",
            extra={
                "event": "state.user_message.appended",
                "message_count": len(self._messages),
            },
        )
        self._publish()
        return True

    def resolve_with_reply(self, text: str) -> None:
        """Append the assistant reply and clear the awaiting flag."""
        self._settle(text)

    def resolve_with_error(self, display_text: str) -> None:
        """Append an error as an ordinary bot message and clear the awaiting flag."""
        self._settle(display_text)

    def set_pending_input(self, text: str) -> None:
        """Replace the staged input."""
        if text == self._pending_input:
            return
        self._pending_input = text
        self._publish()

    def _settle(self, text: str) -> None:
        self._messages.append(Message(text=text, sender=Sender.BOT))
        self._is_awaiting_reply = False
        self._publish()

    def _publish(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:  # noqa: BLE001 - one bad listener must not block others.
                LOGGER.error(
                    "state.listener.failed",
                    extra={
                        "event": "state.listener.failed",
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
