"""Message row widget: avatar plus rendered text."""

from __future__ import annotations

from typing import Any

from rich.markdown import Markdown
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from ..state import Message, Sender

AVATARS: dict[Sender, str] = {Sender.USER: "👤", Sender.BOT: "✨"}


class MessageBubble(Horizontal):
    """Render a single chat message with an avatar keyed by sender."""

    DEFAULT_CSS = """
    MessageBubble {
        height: auto;
        margin: 1 0;
    }
    MessageBubble > .message-avatar {
        width: 3;
        height: 1;
    }
    MessageBubble > .message-content {
        width: 1fr;
        height: auto;
        padding: 0 1;
    }
    MessageBubble .message-timestamp {
        color: $text-muted;
    }
    MessageBubble .message-text {
        height: auto;
    }
    """

    def __init__(
        self, message: Message, show_timestamp: bool = False, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.message = message
        self.show_timestamp = show_timestamp
        self.add_class("user-row" if message.sender is Sender.USER else "bot-row")

    @property
    def avatar(self) -> str:
        return AVATARS[self.message.sender]

    def compose(self) -> ComposeResult:
        yield Static(self.avatar, classes="message-avatar")
        with Vertical(classes="message-content"):
            if self.show_timestamp:
                yield Static(
                    Text(self.message.timestamp.strftime("%H:%M:%S")),
                    classes="message-timestamp",
                )
            yield Static(self._render_text(), classes="message-text")

    def _render_text(self) -> Text | Markdown:
        # Users type plain text; replies come back as markdown.
        if self.message.sender is Sender.USER:
            return Text(self.message.text)
        return Markdown(self.message.text)
