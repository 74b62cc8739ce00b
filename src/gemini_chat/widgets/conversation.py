"""Scrollable conversation view that redraws from state snapshots."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll

from ..state import ConversationSnapshot
from .message import MessageBubble
from .typing_indicator import TypingIndicator
from .welcome import WelcomeView


class ConversationView(VerticalScroll):
    """Welcome cards when empty, otherwise message rows and a typing indicator."""

    DEFAULT_CSS = """
    ConversationView #message_list {
        height: auto;
        display: none;
    }
    """

    def __init__(self, show_timestamps: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.show_timestamps = show_timestamps
        self._rendered_count = 0

    @property
    def rendered_count(self) -> int:
        return self._rendered_count

    def compose(self) -> ComposeResult:
        yield WelcomeView(id="welcome")
        yield Vertical(id="message_list")
        yield TypingIndicator(id="typing_indicator")

    async def render_snapshot(self, snapshot: ConversationSnapshot) -> None:
        """Mount rows for messages not yet shown and sync the indicator."""
        self.query_one(WelcomeView).display = snapshot.is_empty
        message_list = self.query_one("#message_list", Vertical)
        message_list.display = not snapshot.is_empty

        # Messages are append-only, so only the tail is new.
        new_messages = snapshot.messages[self._rendered_count :]
        self._rendered_count = len(snapshot.messages)
        for message in new_messages:
            await message_list.mount(
                MessageBubble(message, show_timestamp=self.show_timestamps)
            )

        indicator = self.query_one(TypingIndicator)
        if snapshot.is_awaiting_reply:
            indicator.start()
        else:
            indicator.stop()

        if new_messages:
            self.scroll_end(animate=True)
