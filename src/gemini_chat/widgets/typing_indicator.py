"""Animated row shown while a reply is pending."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.timer import Timer
from textual.widgets import Label, Static

from ..state import Sender
from .message import AVATARS

_ANIMATION_FRAMES: tuple[str, ...] = (
    "·  ·  ·",
    "●  ·  ·",
    "·  ●  ·",
    "·  ·  ●",
)


class TypingIndicator(Static):
    """Bot-avatar row with bouncing dots, hidden unless running."""

    DEFAULT_CSS = """
    TypingIndicator {
        layout: horizontal;
        height: 1;
        margin: 1 0;
        display: none;
    }
    TypingIndicator #typing_avatar {
        width: 3;
    }
    TypingIndicator #typing_dots {
        color: $text-muted;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._animation_timer: Timer | None = None
        self._frame_index = 0

    @property
    def running(self) -> bool:
        return self._animation_timer is not None

    @property
    def frame(self) -> str:
        return _ANIMATION_FRAMES[self._frame_index % len(_ANIMATION_FRAMES)]

    def compose(self) -> ComposeResult:
        yield Label(AVATARS[Sender.BOT], id="typing_avatar")
        yield Label(_ANIMATION_FRAMES[0], id="typing_dots")

    def start(self) -> None:
        """Show the row and begin animating."""
        if self.running:
            return
        self._frame_index = 0
        self.display = True
        self._update_dots()
        self._animation_timer = self.set_interval(0.3, self._advance_frame)

    def stop(self) -> None:
        """Stop animating and hide the row."""
        if self._animation_timer is not None:
            self._animation_timer.stop()
            self._animation_timer = None
        self.display = False

    def _advance_frame(self) -> None:
        self._frame_index = (self._frame_index + 1) % len(_ANIMATION_FRAMES)
        self._update_dots()

    def _update_dots(self) -> None:
        if not self.is_mounted:
            return
        self.query_one("#typing_dots", Label).update(self.frame)
