"""Static sidebar: new-chat button, one history entry, and user badge.

None of these controls change conversation state.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Button, Static


class Sidebar(Vertical):
    DEFAULT_CSS = """
    Sidebar {
        width: 26;
        height: 100%;
        padding: 1;
        border-right: solid $panel;
        background: $surface;
    }
    Sidebar #new_chat_button {
        width: 100%;
        margin-bottom: 1;
    }
    Sidebar #chat_history {
        height: 1fr;
    }
    Sidebar .history-item.active {
        background: $boost;
        text-style: bold;
    }
    Sidebar #user_info {
        dock: bottom;
        height: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Button("+ New chat", id="new_chat_button")
        with Vertical(id="chat_history"):
            yield Static("💬 Personal Assistant", classes="history-item active")
        yield Static("👤 User", id="user_info")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "new_chat_button":
            event.stop()
