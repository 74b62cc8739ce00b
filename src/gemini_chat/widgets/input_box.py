"""Input row: multi-line message field, send button, and disclaimer."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from textual import events
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Static, TextArea

PLACEHOLDER = "Message Gemini..."
FOOTER_NOTE = "Gemini can make mistakes. Check important info."


class MessageInput(TextArea):
    """TextArea where Enter submits and Shift+Enter inserts a newline."""

    class Submitted(Message):
        """Posted when the submit key is pressed and submission is allowed."""

    def __init__(
        self,
        should_submit: Callable[[str], bool] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.should_submit = should_submit

    async def _on_key(self, event: events.Key) -> None:
        if event.key == "shift+enter":
            event.stop()
            event.prevent_default()
            self.insert("\n")
            return
        if self.should_submit is not None and self.should_submit(event.key):
            event.stop()
            event.prevent_default()
            self.post_message(self.Submitted())


class InputBox(Vertical):
    """Input region with message field, send button, and footer note."""

    DEFAULT_CSS = """
    InputBox {
        height: auto;
        padding: 0 1;
    }
    InputBox #input_row {
        height: auto;
    }
    InputBox #message_input {
        width: 1fr;
        height: auto;
        max-height: 8;
    }
    InputBox #send_button {
        margin-left: 1;
        min-width: 8;
    }
    InputBox #input_footer {
        width: 100%;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        should_submit: Callable[[str], bool] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._should_submit = should_submit

    def compose(self):  # type: ignore[override]
        with Horizontal(id="input_row"):
            yield MessageInput(
                should_submit=self._should_submit,
                id="message_input",
                placeholder=PLACEHOLDER,
            )
            yield Button("Send", id="send_button", variant="success", disabled=True)
        yield Static(FOOTER_NOTE, id="input_footer")
