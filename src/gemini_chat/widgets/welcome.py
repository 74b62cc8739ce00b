"""Welcome view with canned suggestion prompts for an empty conversation."""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.containers import Grid, Vertical
from textual.message import Message
from textual.widgets import Button, Static


@dataclass(frozen=True)
class Suggestion:
    icon: str
    label: str
    prompt: str


SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion("😄", "Tell me a joke", "Tell me a joke"),
    Suggestion("⚛️", "Explain React", "What is React?"),
    Suggestion("✍️", "Write a poem", "Write a short poem"),
    Suggestion("💻", "Coding help", "Help me with coding"),
)


class WelcomeView(Vertical):
    """Greeting plus one card per suggestion; picking a card never sends it."""

    DEFAULT_CSS = """
    WelcomeView {
        height: auto;
        align-horizontal: center;
        padding: 2 0;
    }
    WelcomeView #welcome_logo, WelcomeView #welcome_title {
        width: 100%;
        text-align: center;
    }
    WelcomeView #welcome_title {
        text-style: bold;
        padding-bottom: 1;
    }
    WelcomeView #suggestion_cards {
        grid-size: 2;
        grid-gutter: 1 2;
        height: auto;
        width: 70;
    }
    WelcomeView .suggestion-card {
        width: 100%;
    }
    """

    class SuggestionSelected(Message):
        """Posted with the literal prompt of the chosen card."""

        def __init__(self, prompt: str) -> None:
            super().__init__()
            self.prompt = prompt

    def compose(self) -> ComposeResult:
        yield Static("✨", id="welcome_logo")
        yield Static("How can I help you today?", id="welcome_title")
        with Grid(id="suggestion_cards"):
            for index, suggestion in enumerate(SUGGESTIONS):
                yield Button(
                    f"{suggestion.icon}  {suggestion.label}",
                    id=f"suggestion_{index}",
                    classes="suggestion-card",
                )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("suggestion_"):
            return
        event.stop()
        suggestion = SUGGESTIONS[int(button_id.removeprefix("suggestion_"))]
        self.post_message(self.SuggestionSelected(suggestion.prompt))
