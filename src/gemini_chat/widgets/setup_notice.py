"""Blocking notice shown in place of the chat when no API key is configured."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ..config import API_KEY_ENV_VAR, CONFIG_PATH


class SetupNotice(Vertical):
    DEFAULT_CSS = """
    SetupNotice {
        align: center middle;
        width: 100%;
        height: 1fr;
    }
    SetupNotice Static {
        width: 100%;
        text-align: center;
        padding-bottom: 1;
    }
    SetupNotice #setup_title {
        text-style: bold;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("🔑", id="setup_icon")
        yield Static("API Key Missing!", id="setup_title")
        yield Static(
            f"Please set {API_KEY_ENV_VAR} in your environment, "
            f"or api_key under [gemini] in {CONFIG_PATH}.",
            id="setup_body",
        )
        yield Static("Then restart GeminiTerm.", id="setup_hint")
