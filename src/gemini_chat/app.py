"""Textual app hosting the single-screen Gemini chat."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Static, TextArea

from .chat import GeminiClient
from .config import has_credential, load_config
from .controller import CompletionClient, InputController
from .logging_utils import configure_logging
from .state import ConversationSnapshot, ConversationState
from .task_manager import TaskManager
from .widgets.conversation import ConversationView
from .widgets.input_box import InputBox, MessageInput
from .widgets.setup_notice import SetupNotice
from .widgets.sidebar import Sidebar
from .widgets.welcome import WelcomeView

LOGGER = logging.getLogger(__name__)

ACTIVE_REQUEST = "active_request"


class GeminiChatApp(App[None]):
    """Chat-style TUI relaying prompts to a hosted Gemini model."""

    CSS = """
    Screen {
        layout: vertical;
        background: $background;
    }

    #app-root {
        height: 1fr;
    }

    #main-content {
        width: 1fr;
        height: 100%;
    }

    #chat-header {
        height: 1;
        padding: 0 2;
        text-style: bold;
    }

    #conversation {
        height: 1fr;
        padding: 1 2;
    }

    InputBox {
        border-top: solid $panel;
        background: $surface;
    }

    .user-row {
        background: $user-row;
    }

    .bot-row {
        background: $bot-row;
    }
    """

    DEFAULT_ACTION_DESCRIPTIONS: dict[str, str] = {
        "quit": "Quit",
        "scroll_up": "Scroll Up",
        "scroll_down": "Scroll Down",
    }

    def __init__(
        self,
        config: dict[str, dict[str, Any]] | None = None,
        client: CompletionClient | None = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        self.window_title = str(self.config["app"]["title"])
        configure_logging(self.config["logging"])
        LOGGER.info(
            "app.python",
            extra={
                "event": "app.python",
                "executable": sys.executable,
                "version": sys.version.split()[0],
            },
        )

        gemini_cfg = self.config["gemini"]
        self.model_display_name = str(gemini_cfg["model_display_name"])
        self.credential_missing = not has_credential(self.config)
        self.state = ConversationState()
        self.client: CompletionClient | None = None
        self.controller: InputController | None = None
        if not self.credential_missing:
            self.client = client or GeminiClient(
                api_key=str(gemini_cfg["api_key"]),
                model=str(gemini_cfg["model"]),
                host=str(gemini_cfg["host"]),
                api_version=str(gemini_cfg["api_version"]),
                timeout=gemini_cfg.get("timeout"),
            )
            self.controller = InputController(self.state, self.client)
        self._task_manager = TaskManager()
        self._binding_specs = self._binding_specs_from_config(self.config)
        super().__init__()

    @classmethod
    def _binding_specs_from_config(
        cls, config: dict[str, dict[str, Any]]
    ) -> list[Binding]:
        keybinds = config.get("keybinds", {})
        bindings: list[Binding] = []
        for action_name, description in cls.DEFAULT_ACTION_DESCRIPTIONS.items():
            binding_key = keybinds.get(action_name)
            if isinstance(binding_key, str) and binding_key.strip():
                bindings.append(
                    Binding(
                        key=binding_key.strip(),
                        action=action_name,
                        description=description,
                        show=True,
                    )
                )
        return bindings

    def get_css_variables(self) -> dict[str, str]:
        ui_cfg = self.config["ui"]
        return {
            **super().get_css_variables(),
            "user-row": str(ui_cfg["user_message_color"]),
            "bot-row": str(ui_cfg["assistant_message_color"]),
        }

    def compose(self) -> ComposeResult:
        """Compose the chat layout, or the setup notice when no key is set."""
        yield Header()
        if self.credential_missing:
            yield SetupNotice(id="setup_notice")
        else:
            with Horizontal(id="app-root"):
                yield Sidebar(id="sidebar")
                with Vertical(id="main-content"):
                    yield Static(self.model_display_name, id="chat-header")
                    yield ConversationView(
                        show_timestamps=bool(self.config["ui"]["show_timestamps"]),
                        id="conversation",
                    )
                    yield InputBox(should_submit=self._should_submit)
        yield Footer()

    async def on_mount(self) -> None:
        """Register keybindings and start rendering state snapshots."""
        self.title = self.window_title
        for binding in self._binding_specs:
            self.bind(
                binding.key,
                binding.action,
                description=binding.description,
                show=binding.show,
            )
        if self.credential_missing:
            self.sub_title = "Setup required"
            LOGGER.warning(
                "app.credential.missing",
                extra={"event": "app.credential.missing"},
            )
            return

        self._set_idle_sub_title()
        self.state.subscribe(self._on_state_changed)
        await self._render_snapshot(self.state.snapshot())
        self.query_one("#message_input", MessageInput).focus()

    def _set_idle_sub_title(self) -> None:
        self.sub_title = f"Model: {self.model_display_name}"

    def _should_submit(self, key: str) -> bool:
        return self.controller is not None and self.controller.wants_submit(key)

    def _on_state_changed(self, snapshot: ConversationSnapshot) -> None:
        self.call_later(self._render_snapshot, snapshot)

    async def _render_snapshot(self, snapshot: ConversationSnapshot) -> None:
        """Redraw the conversation and input controls from a snapshot."""
        conversation = self.query_one(ConversationView)
        await conversation.render_snapshot(snapshot)

        message_input = self.query_one("#message_input", MessageInput)
        # Compare against the live value: keystrokes may have landed after this
        # snapshot was queued and must not be overwritten by it.
        pending_input = self.state.pending_input
        if message_input.text != pending_input:
            message_input.text = pending_input
            message_input.move_cursor(message_input.document.end)
        message_input.disabled = snapshot.is_awaiting_reply
        self.query_one("#send_button", Button).disabled = not snapshot.can_send

        if snapshot.is_awaiting_reply:
            self.sub_title = "Waiting for reply..."
        else:
            self._set_idle_sub_title()
            message_input.focus()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id != "message_input" or self.controller is None:
            return
        self.controller.update_input(event.text_area.text)

    async def on_message_input_submitted(self, _event: MessageInput.Submitted) -> None:
        await self.send_user_message()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle send button clicks."""
        if event.button.id == "send_button":
            await self.send_user_message()

    def on_welcome_view_suggestion_selected(
        self, event: WelcomeView.SuggestionSelected
    ) -> None:
        if self.controller is None:
            return
        self.controller.select_suggestion(event.prompt)
        self.query_one("#message_input", MessageInput).focus()

    async def send_user_message(self) -> None:
        """Start one request for the staged input in a tracked background task."""
        if self.controller is None:
            return
        if self._task_manager.is_running(ACTIVE_REQUEST) or self.state.is_awaiting_reply:
            self.sub_title = "Busy. Wait for the current reply."
            return
        if not self.controller.can_send:
            return
        task = asyncio.create_task(self.controller.send())
        self._task_manager.add(task, name=ACTIVE_REQUEST)

    async def wait_for_reply(self) -> None:
        """Await the in-flight request, if any."""
        await self._task_manager.await_all()

    async def on_unmount(self) -> None:
        """Cancel outstanding work and close the HTTP client."""
        self.state.unsubscribe(self._on_state_changed)
        await self._task_manager.cancel_all()
        aclose = getattr(self.client, "aclose", None)
        if aclose is not None:
            await aclose()

    async def action_quit(self) -> None:
        """Exit the app."""
        self.exit()

    def action_scroll_up(self) -> None:
        """Scroll conversation up."""
        if self.credential_missing:
            return
        self.query_one(ConversationView).scroll_relative(y=-10, animate=False)

    def action_scroll_down(self) -> None:
        """Scroll conversation down."""
        if self.credential_missing:
            return
        self.query_one(ConversationView).scroll_relative(y=10, animate=False)
