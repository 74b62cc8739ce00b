"""Input controller: send gating, key decisions, and the request/response exchange."""

from __future__ import annotations

import logging
from typing import Protocol

from .classification import classify_error
from .state import ConversationState

LOGGER = logging.getLogger(__name__)

SUBMIT_KEY = "enter"
NEWLINE_KEYS = frozenset({"shift+enter"})


class CompletionClient(Protocol):
    async def generate(self, prompt: str) -> str: ...


class InputController:
    """Mediate between raw keystrokes, conversation state, and the completion client."""

    def __init__(self, state: ConversationState, client: CompletionClient) -> None:
        self.state = state
        self.client = client

    @property
    def can_send(self) -> bool:
        """True when the staged input has content and no reply is pending."""
        return self.state.snapshot().can_send

    def wants_submit(self, key: str) -> bool:
        """Return True when ``key`` should submit instead of inserting a newline."""
        if key in NEWLINE_KEYS:
            return False
        return key == SUBMIT_KEY and not self.state.is_awaiting_reply

    def update_input(self, text: str) -> None:
        self.state.set_pending_input(text)

    def select_suggestion(self, prompt: str) -> None:
        """Stage a suggestion prompt verbatim without sending it."""
        self.state.set_pending_input(prompt)

    async def send(self) -> bool:
        """Run one exchange for the staged input.

        Returns False when nothing was sent (blank input or a reply pending).
        Failures end up as bot messages; nothing is raised to the caller.
        """
        if self.state.is_awaiting_reply:
            LOGGER.info(
                "controller.send.rejected",
                extra={"event": "controller.send.rejected", "reason": "awaiting_reply"},
            )
            return False
        prompt = self.state.pending_input
        if not self.state.append_user_message(prompt):
            return False

        try:
            reply = await self.client.generate(prompt)
        except Exception as exc:  # noqa: BLE001 - every failure becomes a chat message.
            classified = classify_error(str(exc))
            LOGGER.warning(
                "controller.send.failed",
                extra={
                    "event": "controller.send.failed",
                    "category": classified.category.value,
                    "error_type": type(exc).__name__,
                },
            )
            self.state.resolve_with_error(classified.text)
            return True

        self.state.resolve_with_reply(reply)
        return True
