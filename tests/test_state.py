"""Tests for the append-only conversation state."""

from __future__ import annotations

import dataclasses
from datetime import datetime
import unittest

from gemini_chat.state import (
    ConversationSnapshot,
    ConversationState,
    Message,
    Sender,
)


class ConversationStateTests(unittest.TestCase):
    """Validate mutations, invariants, and snapshot publication."""

    def test_starts_empty(self) -> None:
        state = ConversationState()
        snapshot = state.snapshot()
        self.assertTrue(snapshot.is_empty)
        self.assertEqual(snapshot.pending_input, "")
        self.assertFalse(snapshot.is_awaiting_reply)
        self.assertFalse(snapshot.can_send)

    def test_blank_user_message_is_a_noop(self) -> None:
        for blank in ("", "   ", "\n\t "):
            with self.subTest(text=repr(blank)):
                state = ConversationState()
                state.set_pending_input(blank)
                self.assertFalse(state.append_user_message(blank))
                self.assertEqual(state.messages, ())
                self.assertEqual(state.pending_input, blank)
                self.assertFalse(state.is_awaiting_reply)

    def test_user_message_clears_input_and_sets_awaiting(self) -> None:
        state = ConversationState()
        state.set_pending_input("  hello  ")
        self.assertTrue(state.append_user_message("  hello  "))
        self.assertEqual(len(state.messages), 1)
        self.assertEqual(state.messages[0].text, "  hello  ")
        self.assertEqual(state.messages[0].sender, Sender.USER)
        self.assertEqual(state.pending_input, "")
        self.assertTrue(state.is_awaiting_reply)

    def test_resolve_with_reply_and_error_append_bot_messages(self) -> None:
        state = ConversationState()
        state.append_user_message("one")
        state.resolve_with_reply("reply")
        self.assertFalse(state.is_awaiting_reply)
        state.append_user_message("two")
        state.resolve_with_error("boom")
        self.assertFalse(state.is_awaiting_reply)
        self.assertEqual(
            [(m.sender, m.text) for m in state.messages],
            [
                (Sender.USER, "one"),
                (Sender.BOT, "reply"),
                (Sender.USER, "two"),
                (Sender.BOT, "boom"),
            ],
        )

    def test_messages_are_immutable_and_timestamped(self) -> None:
        state = ConversationState()
        state.append_user_message("hi")
        state.resolve_with_error("error text")
        for message in state.messages:
            self.assertIsInstance(message.timestamp, datetime)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            state.messages[0].text = "edited"  # type: ignore[misc]
        self.assertIsInstance(state.messages, tuple)

    def test_can_send_requires_text_and_idle(self) -> None:
        state = ConversationState()
        state.set_pending_input("hi")
        self.assertTrue(state.snapshot().can_send)
        state.append_user_message("hi")
        state.set_pending_input("next")
        self.assertFalse(state.snapshot().can_send)
        state.resolve_with_reply("ok")
        self.assertTrue(state.snapshot().can_send)

    def test_subscribers_receive_snapshots(self) -> None:
        state = ConversationState()
        received: list[ConversationSnapshot] = []
        state.subscribe(received.append)
        state.set_pending_input("hi")
        state.append_user_message("hi")
        state.resolve_with_reply("hello")
        self.assertEqual(
            [snap.is_awaiting_reply for snap in received], [False, True, False]
        )
        self.assertEqual(len(received[-1].messages), 2)

        state.unsubscribe(received.append)
        state.set_pending_input("more")
        self.assertEqual(len(received), 3)

    def test_unchanged_pending_input_does_not_publish(self) -> None:
        state = ConversationState()
        received: list[ConversationSnapshot] = []
        state.subscribe(received.append)
        state.set_pending_input("same")
        state.set_pending_input("same")
        self.assertEqual(len(received), 1)

    def test_failing_listener_does_not_block_others(self) -> None:
        state = ConversationState()
        received: list[ConversationSnapshot] = []

        def broken(_snapshot: ConversationSnapshot) -> None:
            raise RuntimeError("listener exploded")

        state.subscribe(broken)
        state.subscribe(received.append)
        with self.assertLogs("gemini_chat.state", level="ERROR") as logs:
            state.set_pending_input("x")
        self.assertEqual(len(received), 1)
        self.assertTrue(any("state.listener.failed" in line for line in logs.output))

    def test_message_defaults_timestamp(self) -> None:
        message = Message(text="hi", sender=Sender.BOT)
        self.assertIsInstance(message.timestamp, datetime)


if __name__ == "__main__":
    unittest.main()
