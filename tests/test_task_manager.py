"""Tests for the TaskManager lifecycle helper."""

from __future__ import annotations

import asyncio
import unittest

from gemini_chat.task_manager import TaskManager


class TaskManagerTests(unittest.IsolatedAsyncioTestCase):
    """Validate named task tracking, awaiting, and cancellation."""

    async def test_add_and_await_all(self) -> None:
        tm = TaskManager()
        gate = asyncio.Event()

        async def _worker() -> str:
            await gate.wait()
            return "done"

        task = asyncio.create_task(_worker())
        tm.add(task, name="active_request")
        self.assertIs(tm.get("active_request"), task)
        self.assertTrue(tm.is_running("active_request"))

        gate.set()
        await tm.await_all()
        await asyncio.sleep(0)  # Let done callbacks run.
        self.assertEqual(task.result(), "done")
        self.assertIsNone(tm.get("active_request"))
        self.assertFalse(tm.is_running("active_request"))

    async def test_cancel_all(self) -> None:
        tm = TaskManager()
        cancelled: list[bool] = []

        async def _worker() -> None:
            try:
                await asyncio.sleep(9999)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        task = asyncio.create_task(_worker())
        tm.add(task, name="active_request")
        await asyncio.sleep(0)  # Let the task start.
        await tm.cancel_all()
        self.assertTrue(task.done())
        self.assertTrue(cancelled)
        self.assertIsNone(tm.get("active_request"))

    async def test_failed_task_is_logged(self) -> None:
        tm = TaskManager()

        async def _worker() -> None:
            raise RuntimeError("boom")

        task = asyncio.create_task(_worker())
        with self.assertLogs("gemini_chat.task_manager", level="WARNING") as logs:
            tm.add(task, name="job")
            await asyncio.gather(task, return_exceptions=True)
            await asyncio.sleep(0)
        self.assertTrue(any("task.exception" in line for line in logs.output))

    async def test_replaced_task_keeps_latest_registration(self) -> None:
        tm = TaskManager()
        first = asyncio.create_task(asyncio.sleep(0))
        second = asyncio.create_task(asyncio.sleep(0.01))
        tm.add(first, name="job")
        tm.add(second, name="job")
        await first
        await asyncio.sleep(0)
        self.assertIs(tm.get("job"), second)
        await second


if __name__ == "__main__":
    unittest.main()
