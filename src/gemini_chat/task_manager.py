"""Lifecycle tracking for the app's in-flight asyncio tasks."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


class TaskManager:
    """Track named background tasks so shutdown can cancel them."""

    def __init__(self) -> None:
        self._named: dict[str, asyncio.Task[Any]] = {}

    def add(self, task: asyncio.Task[Any], name: str) -> None:
        """Register ``task`` under ``name``; it is dropped again once done.

        A task already registered under the same name is replaced, not cancelled.
        """
        self._named[name] = task
        task.add_done_callback(lambda done, key=name: self._on_done(key, done))

    def _on_done(self, name: str, task: asyncio.Task[Any]) -> None:
        if self._named.get(name) is task:
            del self._named[name]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.warning(
                "task.exception",
                extra={
                    "event": "task.exception",
                    "task": name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )

    def get(self, name: str) -> asyncio.Task[Any] | None:
        """Return the named task or ``None`` if not registered."""
        return self._named.get(name)

    def is_running(self, name: str) -> bool:
        task = self._named.get(name)
        return task is not None and not task.done()

    async def await_all(self) -> None:
        """Await all tracked tasks without cancelling them."""
        for task in list(self._named.values()):
            if not task.done():
                try:
                    await task
                except asyncio.CancelledError:
                    pass

    async def cancel_all(self) -> None:
        """Cancel every tracked task and await them all."""
        tasks = [task for task in self._named.values() if not task.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._named.clear()
