"""Tests for logging bootstrap."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import tempfile
import unittest

import structlog

from gemini_chat.logging_utils import app_only_filter, configure_logging


class LoggingTests(unittest.TestCase):
    """Validate handlers, formats, and filtering."""

    def setUp(self) -> None:
        root = logging.getLogger()
        self._saved_handlers = list(root.handlers)
        self._saved_level = root.level
        self._temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = self._saved_handlers
        root.setLevel(self._saved_level)
        structlog.reset_defaults()
        self._temp_dir.cleanup()

    def _log_file(self) -> Path:
        return Path(self._temp_dir.name) / "logs" / "app.log"

    def test_structured_file_output_includes_extra_fields(self) -> None:
        configure_logging(
            {
                "level": "INFO",
                "structured": True,
                "log_to_file": True,
                "log_file_path": str(self._log_file()),
            }
        )
        logging.getLogger("gemini_chat.test").info(
            "chat.request.start",
            extra={"event": "chat.request.start", "model": "gemini-2.5-flash"},
        )
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = self._log_file().read_text(encoding="utf-8").strip().splitlines()[-1]
        payload = json.loads(line)
        self.assertEqual(payload["event"], "chat.request.start")
        self.assertEqual(payload["model"], "gemini-2.5-flash")
        self.assertEqual(payload["level"], "info")
        self.assertEqual(payload["logger"], "gemini_chat.test")

    def test_plain_file_output(self) -> None:
        configure_logging(
            {
                "level": "DEBUG",
                "structured": False,
                "log_to_file": True,
                "log_file_path": str(self._log_file()),
            }
        )
        logging.getLogger("gemini_chat.test").debug("plain message")
        for handler in logging.getLogger().handlers:
            handler.flush()
        content = self._log_file().read_text(encoding="utf-8")
        self.assertIn("DEBUG gemini_chat.test plain message", content)

    def test_stderr_handler_is_warning_and_app_only(self) -> None:
        configure_logging({"level": "DEBUG", "structured": False})
        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertEqual(handlers[0].level, logging.WARNING)
        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)

    def test_app_only_filter(self) -> None:
        def record(name: str) -> logging.LogRecord:
            return logging.LogRecord(name, logging.INFO, __file__, 1, "m", None, None)

        self.assertTrue(app_only_filter(record("gemini_chat.chat")))
        self.assertFalse(app_only_filter(record("httpx")))


if __name__ == "__main__":
    unittest.main()
