"""Root logging setup: app-only stderr, optional private log file, JSON via structlog."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import structlog

APP_LOGGER_PREFIX = "gemini_chat"
DEFAULT_LOG_FILE = "~/.local/state/geminiterm/app.log"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
QUIET_LIBRARIES = ("httpx", "httpcore")


def app_only_filter(record: logging.LogRecord) -> bool:
    """Only let this package's records through to stderr."""
    return record.name.startswith(APP_LOGGER_PREFIX)


def _resolve_level(name: Any) -> int:
    level = logging.getLevelName(str(name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _json_formatter() -> logging.Formatter:
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    # Loggers obtained from structlog.get_logger() share the stdlib handlers.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            timestamper,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    # ExtraAdder copies the ``extra={"event": ...}`` fields of stdlib records.
    return structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(
            ensure_ascii=False, separators=(",", ":")
        ),
        foreign_pre_chain=[
            structlog.stdlib.ExtraAdder(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )


def _open_private_log(path_value: str) -> logging.FileHandler:
    target = Path(path_value).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, encoding="utf-8")
    if os.name == "posix":
        try:
            target.chmod(0o600)
        except OSError:
            logging.getLogger(__name__).warning(
                "Could not restrict permissions on log file %s", target
            )
    return handler


def configure_logging(logging_config: dict[str, Any]) -> None:
    """Replace the root handlers according to the ``[logging]`` config section."""
    level = _resolve_level(logging_config.get("level"))
    if logging_config.get("structured", True):
        formatter = _json_formatter()
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    # The TUI owns the terminal, so stderr only gets our warnings and errors.
    console = logging.StreamHandler()
    console.setLevel(max(level, logging.WARNING))
    console.addFilter(app_only_filter)
    handlers: list[logging.Handler] = [console]

    if logging_config.get("log_to_file", False):
        log_file = _open_private_log(
            str(logging_config.get("log_file_path") or DEFAULT_LOG_FILE)
        )
        log_file.setLevel(level)
        handlers.append(log_file)

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
