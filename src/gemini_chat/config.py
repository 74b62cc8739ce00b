"""Configuration loading and validation for the Gemini chat TUI."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
import logging
import os
from pathlib import Path
import re
import tomllib
from typing import Any
from urllib.parse import urlparse

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
)

from .exceptions import ConfigValidationError

LOGGER = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "geminiterm"
CONFIG_PATH = CONFIG_DIR / "config.toml"

API_KEY_ENV_VAR = "GEMINI_API_KEY"

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")
VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _required_string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("Expected a string value.")
    normalized = value.strip()
    if not normalized:
        raise ValueError("String value must not be empty.")
    return normalized


class AppConfig(BaseModel):
    """Application metadata."""

    title: str = "GeminiTerm"

    @field_validator("title", mode="before")
    @classmethod
    def _validate_title(cls, value: Any) -> str:
        return _required_string(value)


class GeminiConfig(BaseModel):
    """Remote endpoint, model, and credential settings."""

    host: str = "https://generativelanguage.googleapis.com"
    api_version: str = "v1"
    model: str = "gemini-2.5-flash"
    model_display_name: str = "Gemini 2.5 Flash"
    api_key: str = ""
    timeout: float | None = Field(default=None, gt=0, le=3600)

    @field_validator("host", "api_version", "model", "model_display_name", mode="before")
    @classmethod
    def _validate_required_string(cls, value: Any) -> str:
        return _required_string(value)

    @field_validator("host")
    @classmethod
    def _validate_host(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme.lower() not in {"http", "https"}:
            raise ValueError("gemini.host must use http or https scheme.")
        if not (parsed.hostname or "").strip():
            raise ValueError("gemini.host must include a hostname.")
        return value.rstrip("/")

    @field_validator("api_key", mode="before")
    @classmethod
    def _normalize_api_key(cls, value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("api_key must be a string.")
        return value.strip()


class UIConfig(BaseModel):
    """Visual settings for Textual rendering."""

    show_timestamps: bool = False
    user_message_color: str = "#2f3a56"
    assistant_message_color: str = "#1f2430"

    @field_validator("user_message_color", "assistant_message_color", mode="before")
    @classmethod
    def _validate_hex_color(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Expected a string value.")
        normalized = value.strip()
        if not HEX_COLOR_PATTERN.match(normalized):
            raise ValueError("Color must use #RGB or #RRGGBB format.")
        return normalized


class KeybindsConfig(BaseModel):
    """Keyboard action mapping. Enter/Shift+Enter in the input are fixed."""

    quit: str = "ctrl+q"
    scroll_up: str = "ctrl+k"
    scroll_down: str = "ctrl+j"

    @field_validator("*", mode="before")
    @classmethod
    def _validate_keybind(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Keybind must be a string.")
        normalized = value.strip()
        if not normalized:
            raise ValueError("Keybind must not be empty.")
        return normalized


class LoggingConfig(BaseModel):
    """Logging behavior and output destinations."""

    level: str = "INFO"
    structured: bool = True
    log_to_file: bool = False
    log_file_path: str = "~/.local/state/geminiterm/app.log"

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Logging level must be a string.")
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported log level {normalized!r}.")
        return normalized

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _validate_log_file_path(cls, value: Any) -> str:
        return _required_string(value)


class Config(BaseModel):
    """Root configuration model for all sections."""

    app: AppConfig = AppConfig()
    gemini: GeminiConfig = GeminiConfig()
    ui: UIConfig = UIConfig()
    keybinds: KeybindsConfig = KeybindsConfig()
    logging: LoggingConfig = LoggingConfig()


DEFAULT_CONFIG: dict[str, dict[str, Any]] = Config().model_dump()


def ensure_config_dir(config_dir: Path | None = None) -> Path:
    """Create the config directory if needed and return it."""
    directory = config_dir or CONFIG_DIR
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        LOGGER.warning("Could not create config directory %s: %s", directory, exc)
    return directory


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _enforce_private_permissions(path: Path) -> None:
    # The file may hold the API key.
    if os.name != "posix":
        return
    try:
        path.chmod(0o600)
    except OSError as exc:
        LOGGER.warning("Could not restrict permissions on %s: %s", path, exc)


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    _enforce_private_permissions(path)
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        LOGGER.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    return data


def _validate_config(raw: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Validate ``raw``; any invalid value drops the whole file back to defaults."""
    try:
        return Config.model_validate(raw).model_dump()
    except ValidationError as exc:
        LOGGER.warning("Invalid configuration, falling back to defaults: %s", exc)
        return deepcopy(DEFAULT_CONFIG)
    except (TypeError, ValueError) as exc:
        raise ConfigValidationError(f"Unable to validate configuration: {exc}") from exc


def _apply_env_credential(
    config: dict[str, dict[str, Any]], environ: Mapping[str, str] | None
) -> None:
    env = os.environ if environ is None else environ
    env_key = str(env.get(API_KEY_ENV_VAR, "")).strip()
    if env_key:
        config["gemini"]["api_key"] = env_key


def load_config(
    config_path: Path | None = None, environ: Mapping[str, str] | None = None
) -> dict[str, dict[str, Any]]:
    """Load the TOML config merged over defaults.

    A non-blank ``GEMINI_API_KEY`` in ``environ`` (default ``os.environ``)
    replaces ``gemini.api_key`` after validation.
    """
    path = config_path or CONFIG_PATH
    ensure_config_dir(path.parent)
    config = _validate_config(_deep_merge(DEFAULT_CONFIG, _read_toml(path)))
    _apply_env_credential(config, environ)
    return config


def has_credential(config: dict[str, dict[str, Any]]) -> bool:
    """Return whether a non-blank API key is configured."""
    return bool(str(config.get("gemini", {}).get("api_key") or "").strip())
