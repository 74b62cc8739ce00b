"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
import tempfile
import unittest

from gemini_chat.config import (
    API_KEY_ENV_VAR,
    DEFAULT_CONFIG,
    has_credential,
    load_config,
)


class ConfigTests(unittest.TestCase):
    """Validate config merge, env override, and fallback behavior."""

    def _load(self, toml: str | None, environ: dict[str, str] | None = None):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            if toml is not None:
                config_path.write_text(toml.strip(), encoding="utf-8")
            return load_config(config_path=config_path, environ=environ or {})

    def test_missing_config_uses_defaults(self) -> None:
        config = self._load(None)
        self.assertEqual(config["app"]["title"], DEFAULT_CONFIG["app"]["title"])
        self.assertEqual(config["gemini"]["model"], "gemini-2.5-flash")
        self.assertEqual(
            config["gemini"]["host"], "https://generativelanguage.googleapis.com"
        )
        self.assertEqual(config["gemini"]["api_version"], "v1")
        self.assertIsNone(config["gemini"]["timeout"])
        self.assertEqual(config["gemini"]["api_key"], "")
        self.assertFalse(has_credential(config))

    def test_partial_config_overrides_selected_values(self) -> None:
        config = self._load(
            """
[gemini]
model = "gemini-1.5-pro"
api_key = "  file-key  "
timeout = 30

[ui]
show_timestamps = true
            """
        )
        self.assertEqual(config["gemini"]["model"], "gemini-1.5-pro")
        self.assertEqual(config["gemini"]["api_key"], "file-key")
        self.assertEqual(config["gemini"]["timeout"], 30)
        self.assertTrue(config["ui"]["show_timestamps"])
        self.assertEqual(config["app"]["title"], DEFAULT_CONFIG["app"]["title"])
        self.assertTrue(has_credential(config))

    def test_env_credential_takes_precedence(self) -> None:
        config = self._load(
            '[gemini]\napi_key = "file-key"',
            environ={API_KEY_ENV_VAR: "env-key"},
        )
        self.assertEqual(config["gemini"]["api_key"], "env-key")

    def test_blank_env_credential_is_ignored(self) -> None:
        config = self._load(
            '[gemini]\napi_key = "file-key"',
            environ={API_KEY_ENV_VAR: "   "},
        )
        self.assertEqual(config["gemini"]["api_key"], "file-key")

    def test_env_credential_survives_invalid_file(self) -> None:
        config = self._load(
            '[gemini]\nhost = "ftp://example.com"',
            environ={API_KEY_ENV_VAR: "env-key"},
        )
        self.assertEqual(config["gemini"]["host"], DEFAULT_CONFIG["gemini"]["host"])
        self.assertEqual(config["gemini"]["api_key"], "env-key")

    def test_invalid_values_fallback_to_defaults(self) -> None:
        config = self._load(
            """
[logging]
level = "LOUD"

[ui]
user_message_color = "blue"
            """
        )
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_unparseable_toml_falls_back_to_defaults(self) -> None:
        config = self._load("this is = = not toml")
        self.assertEqual(config["gemini"]["model"], DEFAULT_CONFIG["gemini"]["model"])

    def test_trailing_slash_stripped_from_host(self) -> None:
        config = self._load('[gemini]\nhost = "http://localhost:8080/"')
        self.assertEqual(config["gemini"]["host"], "http://localhost:8080")

    @unittest.skipUnless(os.name == "posix", "POSIX permissions only")
    def test_config_file_permissions_tightened(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[app]\ntitle = 'Mine'\n", encoding="utf-8")
            config_path.chmod(0o644)
            config = load_config(config_path=config_path, environ={})
            self.assertEqual(config["app"]["title"], "Mine")
            self.assertEqual(config_path.stat().st_mode & 0o777, 0o600)

    def test_has_credential_handles_missing_section(self) -> None:
        self.assertFalse(has_credential({}))
        self.assertTrue(has_credential({"gemini": {"api_key": "k"}}))


if __name__ == "__main__":
    unittest.main()
