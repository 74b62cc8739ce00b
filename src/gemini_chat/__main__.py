"""Command line entry point: ``geminiterm [--config PATH] [--version]``."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path

from .app import GeminiChatApp
from .config import CONFIG_PATH, ensure_config_dir, load_config

DIST_NAME = "geminiterm"


def _installed_version() -> str:
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=DIST_NAME,
        description="Chat with a hosted Gemini model from the terminal.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help=f"TOML config file to load (default: {CONFIG_PATH})",
    )
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    return parser.parse_args(None if argv is None else list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.version:
        print(f"{DIST_NAME} {_installed_version()}")
        return

    if args.config is None:
        ensure_config_dir()
        GeminiChatApp().run()
    else:
        GeminiChatApp(config=load_config(args.config.expanduser())).run()


if __name__ == "__main__":
    main()
