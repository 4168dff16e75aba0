"""Command-line front door for jerm.

Parses CLI options, merges them over the persisted config, configures logging,
and launches the interactive session.
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from loguru import logger

from . import config
from .runtime import run_app
from .runtime.app import AppSettings
from .highlight import DEFAULT_STYLE
from .ui_theme import available_theme_names

LOG_ROTATION = "5 MB"


def _sync_interval(value: str) -> float:
    """argparse type for the remote-sync interval."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed < config.MIN_SYNC_INTERVAL_SECONDS:
        raise argparse.ArgumentTypeError(f"value must be >= {config.MIN_SYNC_INTERVAL_SECONDS:g}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jerm",
        description="Full-screen terminal front-end for your shell, with bookmarks and a directory navigator.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style for the input line.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--shell", default=None, help="Interpreter used to run command lines.")
    parser.add_argument(
        "--sync-interval",
        type=_sync_interval,
        default=None,
        metavar="SECONDS",
        help="Seconds between background remote syncs.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostic logs to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    return parser


def configure_logging(log_file: Path | None, debug: bool) -> Path | None:
    """Route loguru output to a file, or silence it.

    The terminal belongs to the full-screen view, so the default stderr sink
    is always removed. Returns the log path in use, if any.
    """
    logger.remove()
    if log_file is None and not debug:
        return None
    target = log_file if log_file is not None else config.DEFAULT_LOG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(target),
        level="DEBUG" if debug else "INFO",
        rotation=LOG_ROTATION,
        enqueue=True,
    )
    return target


def resolve_settings(args: argparse.Namespace, environ: dict[str, str] | None = None) -> AppSettings:
    """Merge CLI flags over config values; flags win."""
    env = environ if environ is not None else os.environ
    no_color = bool(args.no_color) or "NO_COLOR" in env
    return AppSettings(
        shell=args.shell or config.load_shell(),
        theme=args.theme or config.load_theme_name(),
        style=args.style or config.load_style_name() or DEFAULT_STYLE,
        no_color=no_color,
        sync_interval_seconds=(
            args.sync_interval if args.sync_interval is not None else config.load_sync_interval_seconds()
        ),
        sidebar_width=config.load_sidebar_width(),
        nerd_fonts=config.nerd_fonts_enabled(),
    )


def resolve_start_dir(path: str | None, default_path: Path | None = None) -> Path:
    """Return the canonical start directory or exit with a message."""
    target = Path(path) if path else (default_path if default_path is not None else Path.cwd())
    target = target.expanduser()
    if not target.exists():
        raise SystemExit(f"Path not found: {target}")
    if not target.is_dir():
        raise SystemExit(f"Not a directory: {target}")
    return target.resolve()


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the session.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    start_dir = resolve_start_dir(args.path, default_path)
    configure_logging(args.log_file, args.debug)
    settings = resolve_settings(args)
    logger.debug("Settings: {}", settings)
    run_app(start_dir, settings)


if __name__ == "__main__":
    main()
