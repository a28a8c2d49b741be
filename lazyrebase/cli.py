"""Command-line front door for lazyrebase.

Parses CLI options, configures logging, loads the config file, and runs the
interactive todo editor. Git invokes this as its sequence editor with the
todo file path as the only argument.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .runtime import run_app
from .runtime.config import load_app_config
from .todo import TodoListError
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s %(threadName)s %(name)s %(levelname)s %(message)s"


def configure_logging(log_file: str | None, verbose: bool) -> None:
    """Attach a file handler to the package logger when ``log_file`` is set.

    Without a log file nothing is emitted; the terminal belongs to the UI.
    """
    if log_file is None:
        return
    package_logger = logging.getLogger("lazyrebase")
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyrebase",
        description="Edit a git interactive rebase todo file in the terminal.",
    )
    parser.add_argument("todo_file", help="Path to the rebase todo file.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write log records to PATH.")
    parser.add_argument("--verbose", action="store_true", help="Log debug records (with --log-file).")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, run the editor, and exit with its status code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    path = Path(args.todo_file)
    if path.is_dir():
        raise SystemExit(f"Not a file: {path}")
    if not sys.stdin.isatty():
        raise SystemExit("lazyrebase needs an interactive terminal.")

    config = load_app_config(args.theme)
    try:
        code = run_app(path, config, no_color=args.no_color)
    except (OSError, TodoListError) as exc:
        raise SystemExit(f"Cannot edit {path}: {exc}") from exc
    sys.exit(code)


__all__ = ["build_parser", "configure_logging", "main"]
