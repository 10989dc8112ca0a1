"""Entry point for the zilo CLI."""

from __future__ import annotations

import argparse
import logging
import sys

from zilo.config import EditorConfig
from zilo.editor import run
from zilo.render import clear_screen_sequence
from zilo.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="zilo",
        description="Minimal full-screen terminal text viewer",
    )
    parser.add_argument("filename", nargs="?", help="File to open (default: empty buffer)")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Log level for --log-file (default: info)",
    )
    return parser.parse_args(argv)


def _setup_logging(config: EditorConfig) -> None:
    # stdout is the editor screen, so logs only ever go to a file.
    if not config.log_file:
        return
    logging.basicConfig(
        filename=config.log_file,
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _describe_error(exc: OSError) -> str:
    if exc.filename is not None and exc.strerror:
        return f"{exc.filename}: {exc.strerror}"
    return str(exc)


def _clear_screen(terminal: Terminal) -> None:
    try:
        terminal.write(clear_screen_sequence())
    except OSError:
        pass


def main(argv: list[str] | None = None, terminal: Terminal | None = None) -> int:
    args = parse_args(argv)

    config = EditorConfig.from_env()
    if args.log_file:
        config.log_file = args.log_file
    if args.log_level:
        config.log_level = args.log_level
    _setup_logging(config)

    try:
        if terminal is None:
            terminal = ProcessTerminal(config)
        run(terminal, args.filename, config)
    except OSError as exc:
        if terminal is not None:
            _clear_screen(terminal)
        logger.error("fatal: %s", exc)
        print(f"zilo: {_describe_error(exc)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
