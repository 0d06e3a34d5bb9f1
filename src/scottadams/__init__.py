"""Interpreter for Scott Adams packed-integer adventure databases."""

import argparse
import sys
from pathlib import Path

from .app import create_session
from .config import Config
from .errors import DataFormatError
from .logging import configure_logging, get_logger

__all__ = ["main", "create_session", "Config"]

USAGE = """\
Usage: scottadams [OPTION]... game_data_file
Scott Adams adventure game interpreter

-d, --debug    Show game debugging info
-h, --help     Display this help and exit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scottadams", usage=USAGE, add_help=False)
    parser.add_argument("game_file", nargs="?", type=Path)
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the interpreter."""
    args = build_parser().parse_args(argv)
    config = Config.from_env()
    if args.game_file is not None:
        config.game_file = args.game_file
    if args.debug:
        config.log_level = "DEBUG"

    if args.help or config.game_file is None:
        print(USAGE)
        return 0

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
    )

    logger = get_logger(__name__)
    logger.info("application_starting", game_file=str(config.game_file))

    try:
        session = create_session(config)
    except DataFormatError as exc:
        logger.error("world_load_failed", error=str(exc))
        print(f"Cannot load {config.game_file}: {exc}", file=sys.stderr)
        return 1

    return session.run()
