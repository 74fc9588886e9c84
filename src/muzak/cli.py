"""
Muzak - command line entry point

Starts the interactive shell, reads commands from stdin with --batch, or runs
a single command given on the command line.
"""

import argparse
import sys
from typing import List, Optional

from muzak.core import config
from muzak.core.output import setup_loguru


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="muzak",
        description="Muzak - a command shell for your local music library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Run without a command for interactive mode. Type 'help' inside the shell.",
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Echo debug logging to stderr"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Echo informational logging to stderr"
    )
    parser.add_argument(
        "-b",
        "--batch",
        action="store_true",
        help="Read commands from stdin, one per line, without a prompt",
    )
    parser.add_argument(
        "command", nargs=argparse.REMAINDER, help="Run a single command and exit"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the muzak command."""
    args = build_parser().parse_args(argv)

    cfg = config.load_config()
    config.ensure_directories(cfg)

    console_level = None
    if args.debug:
        console_level = "DEBUG"
    elif args.verbose:
        console_level = "INFO"
    setup_loguru(
        config.get_log_file_path(cfg),
        level="DEBUG" if args.debug else cfg.logging.level,
        console_level=console_level,
    )

    # Imported after logging is configured so startup is captured
    from muzak.instance import Instance
    from muzak.main import run

    instance = Instance.create(cfg)

    if args.command:
        instance.command(args.command[0], *args.command[1:])
        sys.exit(0)

    run(instance, batch=args.batch)


if __name__ == "__main__":
    main()
