"""
Muzak - interactive command loop
"""

import shlex
import sys
from typing import Iterable, List, Tuple

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from muzak.core.config import get_data_dir
from muzak.core.output import log
from muzak.instance import Instance

PROMPT = "muzak> "


def parse_command(user_input: str) -> Tuple[str, List[str]]:
    """
    Parse user input into command and arguments, honouring shell-style quotes.

    Returns:
        Tuple of (command, args); ("", []) for blank input
    """
    try:
        parts = shlex.split(user_input)
    except ValueError:
        # Unbalanced quotes: fall back to plain whitespace splitting
        parts = user_input.split()
    if not parts:
        return "", []
    return parts[0], parts[1:]


def run_line(instance: Instance, line: str) -> bool:
    """Run one line of input. Returns False when the shell should exit."""
    command, args = parse_command(line)
    if not command:
        return True

    try:
        return instance.command(command, *args)
    except Exception as e:
        logger.exception(f"Command failed: {line!r}")
        log(f"Error: {e}", "error")
        return True


def batch_mode(instance: Instance, lines: Iterable[str]) -> None:
    """Run commands from an iterable of lines (stdin in --batch mode)."""
    for line in lines:
        if not run_line(instance, line):
            return
    instance.command("quit")


def interactive_mode(instance: Instance) -> None:
    """Read commands from the terminal until quit or Ctrl-D."""
    history_file = get_data_dir() / "history"
    history_file.parent.mkdir(parents=True, exist_ok=True)
    session = PromptSession(history=FileHistory(str(history_file)))

    while True:
        try:
            line = session.prompt(PROMPT)
        except KeyboardInterrupt:
            continue
        except EOFError:
            print()
            instance.command("quit")
            break

        if not run_line(instance, line):
            break


def run(instance: Instance, batch: bool = False) -> None:
    if batch:
        batch_mode(instance, sys.stdin)
    else:
        interactive_mode(instance)
