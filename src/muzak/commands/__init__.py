"""Command handlers for the Muzak shell.

Each handler takes the Instance and the command's arguments and returns
whether the shell should keep running.
"""

from typing import List


class CommandError(Exception):
    """A command was invoked with unusable arguments. Reported, never fatal."""

    pass


def require_args(args: List[str], usage: str, count: int = 1) -> None:
    """Raise CommandError with the usage line when fewer than ``count`` args are given."""
    if len(args) < count:
        raise CommandError(f"Usage: {usage}")


def joined(args: List[str]) -> str:
    """Multi-word arguments (artist, album, playlist names) as one string."""
    return " ".join(args).strip()
