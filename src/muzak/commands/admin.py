"""
Administrative command handlers for Muzak.

Handles: list-plugins, quit
"""

from typing import TYPE_CHECKING, List

from loguru import logger

from muzak.core.console import print_listing
from muzak.core.output import log
from muzak.domain.playback import MpvError

if TYPE_CHECKING:
    from muzak.instance import Instance


def handle_list_plugins_command(instance: "Instance", args: List[str]) -> bool:
    if not instance.plugins:
        log("No plugins loaded")
        return True

    print_listing("Plugins", (plugin.plugin_name() for plugin in instance.plugins))
    return True


def handle_quit_command(instance: "Instance", args: List[str]) -> bool:
    """Stop playback and leave the shell."""
    if instance.player.running():
        log("Stopping music playback...")

    try:
        instance.player.deactivate()
    except MpvError:
        logger.exception("mpv did not shut down cleanly")
    return False
