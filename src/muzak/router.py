"""
Command routing for Muzak.

Maps shell command names to handler functions. Unknown commands are
reported and fall back to the help text.
"""

from typing import TYPE_CHECKING, Callable, Dict, List, NamedTuple

from loguru import logger

from muzak.commands import CommandError, admin, library, playback, playlist
from muzak.core.output import log
from muzak.domain.playback import MpvError

if TYPE_CHECKING:
    from muzak.instance import Instance


class Command(NamedTuple):
    """A shell command: its handler, usage line and category."""

    handler: Callable[["Instance", List[str]], bool]
    usage: str
    category: str


def handle_help_command(instance: "Instance", args: List[str]) -> bool:
    print_help()
    return True


def handle_list_commands_command(instance: "Instance", args: List[str]) -> bool:
    for name in sorted(COMMANDS):
        print(name)
    return True


COMMANDS: Dict[str, Command] = {
    # Player
    "player-activate": Command(playback.handle_player_activate_command, "player-activate", "Player"),
    "player-deactivate": Command(playback.handle_player_deactivate_command, "player-deactivate", "Player"),
    "play": Command(playback.handle_play_command, "play", "Player"),
    "pause": Command(playback.handle_pause_command, "pause", "Player"),
    "toggle": Command(playback.handle_toggle_command, "toggle", "Player"),
    "next": Command(playback.handle_next_command, "next", "Player"),
    "previous": Command(playback.handle_previous_command, "previous", "Player"),
    "enqueue-artist": Command(playback.handle_enqueue_artist_command, "enqueue-artist <artist>", "Player"),
    "enqueue-album": Command(playback.handle_enqueue_album_command, "enqueue-album <album>", "Player"),
    "jukebox": Command(playback.handle_jukebox_command, "jukebox [count]", "Player"),
    "list-queue": Command(playback.handle_list_queue_command, "list-queue", "Player"),
    "shuffle-queue": Command(playback.handle_shuffle_queue_command, "shuffle-queue", "Player"),
    "clear-queue": Command(playback.handle_clear_queue_command, "clear-queue", "Player"),
    "now-playing": Command(playback.handle_now_playing_command, "now-playing", "Player"),
    # Library
    "index-build": Command(library.handle_index_build_command, "index-build", "Library"),
    "list-artists": Command(library.handle_list_artists_command, "list-artists", "Library"),
    "list-albums": Command(library.handle_list_albums_command, "list-albums", "Library"),
    "albums-by-artist": Command(library.handle_albums_by_artist_command, "albums-by-artist <artist>", "Library"),
    "songs-by-artist": Command(library.handle_songs_by_artist_command, "songs-by-artist <artist>", "Library"),
    # Playlists
    "list-playlists": Command(playlist.handle_list_playlists_command, "list-playlists", "Playlists"),
    "playlists-load": Command(playlist.handle_playlists_load_command, "playlists-load", "Playlists"),
    "playlist-delete": Command(playlist.handle_playlist_delete_command, "playlist-delete <playlist>", "Playlists"),
    "enqueue-playlist": Command(playlist.handle_enqueue_playlist_command, "enqueue-playlist <playlist>", "Playlists"),
    "playlist-add-album": Command(playlist.handle_playlist_add_album_command, "playlist-add-album <playlist> <album>", "Playlists"),
    "playlist-add-artist": Command(playlist.handle_playlist_add_artist_command, "playlist-add-artist <playlist> <artist>", "Playlists"),
    "playlist-add-current": Command(playlist.handle_playlist_add_current_command, "playlist-add-current <playlist>", "Playlists"),
    "playlist-del-current": Command(playlist.handle_playlist_del_current_command, "playlist-del-current <playlist>", "Playlists"),
    "playlist-shuffle": Command(playlist.handle_playlist_shuffle_command, "playlist-shuffle <playlist>", "Playlists"),
    # Meta
    "list-plugins": Command(admin.handle_list_plugins_command, "list-plugins", "Meta"),
    "list-commands": Command(handle_list_commands_command, "list-commands", "Meta"),
    "help": Command(handle_help_command, "help", "Meta"),
    "quit": Command(admin.handle_quit_command, "quit", "Meta"),
    "exit": Command(admin.handle_quit_command, "exit", "Meta"),
}


def resolve_command(name: str) -> str:
    """Normalize user input: case-insensitive, underscores accepted for hyphens."""
    return name.strip().lower().replace("_", "-")


def print_help() -> None:
    """Display help information for available commands."""
    lines = ["Muzak - local music shell", "", "Available commands:"]

    categories: Dict[str, List[Command]] = {}
    for command in COMMANDS.values():
        categories.setdefault(command.category, []).append(command)

    for category, commands in categories.items():
        lines.append(f"  {category}:")
        for command in commands:
            lines.append(f"    {command.usage}")

    print("\n".join(lines))


def handle_command(instance: "Instance", command: str, args: List[str]) -> bool:
    """
    Run a single command against the instance.

    Args:
        instance: The running Muzak instance
        command: Command name as typed
        args: Command arguments

    Returns:
        Whether the shell should keep running
    """
    name = resolve_command(command)
    if not name:
        return True

    entry = COMMANDS.get(name)
    if entry is None:
        log(f"unknown command: {name}", "warning")
        print_help()
        return True

    try:
        return entry.handler(instance, args)
    except CommandError as e:
        log(str(e), "error")
        return True
    except MpvError as e:
        logger.exception(f"Player error running '{name}'")
        log(f"Player error: {e}", "error")
        return True
