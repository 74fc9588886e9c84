"""
Playback command handlers for Muzak.

Handles: player-activate, player-deactivate, play, pause, toggle, next,
previous, enqueue-artist, enqueue-album, jukebox, list-queue, shuffle-queue,
clear-queue, now-playing
"""

from typing import TYPE_CHECKING, List

from loguru import logger

from muzak.core.console import print_listing
from muzak.core.output import log

from . import CommandError, joined, require_args

if TYPE_CHECKING:
    from muzak.instance import Instance


def handle_player_activate_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.activate()
    return True


def handle_player_deactivate_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.deactivate()
    return True


def handle_play_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.play()
    return True


def handle_pause_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.pause()
    return True


def handle_toggle_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.toggle()
    return True


def handle_next_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.next_song()
    return True


def handle_previous_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.previous_song()
    return True


def handle_enqueue_artist_command(instance: "Instance", args: List[str]) -> bool:
    """Queue every album by an artist, in index order."""
    require_args(args, "enqueue-artist <artist>")
    artist = joined(args)

    albums = instance.index.albums_by(artist)
    if not albums:
        logger.debug(f"no albums for artist '{artist}'")
        return True

    for album in albums:
        instance.player.enqueue_album(album)
    return True


def handle_enqueue_album_command(instance: "Instance", args: List[str]) -> bool:
    require_args(args, "enqueue-album <album>")
    album_name = joined(args)

    album = instance.index.album(album_name)
    if album is None:
        logger.debug(f"no album named '{album_name}'")
        return True

    instance.player.enqueue_album(album)
    return True


def handle_jukebox_command(instance: "Instance", args: List[str]) -> bool:
    """Queue random songs from the whole library."""
    count = instance.config.player.jukebox_size
    if args:
        try:
            count = int(args[0])
        except ValueError:
            raise CommandError("Usage: jukebox [count]") from None

    songs = instance.index.jukebox(count)
    log(f"Queueing {len(songs)} random songs")
    for song in songs:
        instance.player.enqueue_song(song)
    return True


def handle_list_queue_command(instance: "Instance", args: List[str]) -> bool:
    if not instance.player.running():
        return True

    queue = instance.player.list_queue()
    print_listing("Queue", (song.full_title for song in queue), numbered=True)
    return True


def handle_shuffle_queue_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.shuffle_queue()
    return True


def handle_clear_queue_command(instance: "Instance", args: List[str]) -> bool:
    instance.player.clear_queue()
    return True


def handle_now_playing_command(instance: "Instance", args: List[str]) -> bool:
    if not instance.player.running():
        return True

    song = instance.player.now_playing()
    if song is None:
        log("Nothing is playing")
    else:
        log(song.full_title)
    return True
