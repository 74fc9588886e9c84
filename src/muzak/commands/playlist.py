"""
Playlist command handlers for Muzak.

Handles: list-playlists, playlists-load, playlist-delete, enqueue-playlist,
playlist-add-album, playlist-add-artist, playlist-add-current,
playlist-del-current, playlist-shuffle

Commands that touch the playlist registry do nothing until playlists are
loaded. Every mutation is written back to disk immediately.
"""

from typing import TYPE_CHECKING, List

from loguru import logger

from muzak.core.console import print_listing
from muzak.core.output import log
from muzak.core.path_security import UnsafeNameError, validate_file_name
from muzak.domain.playlists import storage
from muzak.domain.playlists.models import Playlist
from muzak.domain.playlists.registry import PlaylistRegistry

from . import CommandError, joined, require_args

if TYPE_CHECKING:
    from muzak.instance import Instance


def _playlist_name(name: str) -> str:
    """The playlist name typed by the user, if it can name a file."""
    try:
        return validate_file_name(name)
    except UnsafeNameError as e:
        raise CommandError(f"Invalid playlist name: {e}") from None


def _save(instance: "Instance", playlist: Playlist) -> None:
    storage.save_playlist(instance.playlists_dir, playlist)


def handle_list_playlists_command(instance: "Instance", args: List[str]) -> bool:
    names = set(storage.playlist_names(instance.playlists_dir))
    if instance.playlists_loaded():
        names.update(instance.playlists.names())

    print_listing("Playlists", sorted(names))
    return True


def handle_playlists_load_command(instance: "Instance", args: List[str]) -> bool:
    """(Re)load every stored playlist into the registry."""
    instance.playlists = PlaylistRegistry(storage.load_playlists(instance.playlists_dir))
    logger.info(f"loaded {len(instance.playlists)} playlists")

    instance.event("playlists_loaded", instance.playlists)
    return True


def handle_playlist_delete_command(instance: "Instance", args: List[str]) -> bool:
    require_args(args, "playlist-delete <playlist>")
    name = _playlist_name(joined(args))

    logger.debug(f"deleting playlist '{name}'")

    if not storage.delete_playlist(instance.playlists_dir, name):
        logger.debug(f"no stored playlist named '{name}'")
    if instance.playlists_loaded():
        instance.playlists.remove(name)
    return True


def handle_enqueue_playlist_command(instance: "Instance", args: List[str]) -> bool:
    if not instance.playlists_loaded():
        return True
    require_args(args, "enqueue-playlist <playlist>")

    playlist = instance.playlists.get(_playlist_name(joined(args)))
    instance.player.enqueue_playlist(playlist)
    instance.event("playlist_enqueued", playlist)
    return True


def handle_playlist_add_album_command(instance: "Instance", args: List[str]) -> bool:
    if not instance.playlists_loaded():
        return True
    require_args(args, "playlist-add-album <playlist> <album>", count=2)

    pname, album_name = _playlist_name(args[0]), joined(args[1:])

    album = instance.index.album(album_name)
    if album is None:
        logger.debug(f"no album named '{album_name}'")
        return True

    playlist = instance.playlists.get(pname)
    playlist.add(album.songs)
    _save(instance, playlist)
    log(f"Added {len(album.songs)} songs from '{album.name}' to '{pname}'")
    return True


def handle_playlist_add_artist_command(instance: "Instance", args: List[str]) -> bool:
    if not instance.playlists_loaded():
        return True
    require_args(args, "playlist-add-artist <playlist> <artist>", count=2)

    pname, artist = _playlist_name(args[0]), joined(args[1:])

    songs = instance.index.songs_by(artist)
    if not songs:
        logger.debug(f"no songs by '{artist}'")
        return True

    playlist = instance.playlists.get(pname)
    playlist.add(songs)
    _save(instance, playlist)
    log(f"Added {len(songs)} songs by '{artist}' to '{pname}'")
    return True


def handle_playlist_add_current_command(instance: "Instance", args: List[str]) -> bool:
    if not (instance.player.running() and instance.playlists_loaded()):
        return True
    require_args(args, "playlist-add-current <playlist>")

    song = instance.player.now_playing()
    if song is None:
        return True

    playlist = instance.playlists.get(_playlist_name(joined(args)))
    playlist.add(song)
    _save(instance, playlist)
    return True


def handle_playlist_del_current_command(instance: "Instance", args: List[str]) -> bool:
    if not (instance.player.running() and instance.playlists_loaded()):
        return True
    require_args(args, "playlist-del-current <playlist>")

    song = instance.player.now_playing()
    if song is None:
        return True

    playlist = instance.playlists.get(_playlist_name(joined(args)))
    playlist.delete(song)
    _save(instance, playlist)
    return True


def handle_playlist_shuffle_command(instance: "Instance", args: List[str]) -> bool:
    if not instance.playlists_loaded():
        return True
    require_args(args, "playlist-shuffle <playlist>")

    playlist = instance.playlists.get(_playlist_name(joined(args)))
    playlist.shuffle()
    _save(instance, playlist)
    return True
