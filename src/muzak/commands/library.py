"""
Library command handlers for Muzak.

Handles: index-build, list-artists, list-albums, albums-by-artist, songs-by-artist
"""

from typing import TYPE_CHECKING, List

from muzak.core.console import print_listing
from muzak.core.output import log

from . import joined, require_args

if TYPE_CHECKING:
    from muzak.instance import Instance


def handle_index_build_command(instance: "Instance", args: List[str]) -> bool:
    """Rescan the music directory."""
    log(f"Indexing {instance.index.root}...")
    instance.index.build()
    log(
        f"Indexed {len(instance.index.artists)} artists, "
        f"{len(instance.index.albums)} albums"
    )
    return True


def handle_list_artists_command(instance: "Instance", args: List[str]) -> bool:
    print_listing("Artists", instance.index.artists)
    return True


def handle_list_albums_command(instance: "Instance", args: List[str]) -> bool:
    print_listing("Albums", instance.index.album_names)
    return True


def handle_albums_by_artist_command(instance: "Instance", args: List[str]) -> bool:
    require_args(args, "albums-by-artist <artist>")
    artist = joined(args)

    albums = instance.index.albums_by(artist)
    print_listing(artist, (album.name for album in albums))
    return True


def handle_songs_by_artist_command(instance: "Instance", args: List[str]) -> bool:
    require_args(args, "songs-by-artist <artist>")
    artist = joined(args)

    songs = instance.index.songs_by(artist)
    print_listing(artist, (song.title for song in songs), numbered=True)
    return True
