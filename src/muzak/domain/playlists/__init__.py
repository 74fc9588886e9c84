"""Playlists domain - the playlist model, registry and M3U8 storage."""

from .models import Playlist
from .registry import PlaylistRegistry
from .storage import (
    delete_playlist,
    load_playlist,
    load_playlists,
    parse_m3u8,
    playlist_names,
    playlist_path,
    save_playlist,
)

__all__ = [
    "Playlist",
    "PlaylistRegistry",
    "delete_playlist",
    "load_playlist",
    "load_playlists",
    "parse_m3u8",
    "playlist_names",
    "playlist_path",
    "save_playlist",
]
