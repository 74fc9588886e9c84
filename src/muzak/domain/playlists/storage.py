"""
Playlist persistence for Muzak.

Each playlist is an M3U8 file (UTF-8 M3U) named after the playlist, holding
one absolute song path per line.
"""

import urllib.parse
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from loguru import logger

from muzak.core.path_security import UnsafeNameError, is_path_within, validate_file_name
from muzak.domain.library.models import Song

from .models import Playlist

PLAYLIST_SUFFIX = ".m3u8"


def playlist_path(playlists_dir: Path, name: str) -> Path:
    """Path of the file backing playlist ``name``.

    Raises UnsafeNameError for names that are not a plain file name, so every
    playlist lives directly inside ``playlists_dir``.
    """
    path = playlists_dir / f"{validate_file_name(name)}{PLAYLIST_SUFFIX}"
    if not is_path_within(path, playlists_dir):
        raise UnsafeNameError(f"'{name}' resolves outside {playlists_dir}")
    return path


def playlist_names(playlists_dir: Path) -> List[str]:
    """Names of all stored playlists, sorted."""
    if not playlists_dir.is_dir():
        return []
    return sorted(
        p.stem for p in playlists_dir.glob(f"*{PLAYLIST_SUFFIX}") if p.is_file()
    )


def parse_m3u8(content: str) -> List[str]:
    """Extract track paths from M3U8 content, skipping comments and blanks.

    Plain lines are taken literally (a file may well have "%20" in its name).
    Only file:// URIs are percent-decoded.
    """
    paths = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("file://"):
            line = urllib.parse.unquote(urllib.parse.urlparse(line).path)
        paths.append(line)
    return paths


def load_playlist(playlists_dir: Path, name: str) -> Playlist:
    """Load a playlist; a missing file yields an empty playlist."""
    path = playlist_path(playlists_dir, name)
    if not path.exists():
        return Playlist(name)

    content = path.read_text(encoding="utf-8")
    return Playlist(name, [Song(p) for p in parse_m3u8(content)])


def load_playlists(playlists_dir: Path) -> Dict[str, Playlist]:
    """Load every stored playlist, keyed by name."""
    playlists: Dict[str, Playlist] = {}
    for name in playlist_names(playlists_dir):
        logger.debug(f"loading playlist '{name}'")
        try:
            playlists[name] = load_playlist(playlists_dir, name)
        except (OSError, UnicodeDecodeError, UnsafeNameError):
            logger.exception(f"Failed to read playlist '{name}', skipping")
    return playlists


def save_playlist(playlists_dir: Path, playlist: Playlist) -> Path:
    """Write a playlist to disk, replacing any previous version."""
    path = playlist_path(playlists_dir, playlist.name)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write("#EXTM3U\n")
        f.write(f"# Playlist: {playlist.name}\n")
        f.write(f"# Saved: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"# Tracks: {len(playlist.songs)}\n")
        f.write("\n")
        for song in playlist.songs:
            f.write(f"#EXTINF:-1,{song.full_title}\n")
            f.write(f"{song.path}\n")

    logger.debug(f"saved playlist '{playlist.name}' ({len(playlist.songs)} songs) to {path}")
    return path


def delete_playlist(playlists_dir: Path, name: str) -> bool:
    """Delete a stored playlist. Returns False when there was nothing to delete."""
    path = playlist_path(playlists_dir, name)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
