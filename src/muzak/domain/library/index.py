"""
Music library index.

Scans a directory laid out as <root>/<artist>/<album>/<song files> and
answers read-only queries about artists, albums and songs.
"""

import random
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from .models import Album, Song, find_album_art


def is_supported_format(path: Path, formats: List[str]) -> bool:
    """Check if file format is supported."""
    return path.suffix.lower() in formats


def _subdirectories(directory: Path) -> List[Path]:
    return sorted(
        (p for p in directory.iterdir() if p.is_dir() and not p.name.startswith(".")),
        key=lambda p: p.name.lower(),
    )


def scan_album(album_dir: Path, artist: str, formats: List[str]) -> Album:
    """Build an Album from the audio files in one directory."""
    songs = [
        Song(str(p), artist=artist, album=album_dir.name)
        for p in sorted(album_dir.iterdir(), key=lambda p: p.name.lower())
        if p.is_file() and is_supported_format(p, formats)
    ]
    return Album(name=album_dir.name, songs=songs, cover_art=find_album_art(album_dir))


class Index:
    """In-memory index of the music library."""

    def __init__(self, root: Path, formats: List[str]):
        self.root = Path(root).expanduser()
        self.formats = [f.lower() for f in formats]
        self.artist_albums: Dict[str, List[Album]] = {}
        self.build()

    def build(self) -> None:
        """(Re)scan the library root."""
        self.artist_albums = {}

        if not self.root.is_dir():
            logger.warning(f"Music directory does not exist: {self.root}")
            return

        try:
            for artist_dir in _subdirectories(self.root):
                albums = [
                    scan_album(album_dir, artist_dir.name, self.formats)
                    for album_dir in _subdirectories(artist_dir)
                ]
                self.artist_albums[artist_dir.name] = [a for a in albums if a.songs]
        except PermissionError:
            logger.exception(f"Permission denied while indexing {self.root}")

        logger.info(
            f"Indexed {len(self.artists)} artists, {len(self.albums)} albums "
            f"from {self.root}"
        )

    @property
    def artists(self) -> List[str]:
        return sorted(self.artist_albums, key=str.lower)

    @property
    def albums(self) -> Dict[str, Album]:
        """Album name -> Album across all artists (later artists win on clashes)."""
        albums: Dict[str, Album] = {}
        for artist in self.artists:
            for album in self.artist_albums[artist]:
                albums[album.name] = album
        return albums

    @property
    def album_names(self) -> List[str]:
        return sorted(self.albums, key=str.lower)

    @property
    def songs(self) -> List[Song]:
        return [
            song
            for artist in self.artists
            for album in self.artist_albums[artist]
            for song in album.songs
        ]

    def albums_by(self, artist: str) -> List[Album]:
        return list(self.artist_albums.get(artist, []))

    def songs_by(self, artist: str) -> List[Song]:
        return [song for album in self.albums_by(artist) for song in album.songs]

    def album(self, name: str) -> Optional[Album]:
        return self.albums.get(name)

    def jukebox(self, count: int) -> List[Song]:
        """Pick up to ``count`` distinct songs at random."""
        songs = self.songs
        return random.sample(songs, min(count, len(songs)))
