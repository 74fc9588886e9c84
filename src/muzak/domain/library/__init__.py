"""Library domain - songs, albums and the directory index."""

from .index import Index, is_supported_format, scan_album
from .models import ALBUM_ART_PATTERN, Album, Song, find_album_art

__all__ = [
    "Index",
    "is_supported_format",
    "scan_album",
    "ALBUM_ART_PATTERN",
    "Album",
    "Song",
    "find_album_art",
]
