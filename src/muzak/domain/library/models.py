"""
Music library domain models.

Songs are identified by their file path; artist and album come from the
directory layout, not from file tags.
"""

import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import List, Optional

ALBUM_ART_PATTERN = re.compile(r"^(cover|folder)\.(jpe?g|png)$", re.IGNORECASE)


def find_album_art(directory: Path) -> Optional[str]:
    """Return the first cover/folder image in a directory, if any."""
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return None

    for entry in entries:
        if ALBUM_ART_PATTERN.match(entry.name) and entry.is_file():
            return str(entry)
    return None


@dataclass(frozen=True)
class Song:
    """A single audio file.

    Equality and hashing use the path only, so a Song rebuilt from the
    player's queue compares equal to the one the index handed out.
    """

    path: str
    artist: Optional[str] = field(default=None, compare=False)
    album: Optional[str] = field(default=None, compare=False)

    @property
    def title(self) -> str:
        return Path(self.path).stem

    @cached_property
    def best_guess_album_art(self) -> Optional[str]:
        """Cover art sitting next to the file (cover.jpg, folder.png, ...)."""
        return find_album_art(Path(self.path).parent)

    @property
    def full_title(self) -> str:
        if self.artist:
            return f"{self.artist} - {self.title}"
        return self.title

    def __str__(self) -> str:
        return self.full_title


@dataclass
class Album:
    """An ordered collection of songs with optional cover art."""

    name: str
    songs: List[Song] = field(default_factory=list)
    cover_art: Optional[str] = None
