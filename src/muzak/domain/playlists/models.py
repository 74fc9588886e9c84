"""Playlist model: a named, mutable, ordered list of songs."""

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Union

from muzak.domain.library.models import Song


@dataclass
class Playlist:
    """A named playlist. The name is its identity in the registry."""

    name: str
    songs: List[Song] = field(default_factory=list)

    def add(self, songs: Union[Song, Iterable[Song]]) -> None:
        """Append a song, or every song of an iterable in order."""
        if isinstance(songs, Song):
            self.songs.append(songs)
        else:
            self.songs.extend(songs)

    def delete(self, song: Song) -> None:
        """Remove every occurrence of ``song``; absent songs are ignored."""
        self.songs = [s for s in self.songs if s != song]

    def shuffle(self) -> None:
        random.shuffle(self.songs)

    def __len__(self) -> int:
        return len(self.songs)

    def __iter__(self):
        return iter(self.songs)
