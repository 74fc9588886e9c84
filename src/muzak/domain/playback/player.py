"""
Player abstraction.

Every playback backend implements these operations. Controls are advisory:
when the backend is inactive they do nothing, except the enqueue operations,
which activate the backend first.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

from muzak.domain.library.models import Album, Song
from muzak.domain.playlists.models import Playlist

if TYPE_CHECKING:
    from muzak.instance import Instance


class Player(ABC):
    """Base class for playback backends."""

    def __init__(self, instance: "Instance"):
        self.instance = instance

    @classmethod
    def player_name(cls) -> str:
        return cls.__name__.lower()

    @classmethod
    def available(cls) -> bool:
        """Whether this backend can run on this machine."""
        return False

    @abstractmethod
    def running(self) -> bool: ...

    @abstractmethod
    def activate(self) -> None:
        """Start the backend; does nothing if it is already running."""

    @abstractmethod
    def deactivate(self) -> None:
        """Stop the backend; does nothing if it is not running."""

    @abstractmethod
    def play(self) -> None: ...

    @abstractmethod
    def pause(self) -> None: ...

    @abstractmethod
    def playing(self) -> bool: ...

    def toggle(self) -> None:
        if self.playing():
            self.pause()
        else:
            self.play()

    @abstractmethod
    def next_song(self) -> None: ...

    @abstractmethod
    def previous_song(self) -> None: ...

    @abstractmethod
    def enqueue_song(self, song: Song) -> None: ...

    @abstractmethod
    def enqueue_album(self, album: Album) -> None: ...

    @abstractmethod
    def enqueue_playlist(self, playlist: Playlist) -> None: ...

    @abstractmethod
    def list_queue(self) -> List[Song]:
        """The backend's queue, including songs already played."""

    @abstractmethod
    def shuffle_queue(self) -> None: ...

    @abstractmethod
    def clear_queue(self) -> None: ...

    @abstractmethod
    def now_playing(self) -> Optional[Song]: ...
