"""
Plugin base class and the set of events plugins can react to.
"""

from typing import TYPE_CHECKING, FrozenSet, Optional

from loguru import logger

if TYPE_CHECKING:
    from muzak.domain.library.models import Song
    from muzak.domain.playlists.models import Playlist
    from muzak.domain.playlists.registry import PlaylistRegistry

PLUGIN_EVENTS: FrozenSet[str] = frozenset(
    {
        "player_activated",
        "player_deactivated",
        "song_loaded",
        "song_unloaded",
        "playlist_enqueued",
        "playlists_loaded",
    }
)


class StubPlugin:
    """A plugin that ignores every event.

    Real plugins subclass this and override the events they care about;
    the rest stay no-ops.
    """

    @classmethod
    def plugin_name(cls) -> str:
        """The plugin's human friendly name, as listed in [plugins] enabled."""
        return cls.__name__.lower()

    @classmethod
    def available(cls) -> bool:
        return True

    def __init__(self):
        logger.debug(f"loading {type(self).__name__}")

    def player_activated(self) -> None:
        pass

    def player_deactivated(self) -> None:
        pass

    def song_loaded(self, song: Optional["Song"]) -> None:
        pass

    def song_unloaded(self) -> None:
        pass

    def playlist_enqueued(self, playlist: "Playlist") -> None:
        pass

    def playlists_loaded(self, playlists: "PlaylistRegistry") -> None:
        pass
