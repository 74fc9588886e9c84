"""Name -> Playlist mapping owned by the Instance."""

from typing import Dict, Iterator, List, Optional

from .models import Playlist


class PlaylistRegistry:
    """Playlists by name, creating empty ones on first reference."""

    def __init__(self, playlists: Optional[Dict[str, Playlist]] = None):
        self._playlists: Dict[str, Playlist] = dict(playlists or {})

    def get(self, name: str) -> Playlist:
        """Get-or-create: an unknown name yields a new, registered, empty playlist."""
        playlist = self._playlists.get(name)
        if playlist is None:
            playlist = Playlist(name)
            self._playlists[name] = playlist
        return playlist

    def remove(self, name: str) -> Optional[Playlist]:
        return self._playlists.pop(name, None)

    def names(self) -> List[str]:
        return sorted(self._playlists)

    def __getitem__(self, name: str) -> Playlist:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._playlists

    def __len__(self) -> int:
        return len(self._playlists)

    def __iter__(self) -> Iterator[str]:
        return iter(self._playlists)
