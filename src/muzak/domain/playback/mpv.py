"""
mpv playback backend.

Adapts the Player abstraction onto an MpvSession and turns mpv's native
events into Muzak events.
"""

import threading
from typing import TYPE_CHECKING, List, Optional

from loguru import logger

from muzak.domain.library.models import Album, Song
from muzak.domain.playlists.models import Playlist

from .ipc import MpvSession
from .player import Player

if TYPE_CHECKING:
    from muzak.instance import Instance


class MpvPlayer(Player):
    """Exposes mpv's IPC for playback control."""

    DEFAULT_MPV_ARGS = (
        "--no-osc",
        "--no-osd-bar",
        "--no-input-default-bindings",
        "--no-input-cursor",
        "--load-scripts=no",  # autoload and other scripts interfere with queue management
    )

    # mpv 0.38 inserted an index argument before loadfile's options
    LOADFILE_INDEX_VERSION = (0, 38, 0)

    def __init__(self, instance: "Instance", session_factory=MpvSession):
        super().__init__(instance)
        self._session_factory = session_factory
        self._mpv = None
        self._now_playing: Optional[Song] = None
        self._track_loaded = False
        self._loadfile_takes_index = False
        # Guards the now-playing cache, which the mpv event thread also writes
        self._state_lock = threading.RLock()

    @classmethod
    def player_name(cls) -> str:
        return "mpv"

    @classmethod
    def available(cls) -> bool:
        return MpvSession.available()

    def running(self) -> bool:
        return self._mpv is not None and self._mpv.running()

    def activate(self) -> None:
        """Start mpv and subscribe to its events."""
        if self.running():
            return

        logger.debug(f"activating {type(self).__name__}")

        args = list(self.DEFAULT_MPV_ARGS) + self.configured_mpv_args()

        self._mpv = self._session_factory(
            user_args=args, socket_path=self.instance.config.player.socket_path
        )
        self._mpv.callbacks.append(self.dispatch_event)
        self._loadfile_takes_index = self.loadfile_takes_index()
        self._clear_now_playing()

        self.instance.event("player_activated")

    def deactivate(self) -> None:
        """Quit mpv. Cache clearing and the deactivation event happen even if quitting fails."""
        if not self.running():
            return

        logger.debug(f"deactivating {type(self).__name__}")

        # Events mpv sends while shutting down (end-file) are not forwarded;
        # player_deactivated covers them.
        if self.dispatch_event in self._mpv.callbacks:
            self._mpv.callbacks.remove(self.dispatch_event)

        try:
            self._mpv.quit()
        finally:
            self._clear_now_playing()
            self.instance.event("player_deactivated")

    def play(self) -> None:
        if not self.running():
            return

        self._mpv.set_property("pause", False)

    def pause(self) -> None:
        if not self.running():
            return

        self._mpv.set_property("pause", True)

    def playing(self) -> bool:
        if not self.running():
            return False

        return not self._mpv.get_property("pause")

    def next_song(self) -> None:
        """Play the next song in the queue; mpv ignores this on the last song."""
        if not self.running():
            return

        self._mpv.command("playlist-next")

    def previous_song(self) -> None:
        """Play the previous song in the queue; mpv ignores this on the first song."""
        if not self.running():
            return

        self._mpv.command("playlist-prev")

    def enqueue_song(self, song: Song) -> None:
        self.activate()

        self.load_song(song, song.best_guess_album_art)

    def enqueue_album(self, album: Album) -> None:
        self.activate()

        for song in album.songs:
            self.load_song(song, album.cover_art)

    def enqueue_playlist(self, playlist: Playlist) -> None:
        self.activate()

        for song in playlist.songs:
            self.load_song(song, song.best_guess_album_art)

    def list_queue(self) -> List[Song]:
        if not self.running():
            return []

        entries = self._mpv.get_property("playlist/count") or 0

        # TODO: keep the Song objects handed to load_song instead of
        # re-querying mpv one entry at a time.
        queue = []
        for i in range(entries):
            filename = self._mpv.get_property(f"playlist/{i}/filename")
            if filename:
                queue.append(Song(filename))
        return queue

    def shuffle_queue(self) -> None:
        if not self.running():
            return

        self._mpv.command("playlist-shuffle")

    def clear_queue(self) -> None:
        if not self.running():
            return

        self._mpv.command("stop")

    def now_playing(self) -> Optional[Song]:
        """The currently loaded song, fetched from mpv once per loaded track."""
        if not self.running():
            return None

        with self._state_lock:
            if not self._track_loaded:
                return None
            if self._now_playing is None:
                path = self._mpv.get_property("path")
                if path:
                    self._now_playing = Song(path)
            return self._now_playing

    def configured_mpv_args(self) -> List[str]:
        player_config = self.instance.config.player
        args = []

        if player_config.no_art:
            args.extend(["--no-force-window", "--no-video"])

        if player_config.art_geometry:
            args.append(f"--geometry={player_config.art_geometry}")

        # Experimental, but speeds up loading from network-mounted libraries
        if self._session_factory.has_flag("--prefetch-playlist"):
            args.append("--prefetch-playlist")

        return args

    def load_song(self, song: Song, art: Optional[str]) -> None:
        """Append a song (and optional album art) to mpv's queue."""
        append_type = "append-play" if self.instance.config.player.autoplay else "append"
        cmds = ["loadfile", song.path, append_type]
        if art:
            if self._loadfile_takes_index:
                cmds.append(-1)
            cmds.append(f'external-file="{art}"')
        self._mpv.command(*cmds)

    def loadfile_takes_index(self) -> bool:
        """Whether the installed mpv expects an index before loadfile's options."""
        version = self._session_factory.version()
        return version is not None and version >= self.LOADFILE_INDEX_VERSION

    def dispatch_event(self, event: str) -> None:
        """Translate an mpv event into a Muzak event. Runs on the mpv event thread."""
        if event == "file-loaded":
            with self._state_lock:
                self._now_playing = None
                self._track_loaded = True
            self.instance.event("song_loaded", self.now_playing())
        elif event == "end-file":
            self._clear_now_playing()
            self.instance.event("song_unloaded")

    def _clear_now_playing(self) -> None:
        with self._state_lock:
            self._now_playing = None
            self._track_loaded = False
