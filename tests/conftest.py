"""Shared fixtures: a throwaway music library, config, and a fake mpv session."""

from pathlib import Path
from typing import Any, List, Optional

import pytest

from muzak.core.config import Config
from muzak.domain.library.index import Index
from muzak.domain.playback.mpv import MpvPlayer
from muzak.domain.playlists.registry import PlaylistRegistry
from muzak.instance import Instance


class FakeMpvSession:
    """Stands in for MpvSession: records commands, serves properties from a dict."""

    flags: set = set()
    version_info: Optional[tuple] = None
    created: List["FakeMpvSession"] = []

    def __init__(self, user_args=(), socket_path: Optional[str] = None):
        self.user_args = list(user_args)
        self.socket_path = socket_path
        self.callbacks: list = []
        self.commands: List[list] = []
        self.properties: dict = {"pause": False, "playlist/count": 0}
        self.quit_error: Optional[Exception] = None
        self.quit_calls = 0
        self.quit_events: List[str] = []
        self._running = True
        type(self).created.append(self)

    @classmethod
    def has_flag(cls, flag: str) -> bool:
        return flag in cls.flags

    @classmethod
    def version(cls) -> Optional[tuple]:
        return cls.version_info

    def running(self) -> bool:
        return self._running

    def command(self, *args: Any) -> None:
        self.commands.append(list(args))
        if args and args[0] == "loadfile":
            count = self.properties.get("playlist/count", 0)
            self.properties[f"playlist/{count}/filename"] = args[1]
            self.properties["playlist/count"] = count + 1

    def get_property(self, name: str) -> Any:
        return self.properties.get(name)

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def quit(self) -> None:
        self.quit_calls += 1
        # mpv reports the current file ending while it shuts down
        for event in self.quit_events:
            self.emit(event)
        self._running = False
        if self.quit_error is not None:
            raise self.quit_error

    def emit(self, event: str) -> None:
        """Simulate mpv broadcasting a native event."""
        for callback in list(self.callbacks):
            callback(event)


@pytest.fixture
def fake_session_cls():
    """A fresh FakeMpvSession subclass so created/flags don't leak between tests."""

    class Session(FakeMpvSession):
        flags = set()
        version_info = None
        created = []

    return Session


class RecordingInstance:
    """Minimal Instance stand-in for player tests: config plus an event log."""

    def __init__(self, config: Config):
        self.config = config
        self.events: List[tuple] = []

    def event(self, event: str, *args) -> None:
        self.events.append((event, *args))

    def event_names(self) -> List[str]:
        return [e[0] for e in self.events]


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


@pytest.fixture
def music_dir(tmp_path: Path) -> Path:
    """A small library: two artists, three albums, some art and a stray file."""
    root = tmp_path / "music"
    _touch(root / "Artist A" / "Album One" / "01 first.mp3")
    _touch(root / "Artist A" / "Album One" / "02 second.mp3")
    _touch(root / "Artist A" / "Album One" / "cover.jpg")
    _touch(root / "Artist A" / "Album Two" / "01 third.flac")
    _touch(root / "Artist B" / "Album Three" / "song.ogg")
    _touch(root / "Artist B" / "Album Three" / "notes.txt")
    _touch(root / "Artist B" / "Album Three" / "Folder.PNG")
    (root / "Artist B" / "Empty Album").mkdir(parents=True)
    return root


@pytest.fixture
def config(tmp_path: Path, music_dir: Path) -> Config:
    cfg = Config()
    cfg.music.directory = str(music_dir)
    cfg.playlists.directory = str(tmp_path / "playlists")
    cfg.plugins.directory = str(tmp_path / "plugins")
    cfg.plugins.event_timeout = 5.0
    return cfg


@pytest.fixture
def recording_instance(config: Config) -> RecordingInstance:
    return RecordingInstance(config)


@pytest.fixture
def instance(config: Config, fake_session_cls) -> Instance:
    """A real Instance over the fixture library, with mpv faked and no plugins."""
    return Instance(
        config,
        Index(Path(config.music.directory), config.music.formats),
        plugins=[],
        playlists=PlaylistRegistry(),
        player_factory=lambda inst: MpvPlayer(inst, session_factory=fake_session_cls),
    )
