"""Tests for M3U8 playlist persistence."""

from pathlib import Path

import pytest

from muzak.core.path_security import UnsafeNameError
from muzak.domain.library.models import Song
from muzak.domain.playlists.models import Playlist
from muzak.domain.playlists.storage import (
    delete_playlist,
    load_playlist,
    load_playlists,
    parse_m3u8,
    playlist_names,
    playlist_path,
    save_playlist,
)


class TestParseM3U8:
    def test_skips_comments_and_blank_lines(self) -> None:
        content = "#EXTM3U\n\n#EXTINF:-1,Title\n/m/a.mp3\n  \n/m/b.mp3\n"

        assert parse_m3u8(content) == ["/m/a.mp3", "/m/b.mp3"]

    def test_file_uris_are_decoded(self) -> None:
        assert parse_m3u8("file:///m/My%20Song.mp3\n") == ["/m/My Song.mp3"]

    def test_plain_paths_are_literal(self) -> None:
        """A percent sign in a plain path is part of the file name."""
        assert parse_m3u8("/m/100%20 Hits.mp3\n") == ["/m/100%20 Hits.mp3"]


class TestSaveAndLoad:
    """Tests for writing and reading playlists."""

    def test_save_writes_extended_m3u(self, tmp_path: Path) -> None:
        playlist = Playlist("mix", [Song("/m/a.mp3", artist="Art")])

        path = save_playlist(tmp_path, playlist)

        assert path == playlist_path(tmp_path, "mix")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "#EXTM3U"
        assert "#EXTINF:-1,Art - a" in lines
        assert lines[-1] == "/m/a.mp3"

    def test_saved_playlist_loads_back_in_order(self, tmp_path: Path) -> None:
        songs = [Song("/m/b.mp3"), Song("/m/a.mp3"), Song("/m/b.mp3")]
        save_playlist(tmp_path, Playlist("mix", songs))

        loaded = load_playlist(tmp_path, "mix")

        assert loaded.name == "mix"
        assert loaded.songs == songs

    def test_percent_in_file_name_survives_round_trip(self, tmp_path: Path) -> None:
        songs = [Song("/m/100%20 Hits.mp3"), Song("/m/50% off.mp3")]
        save_playlist(tmp_path, Playlist("mix", songs))

        assert load_playlist(tmp_path, "mix").songs == songs

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "playlists"

        save_playlist(target, Playlist("p"))

        assert (target / "p.m3u8").is_file()

    def test_load_missing_is_empty(self, tmp_path: Path) -> None:
        playlist = load_playlist(tmp_path, "ghost")

        assert playlist.name == "ghost"
        assert playlist.songs == []

    def test_load_playlists_and_names(self, tmp_path: Path) -> None:
        save_playlist(tmp_path, Playlist("b", [Song("/m/1.mp3")]))
        save_playlist(tmp_path, Playlist("a"))
        (tmp_path / "notes.txt").write_text("ignored")

        assert playlist_names(tmp_path) == ["a", "b"]
        playlists = load_playlists(tmp_path)
        assert sorted(playlists) == ["a", "b"]
        assert playlists["b"].songs == [Song("/m/1.mp3")]

    def test_unreadable_playlist_is_skipped(self, tmp_path: Path) -> None:
        save_playlist(tmp_path, Playlist("good", [Song("/m/1.mp3")]))
        (tmp_path / "bad.m3u8").write_bytes(b"\xff\xfe\xfa broken")

        playlists = load_playlists(tmp_path)

        assert list(playlists) == ["good"]

    def test_names_of_missing_directory(self, tmp_path: Path) -> None:
        assert playlist_names(tmp_path / "nope") == []


class TestDelete:
    def test_delete_existing(self, tmp_path: Path) -> None:
        save_playlist(tmp_path, Playlist("p"))

        assert delete_playlist(tmp_path, "p") is True
        assert not playlist_path(tmp_path, "p").exists()

    def test_delete_missing(self, tmp_path: Path) -> None:
        assert delete_playlist(tmp_path, "p") is False


class TestPlaylistNames:
    """Tests for keeping playlist files inside the playlists directory."""

    @pytest.mark.parametrize(
        "name", ["../../escaped", "rock/80s", "..", ".hidden", "a\\b", "", "   "]
    )
    def test_unsafe_names_rejected(self, tmp_path: Path, name: str) -> None:
        with pytest.raises(UnsafeNameError):
            playlist_path(tmp_path / "playlists", name)

    def test_save_refuses_escaping_name(self, tmp_path: Path) -> None:
        playlists_dir = tmp_path / "a" / "playlists"

        with pytest.raises(UnsafeNameError):
            save_playlist(playlists_dir, Playlist("../../escaped", [Song("/m/a.mp3")]))

        assert not (tmp_path / "escaped.m3u8").exists()
        assert list(tmp_path.rglob("*.m3u8")) == []

    def test_delete_refuses_escaping_name(self, tmp_path: Path) -> None:
        outside = tmp_path / "victim.m3u8"
        outside.write_text("#EXTM3U\n")
        playlists_dir = tmp_path / "playlists"
        playlists_dir.mkdir()

        with pytest.raises(UnsafeNameError):
            delete_playlist(playlists_dir, "../victim")

        assert outside.exists()

    def test_symlinked_playlist_outside_directory_rejected(self, tmp_path: Path) -> None:
        playlists_dir = tmp_path / "playlists"
        playlists_dir.mkdir()
        (tmp_path / "elsewhere.m3u8").write_text("#EXTM3U\n")
        (playlists_dir / "link.m3u8").symlink_to(tmp_path / "elsewhere.m3u8")

        with pytest.raises(UnsafeNameError):
            playlist_path(playlists_dir, "link")

    def test_spaces_and_punctuation_allowed(self, tmp_path: Path) -> None:
        path = playlist_path(tmp_path, "Road trip: 80's & 90's")

        assert path == tmp_path / "Road trip: 80's & 90's.m3u8"
