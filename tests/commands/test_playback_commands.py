"""Tests for playback and library command handlers."""

from muzak.domain.library.models import Song


def loaded_paths(instance):
    session = instance.player._mpv
    return [c[1] for c in session.commands if c[0] == "loadfile"]


class TestEnqueueCommands:
    def test_enqueue_album(self, instance) -> None:
        instance.command("enqueue-album", "Album", "One")

        assert [p.rsplit("/", 1)[1] for p in loaded_paths(instance)] == [
            "01 first.mp3",
            "02 second.mp3",
        ]

    def test_enqueue_unknown_album_does_not_start_player(self, instance) -> None:
        instance.command("enqueue-album", "Nope")

        assert not instance.player.running()

    def test_enqueue_artist_queues_albums_in_order(self, instance) -> None:
        instance.command("enqueue-artist", "Artist", "A")

        assert [p.rsplit("/", 1)[1] for p in loaded_paths(instance)] == [
            "01 first.mp3",
            "02 second.mp3",
            "01 third.flac",
        ]

    def test_jukebox(self, instance) -> None:
        instance.command("jukebox", "2")

        paths = loaded_paths(instance)
        assert len(paths) == 2
        assert len(set(paths)) == 2

    def test_jukebox_default_size(self, instance) -> None:
        """Without a count the configured size is used, capped by the library."""
        instance.command("jukebox")

        assert len(loaded_paths(instance)) == 4

    def test_jukebox_bad_count(self, instance, capsys) -> None:
        instance.command("jukebox", "lots")

        assert "Usage: jukebox [count]" in capsys.readouterr().err
        assert not instance.player.running()


class TestPlayerCommands:
    def test_controls_before_activation_do_nothing(self, instance) -> None:
        for name in ("play", "pause", "toggle", "next", "previous",
                     "shuffle-queue", "clear-queue", "list-queue", "now-playing"):
            assert instance.command(name) is True

        assert not instance.player.running()

    def test_activate_and_deactivate(self, instance) -> None:
        instance.command("player-activate")
        assert instance.player.running()

        instance.command("player-deactivate")
        assert not instance.player.running()

    def test_now_playing(self, instance, capsys) -> None:
        instance.command("player-activate")
        session = instance.player._mpv
        session.properties["path"] = "/music/Artist/Album/track.mp3"
        session.emit("file-loaded")

        instance.command("now-playing")

        assert "track" in capsys.readouterr().out

    def test_now_playing_between_tracks(self, instance, capsys) -> None:
        instance.command("player-activate")

        instance.command("now-playing")

        assert "Nothing is playing" in capsys.readouterr().out

    def test_list_queue(self, instance, capsys) -> None:
        instance.command("enqueue-album", "Album", "Two")

        instance.command("list-queue")

        assert "01 third" in capsys.readouterr().out
        assert instance.player.list_queue() == [
            Song(loaded_paths(instance)[0])
        ]


class TestLibraryCommands:
    def test_list_artists(self, instance, capsys) -> None:
        instance.command("list-artists")

        out = capsys.readouterr().out
        assert "Artist A" in out
        assert "Artist B" in out

    def test_albums_by_artist(self, instance, capsys) -> None:
        instance.command("albums-by-artist", "Artist", "B")

        out = capsys.readouterr().out
        assert "Album Three" in out
        assert "Empty Album" not in out

    def test_songs_by_artist(self, instance, capsys) -> None:
        instance.command("songs-by-artist", "Artist", "A")

        out = capsys.readouterr().out
        assert "02 second" in out

    def test_index_build_picks_up_new_artist(self, instance, music_dir) -> None:
        song = music_dir / "Artist C" / "Debut" / "one.mp3"
        song.parent.mkdir(parents=True)
        song.write_bytes(b"")

        instance.command("index-build")

        assert "Artist C" in instance.index.artists
