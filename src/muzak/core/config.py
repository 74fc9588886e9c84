"""
Configuration management for Muzak
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class MusicConfig:
    """Configuration for the music library."""

    directory: str = str(Path.home() / "Music")
    formats: List[str] = field(
        default_factory=lambda: [".mp3", ".m4a", ".ogg", ".opus", ".flac", ".wav"]
    )


@dataclass
class PlayerConfig:
    """Configuration for the playback backend."""

    backend: str = "mpv"
    autoplay: Optional[str] = None  # Playlist enqueued (and auto-played) on startup
    art_geometry: Optional[str] = None
    no_art: bool = False
    socket_path: Optional[str] = None
    jukebox_size: int = 100


@dataclass
class PluginsConfig:
    """Configuration for plugins."""

    enabled: List[str] = field(default_factory=list)
    directory: Optional[str] = None  # Default: <config dir>/plugins
    event_timeout: float = 10.0  # Seconds to wait on a single plugin handler


@dataclass
class PlaylistConfig:
    """Configuration for playlist storage."""

    directory: Optional[str] = None  # Default: <data dir>/playlists


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # Default: <data dir>/muzak.log


@dataclass
class Config:
    """Main configuration object."""

    music: MusicConfig = field(default_factory=MusicConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    plugins: PluginsConfig = field(default_factory=PluginsConfig)
    playlists: PlaylistConfig = field(default_factory=PlaylistConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "muzak"
    return Path.home() / ".config" / "muzak"


def get_config_path() -> Path:
    """Get the main configuration file path.

    ``MUZAK_CONFIG`` wins when set, otherwise ``config.toml`` in the
    configuration directory.
    """
    override = os.environ.get("MUZAK_CONFIG")
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "muzak"
    return Path.home() / ".local" / "share" / "muzak"


def get_playlists_dir(config: Config) -> Path:
    """Directory holding the playlist files."""
    if config.playlists.directory:
        return Path(config.playlists.directory).expanduser()
    return get_data_dir() / "playlists"


def get_plugins_dir(config: Config) -> Path:
    """Directory scanned for user plugins."""
    if config.plugins.directory:
        return Path(config.plugins.directory).expanduser()
    return get_config_dir() / "plugins"


def get_log_file_path(config: Config) -> Path:
    """Get the path to the log file."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "muzak.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Muzak Configuration

[music]
# Library root, laid out as <directory>/<artist>/<album>/<songs>
directory = "~/Music"

# Audio file extensions picked up by the index
formats = [".mp3", ".m4a", ".ogg", ".opus", ".flac", ".wav"]

[player]
# Playback backend
backend = "mpv"

# Playlist to enqueue on startup; when set, loaded songs start playing at once
# autoplay = "favorites"

# Window geometry for the album art window
# art_geometry = "300x300"

# Don't open a window for album art
no_art = false

# Number of random songs queued by the jukebox command
jukebox_size = 100

[plugins]
# Plugins to load, by name
enabled = []

# Seconds to wait for a single plugin to handle an event
event_timeout = 10.0

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"
""".strip()


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - MUZAK_MUSIC
    - MUZAK_AUTOPLAY
    - MUZAK_ART_GEOMETRY
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        config = Config()
    else:
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
            config = parse_config(toml_data)
        except (tomllib.TOMLDecodeError, OSError, TypeError, ValueError) as e:
            print(f"Error loading configuration from {config_path}: {e}")
            print("Using default configuration.")
            config = Config()

    apply_env_overrides(config)
    return config


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML, falling back to defaults per key."""
    config = Config()

    if "music" in toml_data:
        music_data = toml_data["music"]
        config.music = MusicConfig(
            directory=str(
                Path(music_data.get("directory", config.music.directory)).expanduser()
            ),
            formats=[f.lower() for f in music_data.get("formats", config.music.formats)],
        )

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            backend=player_data.get("backend", config.player.backend),
            autoplay=player_data.get("autoplay"),
            art_geometry=player_data.get("art_geometry"),
            no_art=player_data.get("no_art", config.player.no_art),
            socket_path=player_data.get("socket_path"),
            jukebox_size=int(
                player_data.get("jukebox_size", config.player.jukebox_size)
            ),
        )

    if "plugins" in toml_data:
        plugins_data = toml_data["plugins"]
        config.plugins = PluginsConfig(
            enabled=list(plugins_data.get("enabled", config.plugins.enabled)),
            directory=plugins_data.get("directory"),
            event_timeout=float(
                plugins_data.get("event_timeout", config.plugins.event_timeout)
            ),
        )

    if "playlists" in toml_data:
        config.playlists = PlaylistConfig(
            directory=toml_data["playlists"].get("directory"),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
        )

    return config


def apply_env_overrides(config: Config) -> None:
    """Override configured values with MUZAK_* environment variables."""
    music_dir = os.environ.get("MUZAK_MUSIC")
    autoplay = os.environ.get("MUZAK_AUTOPLAY")
    art_geometry = os.environ.get("MUZAK_ART_GEOMETRY")

    if music_dir:
        config.music.directory = str(Path(music_dir).expanduser())
    if autoplay:
        config.player.autoplay = autoplay
    if art_geometry:
        config.player.art_geometry = art_geometry


def ensure_directories(config: Config) -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
    get_playlists_dir(config).mkdir(parents=True, exist_ok=True)
