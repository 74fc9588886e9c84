"""
The Muzak instance: owner of the index, player, plugins and playlists.

Created once at startup. Commands from the shell arrive through command();
the player and commands broadcast to plugins through event().
"""

import threading
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from muzak import router
from muzak.core.config import Config, get_playlists_dir
from muzak.domain.library.index import Index
from muzak.domain.playback import PLAYER_MAP, Player
from muzak.domain.playlists import storage
from muzak.domain.playlists.registry import PlaylistRegistry
from muzak.plugins import PLUGIN_EVENTS, StubPlugin, load_plugins


def _deliver(plugin: StubPlugin, event: str, args: tuple) -> None:
    """Run one plugin's handler; failures stay inside the plugin's thread."""
    handler = getattr(plugin, event, None)
    if handler is None:
        return
    try:
        handler(*args)
    except Exception:
        logger.exception(f"Plugin '{plugin.plugin_name()}' failed handling '{event}'")


class Instance:
    """Process-wide owner of the index, player, plugins and playlist registry."""

    def __init__(
        self,
        config: Config,
        index: Index,
        plugins: Optional[List[StubPlugin]] = None,
        playlists: Optional[PlaylistRegistry] = None,
        player_factory: Optional[Callable[["Instance"], Player]] = None,
    ):
        self.config = config
        self.index = index
        self.plugins: List[StubPlugin] = list(plugins or [])
        self.playlists = playlists

        if player_factory is None:
            backend = config.player.backend
            if backend not in PLAYER_MAP:
                raise ValueError(
                    f"Unknown player backend '{backend}'. "
                    f"Available: {', '.join(sorted(PLAYER_MAP))}"
                )
            player_factory = PLAYER_MAP[backend]

        self.player: Player = player_factory(self)

    @classmethod
    def create(cls, config: Config) -> "Instance":
        """Build the instance from configuration and run the autoplay playlist."""
        logger.info("muzak is starting...")

        index = Index(Path(config.music.directory), config.music.formats)
        plugins = load_plugins(config)
        playlists = PlaylistRegistry(storage.load_playlists(get_playlists_dir(config)))

        instance = cls(config, index, plugins=plugins, playlists=playlists)

        if not instance.player.available():
            logger.warning(
                f"Player backend '{config.player.backend}' is not available on this system"
            )

        if config.player.autoplay:
            instance.command("enqueue-playlist", config.player.autoplay)

        return instance

    @property
    def playlists_dir(self) -> Path:
        return get_playlists_dir(self.config)

    def playlists_loaded(self) -> bool:
        return self.playlists is not None

    def command(self, name: str, *args: str) -> bool:
        """Run a shell command by name. Returns False when the shell should exit."""
        return router.handle_command(self, name, list(args))

    def event(self, event: str, *args) -> None:
        """Broadcast an event to every plugin, one plugin at a time, in load order.

        Unknown event names are ignored. Each handler runs in its own thread
        and is joined before the next plugin is called.
        """
        if event not in PLUGIN_EVENTS:
            return

        timeout = self.config.plugins.event_timeout
        for plugin in self.plugins:
            worker = threading.Thread(
                target=_deliver,
                args=(plugin, event, args),
                name=f"plugin-{plugin.plugin_name()}",
                daemon=True,
            )
            worker.start()
            worker.join(timeout if timeout and timeout > 0 else None)

            if worker.is_alive():
                logger.warning(
                    f"Plugin '{plugin.plugin_name()}' did not finish '{event}' "
                    f"within {timeout}s, moving on"
                )
