"""
Plugin discovery and loading.

Built-in plugins ship with Muzak; user plugins are StubPlugin subclasses
defined in *.py files of the plugins directory.
"""

import importlib.util
import inspect
from pathlib import Path
from typing import Dict, List, Type

from loguru import logger

from muzak.core.config import Config, get_plugins_dir

from .base import StubPlugin
from .notify import Notify

BUILTIN_PLUGINS: List[Type[StubPlugin]] = [Notify]


def _plugin_classes(module) -> List[Type[StubPlugin]]:
    return [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if issubclass(obj, StubPlugin)
        and obj is not StubPlugin
        and obj.__module__ == module.__name__
    ]


def discover_user_plugins(plugins_dir: Path) -> List[Type[StubPlugin]]:
    """Import every *.py file in the plugins directory and collect plugin classes."""
    if not plugins_dir.is_dir():
        return []

    classes: List[Type[StubPlugin]] = []
    for path in sorted(plugins_dir.glob("*.py")):
        module_name = f"muzak_user_plugins.{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            continue

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception:
            logger.exception(f"Failed to import plugin file {path}, skipping")
            continue

        classes.extend(_plugin_classes(module))

    return classes


def plugin_map(config: Config) -> Dict[str, Type[StubPlugin]]:
    """All known plugin classes by name; user plugins shadow built-ins."""
    classes = BUILTIN_PLUGINS + discover_user_plugins(get_plugins_dir(config))
    return {cls.plugin_name(): cls for cls in classes}


def load_plugins(config: Config) -> List[StubPlugin]:
    """Instantiate the enabled, available plugins in the configured order."""
    known = plugin_map(config)
    plugins: List[StubPlugin] = []

    for name in config.plugins.enabled:
        cls = known.get(name)
        if cls is None:
            logger.warning(f"Unknown plugin '{name}' in configuration")
            continue
        if not cls.available():
            logger.info(f"Plugin '{name}' is not available on this system, skipping")
            continue

        try:
            plugins.append(cls())
        except Exception:
            logger.exception(f"Failed to initialize plugin '{name}'")

    return plugins
