"""Plugin system for Muzak.

Modules:
- base: the event set and the no-op StubPlugin
- loader: built-in and user plugin discovery
- notify: desktop notifications on song changes
"""

from .base import PLUGIN_EVENTS, StubPlugin
from .loader import BUILTIN_PLUGINS, discover_user_plugins, load_plugins, plugin_map
from .notify import Notify

__all__ = [
    "PLUGIN_EVENTS",
    "StubPlugin",
    "BUILTIN_PLUGINS",
    "discover_user_plugins",
    "load_plugins",
    "plugin_map",
    "Notify",
]
