"""Playback domain - the Player abstraction and its mpv backend.

This domain handles:
- The capability interface every backend implements
- mpv process lifecycle and JSON IPC
- Translating mpv events into Muzak events
"""

from typing import Dict, Type

from .ipc import MpvCommandError, MpvError, MpvSession, check_mpv_available
from .mpv import MpvPlayer
from .player import Player

# Backend name (config [player] backend) -> implementation
PLAYER_MAP: Dict[str, Type[Player]] = {
    MpvPlayer.player_name(): MpvPlayer,
}

__all__ = [
    "PLAYER_MAP",
    "Player",
    "MpvPlayer",
    "MpvSession",
    "MpvError",
    "MpvCommandError",
    "check_mpv_available",
]
