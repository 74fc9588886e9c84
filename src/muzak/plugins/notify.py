"""Desktop notification plugin."""

import shutil
import subprocess
from typing import List, Optional

from loguru import logger

from muzak.domain.library.models import Song

from .base import StubPlugin

NOTIFY_SEND = "notify-send"


class Notify(StubPlugin):
    """Pops up a desktop notification for each song mpv starts."""

    app_name = "Muzak"
    urgency = "low"
    timeout = 2.0  # Seconds; a stuck notification daemon must not hold the event thread

    @classmethod
    def available(cls) -> bool:
        return shutil.which(NOTIFY_SEND) is not None

    def notification_command(self, song: Song) -> List[str]:
        """notify-send argv: song title as summary, album (if known) as body."""
        body = f"from {song.album}" if song.album else ""
        return [
            NOTIFY_SEND,
            f"--urgency={self.urgency}",
            f"--app-name={self.app_name}",
            song.full_title,
            body,
        ]

    def song_loaded(self, song: Optional[Song]) -> None:
        if song is None:
            return

        try:
            subprocess.run(
                self.notification_command(song),
                check=False,
                timeout=self.timeout,
                capture_output=True,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            logger.debug(f"notification for '{song.full_title}' failed: {e}")
