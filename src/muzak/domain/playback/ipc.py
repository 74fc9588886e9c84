"""
mpv process and JSON IPC session.

Commands travel over short-lived socket connections (one request, one reply,
matched by request_id). A second, long-lived connection receives mpv's event
broadcasts and hands each event name to the registered callbacks.
"""

import itertools
import json
import os
import re
import shutil
import socket
import subprocess
import tempfile
import threading
import time
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from loguru import logger

SOCKET_TIMEOUT = 5.0  # Seconds to wait for mpv to create its socket
REQUEST_TIMEOUT = 2.0  # Seconds to wait for a single IPC reply
QUIT_TIMEOUT = 2.0  # Seconds to wait for mpv to exit after "quit"

VERSION_PATTERN = re.compile(r"^mpv v?(\d+)\.(\d+)(?:\.(\d+))?")


class MpvError(RuntimeError):
    """Raised when mpv cannot be started or the IPC channel fails."""

    pass


class MpvCommandError(MpvError):
    """Raised when mpv answers a request with an error status."""

    def __init__(self, args: Sequence[Any], error: str):
        self.command_args = list(args)
        self.error = error
        super().__init__(f"mpv command {self.command_args!r} failed: {error}")


def check_mpv_available(executable: str = "mpv") -> bool:
    """Check if mpv is available on the system."""
    if not shutil.which(executable):
        return False
    try:
        result = subprocess.run(
            [executable, "--version"], capture_output=True, text=True, timeout=5
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, OSError):
        return False


@lru_cache(maxsize=None)
def _list_options(executable: str) -> str:
    try:
        result = subprocess.run(
            [executable, "--list-options"], capture_output=True, text=True, timeout=5
        )
    except (subprocess.SubprocessError, OSError):
        return ""
    return result.stdout


@lru_cache(maxsize=None)
def mpv_version(executable: str = "mpv") -> Optional[Tuple[int, int, int]]:
    """The installed mpv release as (major, minor, patch), or None if unknown."""
    try:
        result = subprocess.run(
            [executable, "--version"], capture_output=True, text=True, timeout=5
        )
    except (subprocess.SubprocessError, OSError):
        return None
    return parse_mpv_version(result.stdout)


def parse_mpv_version(output: str) -> Optional[Tuple[int, int, int]]:
    match = VERSION_PATTERN.match(output.strip())
    if match is None:
        return None
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)


def default_socket_path() -> str:
    return str(Path(tempfile.gettempdir()) / f"muzak-mpv-{os.getpid()}.sock")


class MpvSession:
    """A running mpv process controlled over its JSON IPC socket."""

    def __init__(
        self,
        user_args: Sequence[str] = (),
        socket_path: Optional[str] = None,
        executable: str = "mpv",
    ):
        self.socket_path = socket_path or default_socket_path()
        self.executable = executable
        self.callbacks: List[Callable[[str], None]] = []

        self._request_ids = itertools.count(1)
        self._id_lock = threading.Lock()
        self._event_sock: Optional[socket.socket] = None

        if os.path.exists(self.socket_path):
            logger.debug(f"Removing stale socket: {self.socket_path}")
            os.unlink(self.socket_path)

        cmd = [
            executable,
            "--idle=yes",
            "--no-terminal",
            f"--input-ipc-server={self.socket_path}",
            *user_args,
        ]
        logger.info(f"Starting mpv: {' '.join(cmd)}")

        try:
            self.process = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            raise MpvError(f"Failed to start mpv: {e}") from e

        try:
            self._wait_for_socket()
            self._event_sock = self._connect()
            self._event_sock.settimeout(None)
        except (MpvError, OSError) as e:
            self.process.kill()
            raise MpvError(f"Could not connect to mpv at {self.socket_path}: {e}") from e

        self._reader = threading.Thread(
            target=self._read_events, name="mpv-events", daemon=True
        )
        self._reader.start()

    @classmethod
    def available(cls, executable: str = "mpv") -> bool:
        return check_mpv_available(executable)

    @classmethod
    def version(cls, executable: str = "mpv") -> Optional[Tuple[int, int, int]]:
        return mpv_version(executable)

    @classmethod
    def has_flag(cls, flag: str, executable: str = "mpv") -> bool:
        """Whether the installed mpv knows the given command line option."""
        option = flag.lstrip("-")
        return any(
            line.split()[0].lstrip("-") == option
            for line in _list_options(executable).splitlines()
            if line.strip()
        )

    def running(self) -> bool:
        return self.process.poll() is None

    def command(self, *args: Any) -> Any:
        """Run an mpv input command, e.g. command("playlist-next")."""
        return self._request(*args)

    def get_property(self, name: str) -> Any:
        """Get a property value, or None when mpv reports it unavailable."""
        try:
            return self._request("get_property", name)
        except MpvCommandError as e:
            logger.debug(f"get_property {name}: {e.error}")
            return None

    def set_property(self, name: str, value: Any) -> None:
        self._request("set_property", name, value)

    def quit(self) -> None:
        """Ask mpv to exit and release the socket. Raises MpvError if mpv is unreachable."""
        try:
            self._send({"command": ["quit"]})
            try:
                self.process.wait(timeout=QUIT_TIMEOUT)
            except subprocess.TimeoutExpired:
                logger.warning("mpv did not exit after quit, killing it")
                self.process.kill()
                self.process.wait(timeout=QUIT_TIMEOUT)
        finally:
            self._close()

    def _wait_for_socket(self) -> None:
        deadline = time.monotonic() + SOCKET_TIMEOUT
        while not os.path.exists(self.socket_path):
            if self.process.poll() is not None:
                raise MpvError(f"mpv exited with status {self.process.returncode}")
            if time.monotonic() > deadline:
                raise MpvError(f"mpv socket creation timeout after {SOCKET_TIMEOUT}s")
            time.sleep(0.05)

    def _connect(self) -> socket.socket:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(REQUEST_TIMEOUT)
        try:
            sock.connect(self.socket_path)
        except OSError:
            sock.close()
            raise
        return sock

    def _next_request_id(self) -> int:
        with self._id_lock:
            return next(self._request_ids)

    def _send(self, payload: dict) -> None:
        try:
            with self._connect() as sock:
                sock.sendall((json.dumps(payload) + "\n").encode("utf-8"))
        except OSError as e:
            raise MpvError(f"mpv IPC send failed: {e}") from e

    def _request(self, *args: Any) -> Any:
        request_id = self._next_request_id()
        payload = {"command": list(args), "request_id": request_id}

        try:
            with self._connect() as sock:
                sock.sendall((json.dumps(payload) + "\n").encode("utf-8"))
                reply = self._read_reply(sock, request_id)
        except OSError as e:
            raise MpvError(f"mpv IPC request {list(args)!r} failed: {e}") from e

        if reply.get("error") != "success":
            raise MpvCommandError(args, str(reply.get("error")))
        return reply.get("data")

    @staticmethod
    def _read_reply(sock: socket.socket, request_id: int) -> dict:
        buf = b""
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                raise MpvError("mpv closed the IPC connection")
            buf += chunk
            while b"\n" in buf:
                line, buf = buf.split(b"\n", 1)
                if not line.strip():
                    continue
                try:
                    message = json.loads(line.decode("utf-8", errors="replace"))
                except json.JSONDecodeError:
                    continue
                # Event broadcasts share the connection; skip them
                if message.get("request_id") == request_id:
                    return message

    def _read_events(self) -> None:
        sock = self._event_sock
        if sock is None:
            return

        buf = b""
        while True:
            try:
                chunk = sock.recv(4096)
            except OSError:
                break
            if not chunk:
                break

            buf += chunk
            while b"\n" in buf:
                line, buf = buf.split(b"\n", 1)
                if not line.strip():
                    continue
                try:
                    message = json.loads(line.decode("utf-8", errors="replace"))
                except json.JSONDecodeError:
                    continue
                event = message.get("event")
                if event:
                    self._dispatch(event)

        logger.debug("mpv event reader stopped")

    def _dispatch(self, event: str) -> None:
        for callback in list(self.callbacks):
            try:
                callback(event)
            except Exception:
                logger.exception(f"mpv event callback failed for '{event}'")

    def _close(self) -> None:
        if self._event_sock is not None:
            try:
                self._event_sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            self._event_sock.close()
            self._event_sock = None

        if os.path.exists(self.socket_path):
            try:
                os.unlink(self.socket_path)
            except OSError:
                pass
