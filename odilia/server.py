"""Forward keyboard-triggered events to the screen reader over its unix socket."""

from __future__ import annotations

import logging
import os
import queue
import socket
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from odilia.events import to_json

_log = logging.getLogger(__name__)


def get_file_paths() -> tuple[Path, Path]:
    """Return the PID file path and the socket path, in that order."""
    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    if runtime_dir is not None:
        _log.info("XDG_RUNTIME_DIR is present, using its value as default file path.")
        base = runtime_dir
    else:
        _log.warning("XDG_RUNTIME_DIR is not set, falling back to hardcoded path")
        base = f"/run/user/{os.getuid()}"
    return Path(f"{base}/odilias.pid"), Path(f"{base}/odilia.sock")


def handle_events_to_socket(
    events: Union[Iterable[Any], "queue.Queue[Any]"],
    sock_path: Optional[Union[str, os.PathLike[str]]] = None,
) -> None:
    """Send each event as JSON over the unix socket at ``sock_path``.

    ``events`` is any iterable of events, or a queue read until it yields ``None``.
    Without ``sock_path`` the socket from :func:`get_file_paths` is used.
    """
    if sock_path is None:
        _pid_path, sock_path = get_file_paths()
    _log.debug("Using socket path %s", sock_path)
    source: Iterable[Any] = iter(events.get, None) if isinstance(events, queue.Queue) else events
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as stream:
        stream.connect(os.fspath(sock_path))
        for event in source:
            stream.sendall(to_json(event).encode("utf-8"))