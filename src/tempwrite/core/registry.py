"""Registry of temporary paths pending cleanup."""

from __future__ import annotations

import os
import threading
from pathlib import Path


class ResourceRegistry:
    """Thread-safe, insertion-ordered set of tracked paths."""

    __slots__ = ("_paths", "_lock")

    def __init__(self) -> None:
        # dict keys keep insertion order for deterministic listing
        self._paths: dict[Path, None] = {}
        self._lock = threading.Lock()

    def register(self, path: str | os.PathLike[str]) -> None:
        """Track a path. Registering a tracked path again is a no-op.

        Relative paths are stored against the current working directory, so a
        later chdir does not change what gets cleaned up.
        """
        key = _key(path)
        with self._lock:
            self._paths[key] = None

    def unregister(self, path: str | os.PathLike[str]) -> None:
        """Stop tracking a path if it is tracked."""
        key = _key(path)
        with self._lock:
            self._paths.pop(key, None)

    def contains(self, path: str | os.PathLike[str]) -> bool:
        """Check whether a path is tracked."""
        key = _key(path)
        with self._lock:
            return key in self._paths

    def list(self) -> list[Path]:
        """Snapshot of tracked paths in registration order."""
        with self._lock:
            return list(self._paths)

    def drain(self) -> list[Path]:
        """Empty the registry and return everything that was in it.

        Registrations that happen after the drain are kept for the next one.
        """
        with self._lock:
            drained = list(self._paths)
            self._paths.clear()
            return drained

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return self.contains(path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)


def _key(path: str | os.PathLike[str]) -> Path:
    return Path(path).absolute()
