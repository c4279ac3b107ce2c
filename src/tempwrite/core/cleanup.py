"""Best-effort deletion of tracked temporary paths."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from tempwrite.core.registry import ResourceRegistry

logger = structlog.get_logger(__name__)


class CleanupEngine:
    """Deletes tracked files and directories without ever raising."""

    __slots__ = ("registry",)

    def __init__(self, registry: ResourceRegistry) -> None:
        self.registry = registry

    def cleanup_one(self, path: str | os.PathLike[str]) -> bool:
        """Delete a single path and stop tracking it.

        A missing path counts as success. The path is unregistered whether or
        not deletion worked, so a failing path is never retried automatically.

        Returns:
            True if the path no longer exists, False if deletion failed
        """
        target = Path(path)
        try:
            return self._remove(target)
        finally:
            self.registry.unregister(target)

    def cleanup_all(self) -> int:
        """Delete every tracked path.

        Returns:
            Number of paths removed successfully (not the number attempted)
        """
        paths = self.registry.drain()
        return sum(1 for path in paths if self._remove(path))

    def _remove(self, path: Path) -> bool:
        if not os.path.lexists(path):
            return True

        try:
            # Symlinks are unlinked, never followed
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink(missing_ok=True)
        except FileNotFoundError:
            # Removed by someone else in the meantime
            return True
        except OSError as e:
            logger.warning("temp_cleanup_failed", path=str(path), error=str(e))
            return False
        return True
