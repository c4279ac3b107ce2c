"""Module-level functions backed by a lazily created default writer."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any

from tempwrite.core.writer import TempWriter

_default_writer: TempWriter | None = None
_default_lock = threading.Lock()


def default_writer() -> TempWriter:
    """Return the process-wide writer, creating it on first use."""
    global _default_writer
    if _default_writer is None:
        with _default_lock:
            if _default_writer is None:
                _default_writer = TempWriter()
    return _default_writer


def reset_default_writer() -> int:
    """Clean up and discard the default writer.

    Returns:
        Number of paths removed
    """
    global _default_writer
    with _default_lock:
        writer, _default_writer = _default_writer, None
    if writer is None:
        return 0
    removed = writer.cleanup_all()
    writer.lifecycle.uninstall()
    return removed


def write(content: str | bytes, extension: str = "", options: Any = None, **overrides: Any) -> Path:
    return default_writer().write(content, extension, options, **overrides)


def write_json(value: Any, options: Any = None, **overrides: Any) -> Path:
    return default_writer().write_json(value, options, **overrides)


def write_csv(rows: Any, options: Any = None, **overrides: Any) -> Path:
    return default_writer().write_csv(rows, options, **overrides)


def write_with_pattern(
    content: str | bytes, pattern: str, options: Any = None, **overrides: Any
) -> Path:
    return default_writer().write_with_pattern(content, pattern, options, **overrides)


def copy(
    source: str | os.PathLike[str], extension: str = "", options: Any = None, **overrides: Any
) -> Path:
    return default_writer().copy(source, extension, options, **overrides)


def mkdtemp(options: Any = None, **overrides: Any) -> Path:
    return default_writer().mkdtemp(options, **overrides)


def cleanup(path: str | os.PathLike[str]) -> bool:
    return default_writer().cleanup(path)


def cleanup_all() -> int:
    return default_writer().cleanup_all()


def shutdown() -> int:
    return default_writer().shutdown()


def list_tracked() -> list[Path]:
    return default_writer().list_tracked()


def is_tracked(path: str | os.PathLike[str]) -> bool:
    return default_writer().is_tracked(path)


def exclude(path: str | os.PathLike[str]) -> None:
    default_writer().exclude(path)
