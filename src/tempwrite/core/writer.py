"""Creation of tracked temporary files and directories."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tempwrite.core.cleanup import CleanupEngine
from tempwrite.core.identifiers import IdentifierGenerator
from tempwrite.core.lifecycle import LifecycleManager
from tempwrite.core.options import CsvOptions, DirOptions, WriteOptions, resolve_options
from tempwrite.core.registry import ResourceRegistry
from tempwrite.errors import InvalidArgument, NotFound, WriteFailure
from tempwrite.formats import format_csv, format_json

if TYPE_CHECKING:
    from types import TracebackType


def normalize_extension(extension: Any) -> str:
    """Return ``extension`` with a leading dot, or ``""`` for no extension.

    Raises:
        InvalidArgument: If the extension is not a string or contains a path separator
    """
    if not isinstance(extension, str):
        raise InvalidArgument("Extension must be a string")
    if _has_separator(extension):
        raise InvalidArgument(f"Extension must not contain path separators: {extension!r}")
    if extension and not extension.startswith("."):
        return "." + extension
    return extension


def _coerce_content(content: Any) -> bytes:
    if content is None:
        raise InvalidArgument("Content cannot be None")
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    raise InvalidArgument(f"Content must be str or bytes, not {type(content).__name__}")


def _has_separator(name: str) -> bool:
    return os.sep in name or (os.altsep is not None and os.altsep in name)


class TempWriter:
    """Creates temporary files and directories and tracks them for cleanup.

    Each writer owns a registry (or shares one passed in), a cleanup engine
    and a lifecycle manager. Termination hooks are installed on the first
    tracked creation only, so a writer that never tracks anything leaves the
    process untouched.

    Options are given as a model, a dict, keyword overrides, or any mix::

        writer = TempWriter()
        path = writer.write("hello", "txt", prefix="greeting-")
        writer.write_csv([["a", "b"]], CsvOptions(delimiter=";"), cleanup=False)

    Used as a context manager, everything still tracked is removed on exit.
    """

    def __init__(
        self,
        *,
        registry: ResourceRegistry | None = None,
        identifiers: IdentifierGenerator | None = None,
        lifecycle: LifecycleManager | None = None,
        defaults: WriteOptions | None = None,
        dir_defaults: DirOptions | None = None,
    ) -> None:
        self.registry = registry if registry is not None else ResourceRegistry()
        self.cleaner = CleanupEngine(self.registry)
        self.lifecycle = (
            lifecycle if lifecycle is not None else LifecycleManager(self.cleaner.cleanup_all)
        )
        self.identifiers = identifiers if identifiers is not None else IdentifierGenerator()
        self.defaults = defaults
        self.dir_defaults = dir_defaults

    def __enter__(self) -> TempWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup_all()

    # Creation

    def write(
        self,
        content: str | bytes,
        extension: str = "",
        options: WriteOptions | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> Path:
        """Write content to a new temporary file.

        Args:
            content: Text (written as UTF-8) or bytes
            extension: File extension, with or without the leading dot
            options: Write options; keyword overrides take precedence

        Returns:
            Path of the created file

        Raises:
            InvalidArgument: If content, extension or options are invalid
            WriteFailure: If the directory or file cannot be created
        """
        data = _coerce_content(content)
        suffix = normalize_extension(extension)
        opts = resolve_options(WriteOptions, self.defaults, options, overrides)

        fragments = self.identifiers.generate()
        filename = f"{opts.prefix}{fragments.timestamp}-{fragments.random}{suffix}"
        return self._create_file(filename, data, opts)

    def write_json(
        self,
        value: Any,
        options: WriteOptions | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> Path:
        """Write a mapping, sequence or pydantic model as indented JSON."""
        return self.write(format_json(value), ".json", options, **overrides)

    def write_csv(
        self,
        rows: Any,
        options: CsvOptions | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> Path:
        """Write rows (sequences or mappings) as a fully quoted CSV file."""
        opts = resolve_options(CsvOptions, self.defaults, options, overrides)
        content = format_csv(rows, delimiter=opts.delimiter)
        return self.write(content, ".csv", opts.model_dump(exclude={"delimiter"}))

    def write_with_pattern(
        self,
        content: str | bytes,
        pattern: str,
        options: WriteOptions | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> Path:
        """Write content to a file named after ``pattern``.

        ``{random}``, ``{timestamp}`` and ``{time}`` are substituted wherever
        they occur; anything else in the pattern is kept verbatim. The
        ``prefix`` option does not apply here.

        Raises:
            InvalidArgument: If the pattern is empty or contains a path separator
            WriteFailure: If the file cannot be created (including when the
                resulting name already exists)
        """
        data = _coerce_content(content)
        if not isinstance(pattern, str) or not pattern:
            raise InvalidArgument("Pattern must be a non-empty string")
        if _has_separator(pattern):
            raise InvalidArgument(f"Pattern must not contain path separators: {pattern!r}")
        opts = resolve_options(WriteOptions, self.defaults, options, overrides)

        fragments = self.identifiers.generate()
        filename = (
            pattern.replace("{random}", fragments.random)
            .replace("{timestamp}", fragments.timestamp)
            .replace("{time}", fragments.timestamp)
        )
        return self._create_file(filename, data, opts)

    def copy(
        self,
        source: str | os.PathLike[str],
        extension: str = "",
        options: WriteOptions | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> Path:
        """Copy an existing file's bytes into a new temporary file.

        Without an explicit extension the source's own suffix is kept.

        Raises:
            NotFound: If the source does not exist
            WriteFailure: If the source cannot be read or the copy cannot be written
        """
        if not isinstance(extension, str):
            raise InvalidArgument("Extension must be a string")

        source_path = Path(source)
        if not source_path.exists():
            raise NotFound(f"Source file does not exist: {source_path}")

        try:
            data = source_path.read_bytes()
        except OSError as e:
            raise WriteFailure(f"Failed to read source file: {e}") from e

        return self.write(data, extension or source_path.suffix, options, **overrides)

    def mkdtemp(
        self,
        options: DirOptions | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> Path:
        """Create a new temporary directory.

        Returns:
            Path of the created directory

        Raises:
            InvalidArgument: If options are invalid
            WriteFailure: If the directory cannot be created
        """
        opts = resolve_options(DirOptions, self.dir_defaults, options, overrides)
        fragments = self.identifiers.generate()

        try:
            parent, created_parent = self._ensure_directory(opts.dir)
        except OSError as e:
            raise WriteFailure(f"Failed to create temporary directory: {e}") from e

        path = parent / f"{opts.prefix}{fragments.timestamp}-{fragments.random}"
        made = False
        try:
            path.mkdir(mode=opts.mode)
            made = True
            os.chmod(path, opts.mode)
        except OSError as e:
            if made:
                with contextlib.suppress(OSError):
                    path.rmdir()
            if created_parent:
                with contextlib.suppress(OSError):
                    parent.rmdir()
            raise WriteFailure(f"Failed to create temporary directory: {e}") from e

        if opts.cleanup:
            self._track(*([parent] if created_parent else []), path)

        return path

    # Tracking

    def cleanup(self, path: str | os.PathLike[str]) -> bool:
        """Delete one path (tracked or not) and stop tracking it."""
        return self.cleaner.cleanup_one(path)

    def cleanup_all(self) -> int:
        """Delete every tracked path, returning how many were removed."""
        return self.cleaner.cleanup_all()

    def shutdown(self) -> int:
        """Explicit end-of-life cleanup for hosts without exit hooks."""
        return self.lifecycle.shutdown()

    def list_tracked(self) -> list[Path]:
        return self.registry.list()

    def is_tracked(self, path: str | os.PathLike[str]) -> bool:
        return self.registry.contains(path)

    def exclude(self, path: str | os.PathLike[str]) -> None:
        """Stop tracking a path without deleting it."""
        self.registry.unregister(path)

    # Internals

    def _create_file(self, filename: str, data: bytes, opts: WriteOptions) -> Path:
        mode = opts.mode

        try:
            directory, created_dir = self._ensure_directory(opts.dir)
        except OSError as e:
            raise WriteFailure(f"Failed to write temporary file: {e}") from e

        path = directory / filename
        try:
            # "x" refuses to reuse an existing name
            with open(path, "xb", opener=lambda p, flags: os.open(p, flags, mode)) as f:
                f.write(data)
            os.chmod(path, mode)
        except OSError as e:
            if not isinstance(e, FileExistsError):
                with contextlib.suppress(OSError):
                    path.unlink()
            if created_dir:
                with contextlib.suppress(OSError):
                    directory.rmdir()
            raise WriteFailure(f"Failed to write temporary file: {e}") from e

        if opts.cleanup:
            self._track(*([directory] if created_dir else []), path)

        return path

    def _ensure_directory(self, requested: Path | None) -> tuple[Path, bool]:
        """Resolve the target directory to an absolute path, creating it if needed.

        Returns:
            The directory and whether this call created an explicitly requested one
        """
        if requested is None:
            directory = Path(tempfile.gettempdir())
            directory.mkdir(parents=True, exist_ok=True)
            return directory, False

        directory = requested.expanduser().absolute()
        existed = directory.exists()
        directory.mkdir(parents=True, exist_ok=True)
        return directory, not existed

    def _track(self, *paths: Path) -> None:
        self.lifecycle.ensure_installed()
        for path in paths:
            self.registry.register(path)

