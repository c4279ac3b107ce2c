"""tempwrite - synchronous temporary files with guaranteed cleanup."""

__version__ = "0.1.0"

from tempwrite.api import (
    cleanup,
    cleanup_all,
    copy,
    default_writer,
    exclude,
    is_tracked,
    list_tracked,
    mkdtemp,
    reset_default_writer,
    shutdown,
    write,
    write_csv,
    write_json,
    write_with_pattern,
)
from tempwrite.core import (
    CsvOptions,
    DirOptions,
    LifecycleManager,
    ResourceRegistry,
    TempWriter,
    WriteOptions,
)
from tempwrite.errors import (
    InvalidArgument,
    InvalidFormat,
    NotFound,
    TempWriteError,
    WriteFailure,
)

__all__ = [
    "CsvOptions",
    "DirOptions",
    "InvalidArgument",
    "InvalidFormat",
    "LifecycleManager",
    "NotFound",
    "ResourceRegistry",
    "TempWriteError",
    "TempWriter",
    "WriteFailure",
    "WriteOptions",
    "cleanup",
    "cleanup_all",
    "copy",
    "default_writer",
    "exclude",
    "is_tracked",
    "list_tracked",
    "mkdtemp",
    "reset_default_writer",
    "shutdown",
    "write",
    "write_csv",
    "write_json",
    "write_with_pattern",
]
