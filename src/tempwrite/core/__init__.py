"""Registry, cleanup and lifecycle components."""

from tempwrite.core.cleanup import CleanupEngine
from tempwrite.core.identifiers import Fragments, IdentifierGenerator
from tempwrite.core.lifecycle import LifecycleManager
from tempwrite.core.options import CsvOptions, DirOptions, WriteOptions
from tempwrite.core.registry import ResourceRegistry
from tempwrite.core.writer import TempWriter, normalize_extension

__all__ = [
    "CleanupEngine",
    "CsvOptions",
    "DirOptions",
    "Fragments",
    "IdentifierGenerator",
    "LifecycleManager",
    "ResourceRegistry",
    "TempWriter",
    "WriteOptions",
    "normalize_extension",
]
