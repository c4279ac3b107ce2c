"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from tempwrite import TempWriter, reset_default_writer
from tests.test_doubles.lifecycle_spy import LifecycleSpy


@pytest.fixture
def temp_dir() -> Path:
    """Temporary directory for filesystem-based tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def lifecycle() -> LifecycleSpy:
    """Lifecycle manager that records installation without touching the process."""
    return LifecycleSpy()


@pytest.fixture
def writer(temp_dir: Path, lifecycle: LifecycleSpy) -> TempWriter:
    """Writer whose termination hooks are never really installed."""
    w = TempWriter(lifecycle=lifecycle)
    lifecycle.bind(w.cleaner.cleanup_all)
    with w:
        yield w


@pytest.fixture
def default_writer_reset():
    """Tear down the module-level default writer after the test."""
    reset_default_writer()
    yield
    reset_default_writer()
