"""Behavior tests for the cleanup engine."""

from __future__ import annotations

import shutil
from pathlib import Path

from structlog.testing import capture_logs

from tempwrite.core.cleanup import CleanupEngine
from tempwrite.core.registry import ResourceRegistry


def _engine() -> CleanupEngine:
    return CleanupEngine(ResourceRegistry())


def test_cleanup_one_removes_file_and_untracks_it(temp_dir: Path):
    engine = _engine()
    target = temp_dir / "a.txt"
    target.write_text("x")
    engine.registry.register(target)

    assert engine.cleanup_one(target) is True
    assert not target.exists()
    assert target not in engine.registry


def test_cleanup_one_removes_directory_recursively(temp_dir: Path):
    engine = _engine()
    target = temp_dir / "tree"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "leaf.txt").write_text("x")
    engine.registry.register(target)

    assert engine.cleanup_one(str(target)) is True
    assert not target.exists()


def test_cleanup_one_missing_path_is_success():
    engine = _engine()

    assert engine.cleanup_one("/non/existent/file.txt") is True


def test_cleanup_one_twice_is_safe(temp_dir: Path):
    engine = _engine()
    target = temp_dir / "a.txt"
    target.write_text("x")

    assert engine.cleanup_one(target) is True
    assert engine.cleanup_one(target) is True


def test_cleanup_one_unlinks_symlink_without_following_it(temp_dir: Path):
    engine = _engine()
    real_dir = temp_dir / "real"
    real_dir.mkdir()
    (real_dir / "keep.txt").write_text("x")
    link = temp_dir / "link"
    link.symlink_to(real_dir, target_is_directory=True)

    assert engine.cleanup_one(link) is True
    assert not link.exists()
    assert (real_dir / "keep.txt").exists()


def test_cleanup_one_failure_is_logged_not_raised(temp_dir: Path, monkeypatch):
    engine = _engine()
    target = temp_dir / "stuck"
    target.mkdir()
    engine.registry.register(target)

    def refuse(path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(shutil, "rmtree", refuse)

    with capture_logs() as logs:
        result = engine.cleanup_one(target)

    assert result is False
    assert target.exists()
    assert target not in engine.registry
    assert logs[0]["event"] == "temp_cleanup_failed"
    assert logs[0]["log_level"] == "warning"
    assert logs[0]["path"] == str(target)


def test_cleanup_all_counts_successes_only(temp_dir: Path, monkeypatch):
    engine = _engine()
    good = temp_dir / "good.txt"
    good.write_text("x")
    stuck = temp_dir / "stuck"
    stuck.mkdir()
    engine.registry.register(good)
    engine.registry.register(stuck)
    engine.registry.register(temp_dir / "already-gone.txt")

    def refuse(path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(shutil, "rmtree", refuse)

    with capture_logs():
        removed = engine.cleanup_all()

    assert removed == 2
    assert not good.exists()
    assert engine.registry.list() == []


def test_cleanup_all_on_empty_registry_returns_zero():
    engine = _engine()

    assert engine.cleanup_all() == 0
    assert engine.cleanup_all() == 0


def test_cleanup_all_handles_directory_and_contained_file(temp_dir: Path):
    engine = _engine()
    folder = temp_dir / "folder"
    folder.mkdir()
    inner = folder / "inner.txt"
    inner.write_text("x")
    engine.registry.register(folder)
    engine.registry.register(inner)

    assert engine.cleanup_all() == 2
    assert not folder.exists()
