# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for hook reconciliation and removal."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from hooksync.hooks import (
    HookAction,
    HookNameRegistry,
    HookSynchronizer,
    NullReporter,
    reconcile_hooks,
    remove_hooks,
)
from hooksync.hooks.checksum import file_digest

if TYPE_CHECKING:
    from conftest import RecordingReporter


def _snapshot(directory: Path) -> dict[str, tuple[bool, str]]:
    state: dict[str, tuple[bool, str]] = {}
    for entry in sorted(directory.iterdir()):
        link = os.readlink(entry) if entry.is_symlink() else entry.read_text(encoding="utf-8")
        state[entry.name] = (entry.is_symlink(), link)
    return state


def test_reconcile_links_registered_hooks(source_dir: Path, target_dir: Path, reporter: RecordingReporter) -> None:
    result = HookSynchronizer(reporter=reporter).reconcile(source_dir, target_dir)

    assert sorted(path.name for path in result.installed) == ["pre-commit", "pre-push"]
    for name in ("pre-commit", "pre-push"):
        destination = target_dir / name
        assert destination.is_symlink()
        assert destination.resolve() == (source_dir / name).resolve()
    assert "Installing git hook pre-commit" in reporter.lines
    assert not result.failures


def test_reconcile_uses_relative_links(source_dir: Path, target_dir: Path) -> None:
    HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    link = Path(os.readlink(target_dir / "pre-commit"))
    assert not link.is_absolute()
    assert (target_dir / link).resolve() == (source_dir / "pre-commit").resolve()


def test_reconcile_ignores_unregistered_files(source_dir: Path, target_dir: Path, reporter: RecordingReporter) -> None:
    for is_update in (False, True):
        result = HookSynchronizer(reporter=reporter).reconcile(source_dir, target_dir, is_update=is_update)
        assert "README.md" not in result.hook_names

    assert not (target_dir / "README.md").exists()
    assert not any("README.md" in line for line in reporter.lines + reporter.warnings)


def test_reconcile_ignores_directories_named_like_hooks(source_dir: Path, target_dir: Path) -> None:
    (source_dir / "post-merge").mkdir()

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert "post-merge" not in result.hook_names
    assert not (target_dir / "post-merge").exists()


def test_install_keeps_existing_hook_untouched(source_dir: Path, target_dir: Path, reporter: RecordingReporter) -> None:
    existing = target_dir / "pre-commit"
    existing.write_text("#!/bin/sh\nmy own checks\n", encoding="utf-8")
    before = existing.read_bytes()

    result = HookSynchronizer(reporter=reporter).reconcile(source_dir, target_dir)

    assert not existing.is_symlink()
    assert existing.read_bytes() == before
    skipped = [event for event in result.events if event.action is HookAction.SKIPPED_EXISTS]
    assert [event.name for event in skipped] == ["pre-commit"]
    assert "Found already existing pre-commit git hook. Doing nothing." in reporter.lines
    assert (target_dir / "pre-push").is_symlink()


def test_sample_is_moved_to_backup(source_dir: Path, target_dir: Path) -> None:
    sample = target_dir / "pre-commit.sample"
    sample.write_text("sample body\n", encoding="utf-8")

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    backup = target_dir / "pre-commit.sample.bk"
    assert not sample.exists()
    assert backup.read_text(encoding="utf-8") == "sample body\n"
    assert (target_dir / "pre-commit").resolve() == (source_dir / "pre-commit").resolve()
    assert result.backups == [backup]


def test_existing_backup_is_never_overwritten(source_dir: Path, target_dir: Path) -> None:
    sample = target_dir / "pre-commit.sample"
    sample.write_text("new sample\n", encoding="utf-8")
    backup = target_dir / "pre-commit.sample.bk"
    backup.write_text("original sample\n", encoding="utf-8")

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert backup.read_text(encoding="utf-8") == "original sample\n"
    assert sample.read_text(encoding="utf-8") == "new sample\n"
    kept = [event.name for event in result.events if event.action is HookAction.SAMPLE_KEPT]
    assert kept == ["pre-commit"]
    assert (target_dir / "pre-commit").is_symlink()


def test_sample_is_displaced_even_when_hook_exists(source_dir: Path, target_dir: Path) -> None:
    (target_dir / "pre-push").write_text("custom\n", encoding="utf-8")
    (target_dir / "pre-push.sample").write_text("sample\n", encoding="utf-8")

    HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert (target_dir / "pre-push.sample.bk").exists()
    assert (target_dir / "pre-push").read_text(encoding="utf-8") == "custom\n"


def test_update_skips_identical_content(source_dir: Path, target_dir: Path) -> None:
    synchronizer = HookSynchronizer(reporter=NullReporter())
    synchronizer.reconcile(source_dir, target_dir)
    before = _snapshot(target_dir)

    result = synchronizer.reconcile(source_dir, target_dir, is_update=True)

    assert _snapshot(target_dir) == before
    assert {event.action for event in result.events} == {HookAction.SKIPPED_IDENTICAL}
    assert not result.installed


def test_update_skips_identical_regular_file(source_dir: Path, target_dir: Path) -> None:
    copy = target_dir / "pre-commit"
    copy.write_bytes((source_dir / "pre-commit").read_bytes())

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir, is_update=True)

    assert not copy.is_symlink()
    actions = {event.name: event.action for event in result.events}
    assert actions["pre-commit"] is HookAction.SKIPPED_IDENTICAL


def test_update_replaces_changed_hook(source_dir: Path, target_dir: Path, reporter: RecordingReporter) -> None:
    stale = target_dir / "pre-push"
    stale.write_text("#!/bin/sh\nold version\n", encoding="utf-8")

    result = HookSynchronizer(reporter=reporter).reconcile(source_dir, target_dir, is_update=True)

    assert stale.is_symlink()
    assert stale.resolve() == (source_dir / "pre-push").resolve()
    assert file_digest(stale) == file_digest(source_dir / "pre-push")
    updated = [event.name for event in result.events if event.action is HookAction.UPDATED]
    assert updated == ["pre-push"]
    assert "Updating git hook pre-push" in reporter.lines
    assert not any(entry.name.endswith(".hooksync-tmp") for entry in target_dir.iterdir())


def test_update_follows_changed_source(source_dir: Path, target_dir: Path, tmp_path: Path) -> None:
    synchronizer = HookSynchronizer(reporter=NullReporter())
    synchronizer.reconcile(source_dir, target_dir)

    release = tmp_path / "release-2" / "hooks"
    release.mkdir(parents=True)
    (release / "pre-commit").write_text("#!/bin/sh\necho v2\n", encoding="utf-8")

    result = synchronizer.reconcile(release, target_dir, is_update=True)

    assert (target_dir / "pre-commit").resolve() == (release / "pre-commit").resolve()
    assert [path.name for path in result.installed] == ["pre-commit"]


def test_dangling_link_is_replaced(source_dir: Path, target_dir: Path) -> None:
    (target_dir / "pre-commit").symlink_to(target_dir / "missing-script")

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert (target_dir / "pre-commit").resolve() == (source_dir / "pre-commit").resolve()
    assert "pre-commit" in [path.name for path in result.installed]


def test_link_failure_is_isolated(
    source_dir: Path,
    target_dir: Path,
    reporter: RecordingReporter,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    original = Path.symlink_to

    def flaky_symlink(self: Path, target: Path, target_is_directory: bool = False) -> None:
        if self.name == "pre-commit":
            raise PermissionError("denied")
        original(self, target, target_is_directory)

    monkeypatch.setattr(Path, "symlink_to", flaky_symlink)

    result = HookSynchronizer(reporter=reporter).reconcile(source_dir, target_dir)

    assert [event.name for event in result.failures] == ["pre-commit"]
    assert isinstance(result.failures[0].error, PermissionError)
    assert (target_dir / "pre-push").is_symlink()
    assert not result.all_failed
    assert any("pre-commit" in warning for warning in reporter.warnings)


def test_all_failed_when_every_link_fails(
    source_dir: Path,
    target_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_symlink(self: Path, target: Path, target_is_directory: bool = False) -> None:
        raise OSError("read-only file system")

    monkeypatch.setattr(Path, "symlink_to", broken_symlink)

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert len(result.failures) == 2
    assert result.all_failed


def test_sample_rename_failure_does_not_stop_linking(
    source_dir: Path,
    target_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (target_dir / "pre-commit.sample").write_text("sample\n", encoding="utf-8")

    def refuse_rename(self: Path, target: Path) -> Path:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "rename", refuse_rename)

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert (target_dir / "pre-commit.sample").exists()
    assert [event.name for event in result.failures] == ["pre-commit"]
    assert (target_dir / "pre-commit").is_symlink()
    assert not result.all_failed


def test_chmod_failure_is_ignored(source_dir: Path, target_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse_chmod(self: Path, mode: int, *, follow_symlinks: bool = True) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "chmod", refuse_chmod)

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert not result.failures
    assert len(result.installed) == 2


def test_linked_hook_is_executable(source_dir: Path, target_dir: Path) -> None:
    mask = os.umask(0o022)
    try:
        HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir)
    finally:
        os.umask(mask)

    assert os.access(target_dir / "pre-commit", os.X_OK)


def test_dry_run_leaves_filesystem_untouched(source_dir: Path, target_dir: Path) -> None:
    (target_dir / "pre-commit.sample").write_text("sample\n", encoding="utf-8")
    before = _snapshot(target_dir)

    result = HookSynchronizer(reporter=NullReporter()).reconcile(source_dir, target_dir, dry_run=True)

    assert _snapshot(target_dir) == before
    assert result.dry_run
    assert len(result.installed) == 2
    assert [path.name for path in result.backups] == ["pre-commit.sample.bk"]


def test_custom_registry_limits_candidates(source_dir: Path, target_dir: Path) -> None:
    registry = HookNameRegistry.from_names(["pre-push"])

    result = HookSynchronizer(registry=registry, reporter=NullReporter()).reconcile(source_dir, target_dir)

    assert result.hook_names == ["pre-push"]
    assert not (target_dir / "pre-commit").exists()


def test_missing_source_directory_raises(tmp_path: Path, target_dir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HookSynchronizer(reporter=NullReporter()).reconcile(tmp_path / "absent", target_dir)


def test_remove_deletes_provided_hooks(source_dir: Path, target_dir: Path, reporter: RecordingReporter) -> None:
    (target_dir / "pre-commit.sample.bk").write_text("sample\n", encoding="utf-8")
    (target_dir / "post-merge").write_text("unrelated\n", encoding="utf-8")
    synchronizer = HookSynchronizer(reporter=reporter)
    synchronizer.reconcile(source_dir, target_dir)

    result = synchronizer.remove(source_dir, target_dir)

    assert sorted(path.name for path in result.removed) == ["pre-commit", "pre-push"]
    assert not (target_dir / "pre-commit").exists()
    assert not (target_dir / "pre-push").exists()
    assert (target_dir / "pre-commit.sample.bk").exists()
    assert not (target_dir / "pre-commit.sample").exists()
    assert (target_dir / "post-merge").exists()
    assert "Removing git hook pre-commit" in reporter.lines


def test_remove_is_idempotent(source_dir: Path, target_dir: Path) -> None:
    result = HookSynchronizer(reporter=NullReporter()).remove(source_dir, target_dir)

    assert result.events == []
    assert not result.all_failed


def test_remove_deletes_dangling_links(source_dir: Path, target_dir: Path) -> None:
    (target_dir / "pre-push").symlink_to(target_dir / "gone")

    result = HookSynchronizer(reporter=NullReporter()).remove(source_dir, target_dir)

    assert [path.name for path in result.removed] == ["pre-push"]
    assert not (target_dir / "pre-push").is_symlink()


def test_remove_dry_run_keeps_hooks(source_dir: Path, target_dir: Path) -> None:
    synchronizer = HookSynchronizer(reporter=NullReporter())
    synchronizer.reconcile(source_dir, target_dir)

    result = synchronizer.remove(source_dir, target_dir, dry_run=True)

    assert len(result.removed) == 2
    assert (target_dir / "pre-commit").is_symlink()


def test_module_helpers_use_default_registry(source_dir: Path, target_dir: Path, reporter: RecordingReporter) -> None:
    installed = reconcile_hooks(source_dir, target_dir, reporter=reporter)
    removed = remove_hooks(source_dir, target_dir, reporter=reporter)

    assert installed.hook_names == ["pre-commit", "pre-push"]
    assert removed.hook_names == ["pre-commit", "pre-push"]
    assert list(target_dir.iterdir()) == []


def test_remove_failure_is_isolated(
    source_dir: Path,
    target_dir: Path,
    reporter: RecordingReporter,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    synchronizer = HookSynchronizer(reporter=reporter)
    synchronizer.reconcile(source_dir, target_dir)
    original = Path.unlink

    def guarded_unlink(self: Path, missing_ok: bool = False) -> None:
        if self.name == "pre-commit":
            raise PermissionError("denied")
        original(self, missing_ok)

    monkeypatch.setattr(Path, "unlink", guarded_unlink)

    result = synchronizer.remove(source_dir, target_dir)

    assert [(event.name, event.action) for event in result.failures] == [("pre-commit", HookAction.FAILED)]
    assert isinstance(result.failures[0].error, PermissionError)
    assert [path.name for path in result.removed] == ["pre-push"]
    assert (target_dir / "pre-commit").is_symlink()
    assert not (target_dir / "pre-push").exists()
    assert not result.all_failed
    assert any("remove git hook pre-commit" in warning for warning in reporter.warnings)
