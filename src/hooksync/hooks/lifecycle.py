# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Package lifecycle adapter installing, updating and removing git hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from hooksync.config import HookSyncConfig

from .models import SyncResult
from .registry import HookNameRegistry, default_registry
from .reporter import ConsoleReporter, HookReporter
from .synchronizer import HookSynchronizer


class LifecycleEvent(str, Enum):
    """Enumerate package lifecycle transitions that touch hooks."""

    INSTALL = "install"
    UPDATE = "update"
    UNINSTALL = "uninstall"


@runtime_checkable
class HookLifecycle(Protocol):
    """Capability interface a plugin host drives on package transitions."""

    def install(self, source_dir: Path) -> SyncResult:
        """Link hooks shipped in ``source_dir`` after the package is installed."""

    def update(self, source_dir: Path) -> SyncResult:
        """Refresh hooks shipped in ``source_dir`` after the package is updated."""

    def uninstall(self, source_dir: Path) -> SyncResult:
        """Remove hooks shipped in ``source_dir`` before the package is removed."""


@dataclass(slots=True)
class GitHooksInstaller:
    """Drive :class:`HookSynchronizer` against the git repository of a project.

    Missing prerequisites (no git directory, no hook source directory) are
    reported as warnings and produce an empty result rather than an error.
    """

    project_root: Path
    config: HookSyncConfig = field(default_factory=HookSyncConfig)
    reporter: HookReporter = field(default_factory=ConsoleReporter)
    registry: HookNameRegistry = field(default_factory=default_registry)
    verbose: bool = False
    dry_run: bool = False

    @property
    def git_dir(self) -> Path:
        return self.config.git_dir(self.project_root)

    @property
    def hooks_dir(self) -> Path:
        return self.config.hooks_path(self.project_root)

    def install(self, source_dir: Path) -> SyncResult:
        return self._link_hooks("installation", "Installing", source_dir, is_update=False)

    def update(self, source_dir: Path) -> SyncResult:
        return self._link_hooks("update", "Updating", source_dir, is_update=True)

    def uninstall(self, source_dir: Path) -> SyncResult:
        if not self._ready("removal", source_dir) or not self.hooks_dir.is_dir():
            return SyncResult(dry_run=self.dry_run)
        self._announce("Uninstalling", source_dir)
        try:
            return self._sync().remove(source_dir, self.hooks_dir, dry_run=self.dry_run)
        except OSError as exc:
            return self._skipped("removal", exc)

    def _link_hooks(self, operation: str, verb: str, source_dir: Path, *, is_update: bool) -> SyncResult:
        """Reconcile hooks, turning directory-level filesystem errors into a skip."""

        if not self._ready(operation, source_dir):
            return SyncResult(dry_run=self.dry_run)
        self._announce(verb, source_dir)
        try:
            self._ensure_hooks_dir()
            return self._sync().reconcile(
                source_dir,
                self.hooks_dir,
                is_update=is_update,
                dry_run=self.dry_run,
            )
        except OSError as exc:
            return self._skipped(operation, exc)

    def _skipped(self, operation: str, exc: OSError) -> SyncResult:
        self.reporter.warn(f"Skipped {operation} of git hooks: {exc}")
        return SyncResult(dry_run=self.dry_run)

    def _sync(self) -> HookSynchronizer:
        return HookSynchronizer(registry=self.registry, reporter=self.reporter)

    def _ready(self, operation: str, source_dir: Path) -> bool:
        """Return whether the git directory and ``source_dir`` are both present."""

        if not self.git_dir.is_dir():
            self.reporter.warn(
                f"Skipped {operation} of git hooks: no git repository found at {self.git_dir}",
            )
            return False
        if not source_dir.is_dir():
            self.reporter.warn(
                f"Skipped {operation} of git hooks: source directory {source_dir} does not exist",
            )
            return False
        return True

    def _announce(self, verb: str, source_dir: Path) -> None:
        if self.verbose:
            self.reporter.info(f"{verb} git hooks from {source_dir} into {self.hooks_dir}")

    def _ensure_hooks_dir(self) -> None:
        if not self.dry_run:
            self.hooks_dir.mkdir(parents=True, exist_ok=True)


def dispatch(lifecycle: HookLifecycle, event: LifecycleEvent | str, source_dir: Path) -> SyncResult:
    """Invoke the ``lifecycle`` handler matching ``event``.

    Args:
        lifecycle: Object implementing :class:`HookLifecycle`.
        event: Lifecycle transition, as an enum member or its value.
        source_dir: Directory shipping the package's hook scripts.

    Returns:
        SyncResult: Result returned by the handler.

    Raises:
        ValueError: If ``event`` does not name a lifecycle transition.
    """

    resolved = LifecycleEvent(event)
    if resolved is LifecycleEvent.INSTALL:
        return lifecycle.install(source_dir)
    if resolved is LifecycleEvent.UPDATE:
        return lifecycle.update(source_dir)
    return lifecycle.uninstall(source_dir)


__all__ = ["GitHooksInstaller", "HookLifecycle", "LifecycleEvent", "dispatch"]
