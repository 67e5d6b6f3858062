# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reconcile git hook symlinks between a source and a target directory."""

from __future__ import annotations

import contextlib
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .checksum import same_content
from .models import HookAction, HookEvent, SyncResult
from .registry import HookNameRegistry, default_registry
from .reporter import ConsoleReporter, HookReporter

SAMPLE_SUFFIX: Final[str] = ".sample"
BACKUP_SUFFIX: Final[str] = ".bk"
STAGING_SUFFIX: Final[str] = ".hooksync-tmp"


@dataclass(frozen=True, slots=True)
class HookCandidate:
    """Source file whose name matches a registered hook."""

    name: str
    source: Path


@dataclass(slots=True)
class _RunContext:
    """Settings and accumulated outcome of a single synchronizer call."""

    target_dir: Path
    is_update: bool
    dry_run: bool
    result: SyncResult


@dataclass(slots=True)
class HookSynchronizer:
    """Link recognised hook scripts into a hooks directory and remove them again.

    Every call lists the source directory once and handles each candidate in
    isolation: a filesystem error on one hook is recorded as a ``FAILED``
    event and reported as a warning, and the remaining hooks are still
    processed.
    """

    registry: HookNameRegistry = field(default_factory=default_registry)
    reporter: HookReporter = field(default_factory=ConsoleReporter)

    def candidates(self, source_dir: Path) -> list[HookCandidate]:
        """Return files in ``source_dir`` whose names are registered hooks.

        Args:
            source_dir: Directory shipping hook scripts.

        Returns:
            list[HookCandidate]: Candidates sorted by name.

        Raises:
            OSError: If ``source_dir`` cannot be listed.
        """

        entries = sorted(source_dir.iterdir(), key=lambda entry: entry.name)
        return [
            HookCandidate(name=entry.name, source=entry)
            for entry in entries
            if self.registry.contains(entry.name) and entry.is_file()
        ]

    def reconcile(
        self,
        source_dir: Path,
        target_dir: Path,
        *,
        is_update: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """Bring ``target_dir`` in line with the hooks shipped in ``source_dir``.

        For each candidate an existing ``<name>.sample`` is first moved aside
        to ``<name>.sample.bk``. An existing hook is then left alone on
        install, or replaced on update when its content differs from the
        source. Missing hooks are linked.

        Args:
            source_dir: Directory shipping hook scripts.
            target_dir: Existing git hooks directory.
            is_update: Replace hooks whose content differs from the source.
            dry_run: Report the planned actions without touching the filesystem.

        Returns:
            SyncResult: Events describing every action taken or attempted.

        Raises:
            OSError: If ``source_dir`` cannot be listed.
        """

        context = _RunContext(
            target_dir=target_dir,
            is_update=is_update,
            dry_run=dry_run,
            result=SyncResult(dry_run=dry_run),
        )
        for candidate in self.candidates(source_dir):
            try:
                self._reconcile_one(candidate, context)
            except OSError as exc:
                self._record_failure(candidate.name, target_dir / candidate.name, "install", exc, context)
        return context.result

    def remove(self, source_dir: Path, target_dir: Path, *, dry_run: bool = False) -> SyncResult:
        """Delete the hooks in ``target_dir`` that ``source_dir`` provides.

        Hooks absent from ``target_dir`` are skipped silently. Sample files and
        their backups are left as they are.

        Args:
            source_dir: Directory shipping hook scripts.
            target_dir: Git hooks directory to clean.
            dry_run: Report the planned removals without deleting anything.

        Returns:
            SyncResult: ``REMOVED`` events plus any failures.

        Raises:
            OSError: If ``source_dir`` cannot be listed.
        """

        context = _RunContext(
            target_dir=target_dir,
            is_update=False,
            dry_run=dry_run,
            result=SyncResult(dry_run=dry_run),
        )
        for candidate in self.candidates(source_dir):
            destination = target_dir / candidate.name
            if not _occupied(destination):
                continue
            self.reporter.info(f"Removing git hook {candidate.name}")
            if not dry_run:
                try:
                    destination.unlink()
                except OSError as exc:
                    self._record_failure(candidate.name, destination, "remove", exc, context)
                    continue
            context.result.record(HookEvent(candidate.name, HookAction.REMOVED, destination))
        return context.result

    def _reconcile_one(self, candidate: HookCandidate, context: _RunContext) -> None:
        name = candidate.name
        destination = context.target_dir / name
        self._displace_sample(name, destination, context)

        action = HookAction.INSTALLED
        if destination.exists():
            if not context.is_update:
                self.reporter.info(f"Found already existing {name} git hook. Doing nothing.")
                context.result.record(HookEvent(name, HookAction.SKIPPED_EXISTS, destination))
                return
            if same_content(candidate.source, destination):
                self.reporter.info(f"Git hook {name} is up to date")
                context.result.record(HookEvent(name, HookAction.SKIPPED_IDENTICAL, destination))
                return
            action = HookAction.UPDATED

        verb = "Updating" if action is HookAction.UPDATED else "Installing"
        self.reporter.info(f"{verb} git hook {name}")
        if not context.dry_run:
            _link(candidate.source, destination)
            _relax_permissions(destination)
        context.result.record(HookEvent(name, action, destination))

    def _displace_sample(self, name: str, destination: Path, context: _RunContext) -> None:
        """Move ``<name>.sample`` to ``<name>.sample.bk`` unless a backup exists."""

        sample = destination.with_name(destination.name + SAMPLE_SUFFIX)
        if not sample.exists():
            return
        backup = sample.with_name(sample.name + BACKUP_SUFFIX)
        if _occupied(backup):
            self.reporter.info(f"Keeping {sample.name}: {backup.name} already exists")
            context.result.record(HookEvent(name, HookAction.SAMPLE_KEPT, sample))
            return
        self.reporter.info(f"Backing up {sample.name} to {backup.name}")
        if not context.dry_run:
            try:
                sample.rename(backup)
            except OSError as exc:
                self._record_failure(name, sample, "back up sample for", exc, context)
                return
        context.result.record(HookEvent(name, HookAction.SAMPLE_BACKED_UP, backup))

    def _record_failure(
        self,
        name: str,
        path: Path,
        operation: str,
        exc: OSError,
        context: _RunContext,
    ) -> None:
        self.reporter.warn(f"Failed to {operation} git hook {name}: {exc}")
        context.result.record(HookEvent(name, HookAction.FAILED, path, detail=operation, error=exc))


def _occupied(path: Path) -> bool:
    """Return whether ``path`` exists, counting dangling symlinks."""

    return path.is_symlink() or path.exists()


def _link_target(source: Path, directory: Path) -> Path:
    """Return the path a link in ``directory`` should store to reach ``source``.

    A relative path is preferred so the hooks keep working when the project
    tree is moved; an absolute one is used when no relative path exists.
    """

    absolute = source.parent.resolve() / source.name
    try:
        return Path(os.path.relpath(absolute, directory.resolve()))
    except ValueError:
        return absolute


def _link(source: Path, destination: Path) -> None:
    """Point ``destination`` at ``source``, replacing any existing entry atomically."""

    target = _link_target(source, destination.parent)
    if not _occupied(destination):
        destination.symlink_to(target)
        return
    staging = destination.with_name(f".{destination.name}{STAGING_SUFFIX}")
    staging.unlink(missing_ok=True)
    staging.symlink_to(target)
    try:
        os.replace(staging, destination)
    except OSError:
        staging.unlink(missing_ok=True)
        raise


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _relax_permissions(path: Path) -> None:
    """Make ``path`` executable for everyone the umask allows; errors are ignored.

    ``chmod`` follows the link, so the mode change lands on the source script.
    """

    with contextlib.suppress(OSError, NotImplementedError):
        path.chmod(0o777 & ~_current_umask())


def reconcile_hooks(
    source_dir: Path,
    target_dir: Path,
    *,
    is_update: bool = False,
    dry_run: bool = False,
    reporter: HookReporter | None = None,
) -> SyncResult:
    """Reconcile hooks with the default registry.

    Args:
        source_dir: Directory shipping hook scripts.
        target_dir: Existing git hooks directory.
        is_update: Replace hooks whose content differs from the source.
        dry_run: Report the planned actions without touching the filesystem.
        reporter: Optional sink for progress lines; defaults to the console.

    Returns:
        SyncResult: Events describing every action taken or attempted.
    """

    synchronizer = HookSynchronizer(reporter=reporter or ConsoleReporter())
    return synchronizer.reconcile(source_dir, target_dir, is_update=is_update, dry_run=dry_run)


def remove_hooks(
    source_dir: Path,
    target_dir: Path,
    *,
    dry_run: bool = False,
    reporter: HookReporter | None = None,
) -> SyncResult:
    """Remove hooks provided by ``source_dir`` using the default registry."""

    synchronizer = HookSynchronizer(reporter=reporter or ConsoleReporter())
    return synchronizer.remove(source_dir, target_dir, dry_run=dry_run)


__all__ = [
    "BACKUP_SUFFIX",
    "SAMPLE_SUFFIX",
    "HookCandidate",
    "HookSynchronizer",
    "reconcile_hooks",
    "remove_hooks",
]
