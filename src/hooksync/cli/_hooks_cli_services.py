# SPDX-License-Identifier: MIT
"""Helper services used by the git hooks CLI commands."""

from __future__ import annotations

from ..config import ConfigError, HookSyncConfig, load_config
from ..hooks import GitHooksInstaller, LifecycleEvent, SyncResult, dispatch
from ._hooks_cli_models import HookCLIOptions
from .shared import CLIError, CLILogger


def load_cli_config(options: HookCLIOptions) -> HookSyncConfig:
    """Load the project configuration and apply CLI overrides.

    Args:
        options: Normalized CLI options.

    Returns:
        HookSyncConfig: Configuration with ``--hooks-dir`` applied.

    Raises:
        CLIError: Raised when ``pyproject.toml`` holds invalid settings.
    """

    try:
        config = load_config(options.root)
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc
    if options.hooks_dir is not None:
        config = config.model_copy(update={"hooks_dir": options.hooks_dir})
    return config


def perform_transition(
    options: HookCLIOptions,
    config: HookSyncConfig,
    event: LifecycleEvent,
    *,
    logger: CLILogger,
) -> SyncResult:
    """Run the lifecycle ``event`` for the provided options.

    Args:
        options: Normalized CLI options containing paths and runtime flags.
        config: Project configuration resolved by :func:`load_cli_config`.
        event: Lifecycle transition to perform.
        logger: Logger receiving progress lines.

    Returns:
        SyncResult: The result reported by the installer.
    """

    installer = GitHooksInstaller(
        project_root=options.root,
        config=config,
        reporter=logger,
        verbose=options.verbose,
        dry_run=options.dry_run,
    )
    logger.debug(f"event={event.value} git_dir={installer.git_dir} hooks_dir={installer.hooks_dir}")
    return dispatch(installer, event, options.source)


def emit_sync_summary(result: SyncResult, event: LifecycleEvent, *, logger: CLILogger) -> None:
    """Emit a summary after a lifecycle transition.

    Args:
        result: The result from :func:`perform_transition`.
        event: Lifecycle transition that produced ``result``.
        logger: Logger used to display the summary.
    """

    logger.section(f"git hooks {event.value}")
    prefix = "Dry run complete: would have " if result.dry_run else ""
    if event is LifecycleEvent.UNINSTALL:
        logger.ok(f"{prefix}{'removed' if prefix else 'Removed'} {len(result.removed)} hooks")
    else:
        linked = len(result.installed)
        skipped = len(result.skipped)
        logger.ok(f"{prefix}{'linked' if prefix else 'Linked'} {linked} hooks, {skipped} left unchanged")

    if result.backups:
        backup_paths = ", ".join(str(path) for path in result.backups)
        logger.warn(f"Backed up sample hooks: {backup_paths}")
    if result.failures:
        names = ", ".join(dict.fromkeys(failure.name for failure in result.failures))
        logger.fail(f"{len(result.failures)} hook operations failed: {names}")


def exit_code_for(result: SyncResult) -> int:
    """Return ``1`` when every processed hook failed, otherwise ``0``."""

    return 1 if result.all_failed else 0


__all__ = [
    "emit_sync_summary",
    "exit_code_for",
    "load_cli_config",
    "perform_transition",
]
