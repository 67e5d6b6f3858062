# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI commands installing, updating and removing git hooks."""

from __future__ import annotations

from pathlib import Path

import typer

from ..hooks import LifecycleEvent, default_registry
from ._hooks_cli_models import (
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    HOOKS_DIR_OPTION,
    ROOT_OPTION,
    SOURCE_OPTION,
    VERBOSE_OPTION,
    HookCLIOptions,
)
from ._hooks_cli_services import emit_sync_summary, exit_code_for, load_cli_config, perform_transition
from .shared import CLIError, build_cli_logger


def _run(event: LifecycleEvent, options: HookCLIOptions) -> None:
    """Execute ``event`` and exit the Typer application with its status.

    Raises:
        typer.Exit: Always raised to terminate the command with an exit status.
    """

    try:
        config = load_cli_config(options)
    except CLIError as exc:
        build_cli_logger(emoji=options.emoji is not False).fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    emoji = config.emoji if options.emoji is None else options.emoji
    logger = build_cli_logger(emoji=emoji, debug=options.verbose)
    result = perform_transition(options, config, event, logger=logger)

    emit_sync_summary(result, event, logger=logger)
    raise typer.Exit(code=exit_code_for(result))


def install(
    source: SOURCE_OPTION,
    root: ROOT_OPTION = Path("."),
    hooks_dir: HOOKS_DIR_OPTION = None,
    dry_run: DRY_RUN_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = None,
) -> None:
    """Link hooks from SOURCE into the repository, keeping existing hooks."""

    options = HookCLIOptions.from_cli(source, root, hooks_dir, dry_run=dry_run, verbose=verbose, emoji=emoji)
    _run(LifecycleEvent.INSTALL, options)


def update(
    source: SOURCE_OPTION,
    root: ROOT_OPTION = Path("."),
    hooks_dir: HOOKS_DIR_OPTION = None,
    dry_run: DRY_RUN_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = None,
) -> None:
    """Link hooks from SOURCE, replacing hooks whose content changed."""

    options = HookCLIOptions.from_cli(source, root, hooks_dir, dry_run=dry_run, verbose=verbose, emoji=emoji)
    _run(LifecycleEvent.UPDATE, options)


def uninstall(
    source: SOURCE_OPTION,
    root: ROOT_OPTION = Path("."),
    hooks_dir: HOOKS_DIR_OPTION = None,
    dry_run: DRY_RUN_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = None,
) -> None:
    """Remove the hooks SOURCE provides from the repository."""

    options = HookCLIOptions.from_cli(source, root, hooks_dir, dry_run=dry_run, verbose=verbose, emoji=emoji)
    _run(LifecycleEvent.UNINSTALL, options)


def list_hooks() -> None:
    """Print the hook names hooksync recognises."""

    for name in default_registry():
        typer.echo(name)


def register(app: typer.Typer) -> None:
    """Register the hook lifecycle commands on ``app``.

    Args:
        app: Typer application receiving the commands.
    """

    app.command(name="install")(install)
    app.command(name="update")(update)
    app.command(name="uninstall")(uninstall)
    app.command(name="list")(list_hooks)


__all__ = ["install", "list_hooks", "register", "uninstall", "update"]
