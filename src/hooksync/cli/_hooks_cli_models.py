# SPDX-License-Identifier: MIT
"""Data structures for the git hooks CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

SOURCE_OPTION = Annotated[
    Path,
    typer.Option(
        "--source",
        "-s",
        help="Directory containing the hook scripts to link.",
        file_okay=False,
    ),
]
ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root holding pyproject.toml and the git repository."),
]
HOOKS_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--hooks-dir", help="Overrides the hooks directory."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Show actions without modifying files."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Report source and target directories."),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output (defaults to the project setting)."),
]


@dataclass(slots=True)
class HookCLIOptions:
    """Capture CLI options shared by the hook lifecycle commands."""

    source: Path
    root: Path
    hooks_dir: Path | None
    dry_run: bool
    verbose: bool
    emoji: bool | None

    @classmethod
    def from_cli(
        cls,
        source: Path,
        root: Path,
        hooks_dir: Path | None,
        *,
        dry_run: bool,
        verbose: bool,
        emoji: bool | None,
    ) -> HookCLIOptions:
        """Return options with every path made absolute."""

        return cls(
            source=source.resolve(),
            root=root.resolve(),
            hooks_dir=hooks_dir.resolve() if hooks_dir is not None else None,
            dry_run=dry_run,
            verbose=verbose,
            emoji=emoji,
        )


__all__ = [
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "HOOKS_DIR_OPTION",
    "ROOT_OPTION",
    "SOURCE_OPTION",
    "VERBOSE_OPTION",
    "HookCLIOptions",
]
