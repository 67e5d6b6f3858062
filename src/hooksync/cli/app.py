# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .hooks import register

app = typer.Typer(
    name="hooksync",
    help="Link git hooks shipped by a package into a repository.",
    no_args_is_help=True,
    add_completion=False,
)
register(app)

__all__ = ["app"]
