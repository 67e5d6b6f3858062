# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

HOOK_BODY = "#!/bin/sh\necho hook\n"


@dataclass
class RecordingReporter:
    """Collect reporter lines for assertions."""

    lines: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.lines.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Return a hook source directory shipping pre-commit, pre-push and a README."""

    source = tmp_path / "vendor" / "acme" / "hooks"
    source.mkdir(parents=True)
    for name in ("pre-commit", "pre-push"):
        (source / name).write_text(HOOK_BODY, encoding="utf-8")
    (source / "README.md").write_text("not a hook\n", encoding="utf-8")
    return source


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    hooks = tmp_path / ".git" / "hooks"
    hooks.mkdir(parents=True)
    return hooks
