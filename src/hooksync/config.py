# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and ``pyproject.toml`` loader for hooksync."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "hooksync"
GIT_DIR_NAME: Final[str] = ".git"
HOOKS_DIR_NAME: Final[str] = "hooks"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class HookSyncConfig(BaseModel):
    """Project-level settings controlling where hooks are installed.

    Attributes:
        git_root: Directory holding ``.git``, relative to the project root.
        hooks_dir: Explicit hooks directory overriding ``<git dir>/hooks``.
        emoji: Whether console output may include emoji glyphs.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=lambda name: name.replace("_", "-"),
    )

    git_root: Path = Field(default=Path("."))
    hooks_dir: Path | None = None
    emoji: bool = True

    def git_dir(self, project_root: Path) -> Path:
        """Return the git directory for ``project_root``."""

        return _anchor(self.git_root, project_root) / GIT_DIR_NAME

    def hooks_path(self, project_root: Path) -> Path:
        """Return the directory hooks should be linked into."""

        if self.hooks_dir is not None:
            return _anchor(self.hooks_dir, project_root)
        return self.git_dir(project_root) / HOOKS_DIR_NAME


def _anchor(path: Path, project_root: Path) -> Path:
    return path if path.is_absolute() else project_root / path


def config_from_mapping(data: Mapping[str, Any], *, source: str = "<mapping>") -> HookSyncConfig:
    """Validate ``data`` and return the resulting configuration.

    Args:
        data: Raw ``[tool.hooksync]`` table.
        source: Description of where ``data`` came from, used in errors.

    Returns:
        HookSyncConfig: Validated configuration.

    Raises:
        ConfigError: If the table contains unknown keys or invalid values.
    """

    try:
        return HookSyncConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(f"Invalid hooksync configuration in {source}: {exc}") from exc


def load_config(project_root: Path) -> HookSyncConfig:
    """Read ``[tool.hooksync]`` from ``pyproject.toml`` under ``project_root``.

    Missing files and missing sections yield the defaults.

    Args:
        project_root: Directory expected to contain ``pyproject.toml``.

    Returns:
        HookSyncConfig: Configuration for the project.

    Raises:
        ConfigError: If the file cannot be parsed or the section is invalid.
    """

    pyproject = project_root / PYPROJECT_FILENAME
    if not pyproject.is_file():
        return HookSyncConfig()
    try:
        with pyproject.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read {pyproject}: {exc}") from exc

    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return HookSyncConfig()
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return HookSyncConfig()
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {pyproject} must be a table")
    return config_from_mapping(section, source=str(pyproject))


__all__ = [
    "ConfigError",
    "GIT_DIR_NAME",
    "HOOKS_DIR_NAME",
    "HookSyncConfig",
    "config_from_mapping",
    "load_config",
]
