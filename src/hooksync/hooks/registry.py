# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry of git hook names recognised by the synchronizer."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import cache
from typing import Final

DEFAULT_HOOK_NAMES: Final[tuple[str, ...]] = (
    "applypatch-msg",
    "pre-applypatch",
    "post-applypatch",
    "pre-commit",
    "prepare-commit-msg",
    "commit-msg",
    "post-commit",
    "pre-rebase",
    "post-checkout",
    "post-merge",
    "pre-push",
    "pre-auto-gc",
    "post-rewrite",
)


@dataclass(frozen=True, slots=True)
class HookNameRegistry:
    """Immutable allow-list of hook file names.

    Names are matched exactly and case-sensitively. The declaration order is
    kept for display purposes only; membership is the sole lookup.
    """

    names: tuple[str, ...]
    _members: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_members", frozenset(self.names))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> HookNameRegistry:
        """Build a registry from ``names`` dropping duplicates.

        Args:
            names: Hook names in the order they should be listed.

        Returns:
            HookNameRegistry: Registry containing each distinct name once.
        """

        return cls(names=tuple(dict.fromkeys(names)))

    def contains(self, name: str) -> bool:
        """Return whether ``name`` identifies a recognised hook.

        Args:
            name: File name found in a hook source directory.

        Returns:
            bool: ``True`` when the name is part of the registry.
        """

        return name in self._members

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)


@cache
def default_registry() -> HookNameRegistry:
    """Return the registry of hooks git invokes on the client side.

    Returns:
        HookNameRegistry: Shared registry built from :data:`DEFAULT_HOOK_NAMES`.
    """

    return HookNameRegistry(names=DEFAULT_HOOK_NAMES)


def is_supported(name: str) -> bool:
    """Return whether ``name`` is part of the default registry."""

    return default_registry().contains(name)


__all__ = ["DEFAULT_HOOK_NAMES", "HookNameRegistry", "default_registry", "is_supported"]
