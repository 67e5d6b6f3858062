# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the hook name registry."""

from __future__ import annotations

import dataclasses

import pytest

from hooksync.hooks import DEFAULT_HOOK_NAMES, HookNameRegistry, default_registry, is_supported


def test_default_registry_contains_client_hooks() -> None:
    registry = default_registry()

    assert set(registry) == {
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
    }
    assert len(registry) == len(DEFAULT_HOOK_NAMES) == 13


def test_first_declared_hook_is_recognised() -> None:
    assert default_registry().contains("applypatch-msg")
    assert is_supported("applypatch-msg")


@pytest.mark.parametrize("name", ["Pre-Commit", "pre-commit.sample", "pre-commit ", "README.md", ""])
def test_membership_is_exact(name: str) -> None:
    assert not default_registry().contains(name)
    assert name not in default_registry()


def test_registry_is_immutable() -> None:
    registry = default_registry()

    with pytest.raises(dataclasses.FrozenInstanceError):
        registry.names = ("pre-commit",)  # type: ignore[misc]


def test_from_names_drops_duplicates_and_keeps_order() -> None:
    registry = HookNameRegistry.from_names(["pre-push", "pre-commit", "pre-push"])

    assert registry.names == ("pre-push", "pre-commit")
    assert "pre-commit" in registry
    assert "commit-msg" not in registry
