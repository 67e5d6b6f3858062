# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hook registry, synchronization and lifecycle services."""

from __future__ import annotations

from .lifecycle import GitHooksInstaller, HookLifecycle, LifecycleEvent, dispatch
from .models import HookAction, HookEvent, SyncResult
from .registry import DEFAULT_HOOK_NAMES, HookNameRegistry, default_registry, is_supported
from .reporter import ConsoleReporter, HookReporter, NullReporter
from .synchronizer import HookSynchronizer, reconcile_hooks, remove_hooks

__all__ = [
    "DEFAULT_HOOK_NAMES",
    "ConsoleReporter",
    "GitHooksInstaller",
    "HookAction",
    "HookEvent",
    "HookLifecycle",
    "HookNameRegistry",
    "HookReporter",
    "HookSynchronizer",
    "LifecycleEvent",
    "NullReporter",
    "SyncResult",
    "default_registry",
    "dispatch",
    "is_supported",
    "reconcile_hooks",
    "remove_hooks",
]
