# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress sinks receiving human-readable hook synchronization messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from hooksync.logging import info, warn


@runtime_checkable
class HookReporter(Protocol):
    """Write-line interface the synchronizer reports progress through."""

    def info(self, message: str) -> None:
        """Record a progress line."""

    def warn(self, message: str) -> None:
        """Record a warning line."""


@dataclass(slots=True)
class ConsoleReporter:
    """Render progress lines on the shared Rich console."""

    use_emoji: bool = False

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji)


class NullReporter:
    """Discard every message."""

    def info(self, message: str) -> None:
        del message

    def warn(self, message: str) -> None:
        del message


__all__ = ["ConsoleReporter", "HookReporter", "NullReporter"]
