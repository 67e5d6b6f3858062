# SPDX-License-Identifier: MIT
"""Dataclasses describing hook synchronization outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class HookAction(str, Enum):
    """Enumerate the outcomes a single hook can reach during a run."""

    INSTALLED = "installed"
    UPDATED = "updated"
    SKIPPED_EXISTS = "skipped-exists"
    SKIPPED_IDENTICAL = "skipped-identical"
    SAMPLE_BACKED_UP = "sample-backed-up"
    SAMPLE_KEPT = "sample-kept"
    REMOVED = "removed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class HookEvent:
    """Describe one classified action taken on a target hook slot.

    Attributes:
        name: Hook name the event belongs to.
        action: Classified outcome.
        path: Target path affected by the action.
        detail: Optional human-readable context.
        error: Filesystem error captured for ``FAILED`` events.
    """

    name: str
    action: HookAction
    path: Path
    detail: str | None = None
    error: OSError | None = None


_SKIP_ACTIONS = frozenset({HookAction.SKIPPED_EXISTS, HookAction.SKIPPED_IDENTICAL})
_LINK_ACTIONS = frozenset({HookAction.INSTALLED, HookAction.UPDATED})


@dataclass(slots=True)
class SyncResult:
    """Aggregate outcome from reconciling or removing hooks."""

    events: list[HookEvent] = field(default_factory=list)
    dry_run: bool = False

    def record(self, event: HookEvent) -> HookEvent:
        """Append ``event`` to the result and return it."""

        self.events.append(event)
        return event

    def _paths(self, actions: frozenset[HookAction]) -> list[Path]:
        return [event.path for event in self.events if event.action in actions]

    @property
    def installed(self) -> list[Path]:
        return self._paths(_LINK_ACTIONS)

    @property
    def skipped(self) -> list[Path]:
        return self._paths(_SKIP_ACTIONS)

    @property
    def backups(self) -> list[Path]:
        return self._paths(frozenset({HookAction.SAMPLE_BACKED_UP}))

    @property
    def removed(self) -> list[Path]:
        return self._paths(frozenset({HookAction.REMOVED}))

    @property
    def failures(self) -> list[HookEvent]:
        return [event for event in self.events if event.action is HookAction.FAILED]

    @property
    def hook_names(self) -> list[str]:
        """Return the distinct hook names touched by the run, in order."""

        return list(dict.fromkeys(event.name for event in self.events))

    @property
    def all_failed(self) -> bool:
        """Return ``True`` when every processed hook ended in failure.

        A hook whose sample rename failed but whose link succeeded does not
        count as failed.
        """

        if not self.failures:
            return False
        settled = _LINK_ACTIONS | _SKIP_ACTIONS | {HookAction.REMOVED}
        return not any(event.action in settled for event in self.events)


__all__ = ["HookAction", "HookEvent", "SyncResult"]
