# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Structured results of a synchronization run."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, TypeAlias

if TYPE_CHECKING:
    from weblate_sync.api.types import TranslationStats


class MergeFailure(NamedTuple):
    """Weblate could not merge the branch into its repository."""

    component: str
    diagnostic: str
    git_export: str | None
    branch: str
    terminal = True


class NeedsPush(NamedTuple):
    """Weblate has changes which were not merged into the branch."""

    component: str
    terminal: bool = True


class NeedsCommit(NamedTuple):
    """Weblate has uncommitted changes, review is in progress."""

    component: str
    terminal = True


class Untranslated(NamedTuple):
    """Some languages are not fully translated."""

    stats: list[TranslationStats]
    terminal = True


class MissingTrunkCategory(NamedTuple):
    """There is no category to seed feature branch from."""

    branch: str
    terminal = True


Outcome: TypeAlias = (
    MergeFailure | NeedsPush | NeedsCommit | Untranslated | MissingTrunkCategory
)


class SyncResult:
    """Outcomes collected during a run, any outcome fails the run."""

    def __init__(self) -> None:
        self.outcomes: list[Outcome] = []

    def __repr__(self) -> str:
        return f"<SyncResult {self.outcomes!r}>"

    def add(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    def extend(self, outcomes: list[Outcome]) -> None:
        self.outcomes.extend(outcomes)

    @property
    def failed(self) -> bool:
        return bool(self.outcomes)

    @property
    def stopped(self) -> bool:
        """Whether a terminal outcome was reached."""
        return any(outcome.terminal for outcome in self.outcomes)
