# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Interpretation of repository state and translation statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weblate_sync.exceptions import ComponentNotFoundError
from weblate_sync.logger import LOGGER

from .defines import NeedsPushPolicy
from .outcomes import MergeFailure, NeedsCommit, NeedsPush, Untranslated

if TYPE_CHECKING:
    from weblate_sync.api.base import Backend
    from weblate_sync.config import Configuration

    from .outcomes import Outcome


def get_merge_failure(
    weblate: Backend, config: Configuration, name: str, category_slug: str
) -> MergeFailure | None:
    outcomes = get_repository_outcomes(weblate, config, name, category_slug)
    if outcomes and isinstance(outcomes[0], MergeFailure):
        return outcomes[0]
    return None


def get_repository_outcomes(
    weblate: Backend, config: Configuration, name: str, category_slug: str
) -> list[Outcome]:
    """
    Check repository of the main component.

    Merge failure hides any other problem as nothing else can be resolved
    before the conflict is fixed.
    """
    component = weblate.find_component(name, category_slug)
    if component is None:
        raise ComponentNotFoundError(name, category_slug)

    status = weblate.get_repository_status(name, category_slug)
    LOGGER.info(
        "repository of %s: needs_push=%s, needs_commit=%s, merge_failure=%s",
        name,
        status.get("needs_push"),
        status.get("needs_commit"),
        bool(status.get("merge_failure")),
    )

    if merge_failure := status.get("merge_failure"):
        return [
            MergeFailure(
                component=name,
                diagnostic=merge_failure,
                git_export=component.get("git_export"),
                branch=config.branch_name,
            )
        ]

    outcomes: list[Outcome] = []
    if status.get("needs_push"):
        outcomes.append(
            NeedsPush(
                component=name,
                terminal=config.needs_push_policy == NeedsPushPolicy.FAIL,
            )
        )
        if outcomes[-1].terminal:
            return outcomes
    if status.get("needs_commit"):
        outcomes.append(NeedsCommit(component=name))
    return outcomes


def get_untranslated(
    weblate: Backend, names: list[str], category_slug: str
) -> Untranslated | None:
    """Return languages which are not fully translated."""
    untranslated = [
        stats
        for name in names
        for stats in weblate.get_translation_stats(name, category_slug)
        if stats["translated_percent"] < 100
    ]
    if untranslated:
        return Untranslated(stats=untranslated)
    return None
