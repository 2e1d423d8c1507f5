# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Rendering of synchronization outcomes for pull request comments."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from weblate_sync.discovery import strip_pull_request_suffix
from weblate_sync.sync.outcomes import (
    MergeFailure,
    MissingTrunkCategory,
    NeedsCommit,
    NeedsPush,
    Untranslated,
)

if TYPE_CHECKING:
    from weblate_sync.sync.outcomes import Outcome

HEADER = "**i18n-check**"

MERGE_CONFLICTS_DOCS = (
    "https://docs.weblate.org/en/latest/faq.html"
    "#how-to-fix-merge-conflicts-in-translations"
)


def render_merge_failure(outcome: MergeFailure) -> str:
    return "\n".join(
        [
            HEADER,
            "<details>",
            "<summary>Errors occurred when merging changes from your branch "
            "with the Weblate branch.</summary>",
            "",
            "```",
            outcome.diagnostic.replace("```", ""),
            "```",
            "",
            "</details>",
            "",
            "**Resolve conflicts according to instructions**",
            "1. Switch to the current branch associated with this pull request.",
            "```",
            f"git checkout {outcome.branch}",
            "```",
            "2. Add Weblate as remote:",
            "```",
            f"git remote add weblate {outcome.git_export or ''}".rstrip(),
            "git remote update weblate",
            "```",
            "3. Merge Weblate changes:",
            "```",
            f"git merge weblate/{outcome.branch}",
            "```",
            "4. Resolve conflicts:",
            "```",
            "edit ...",
            "git add ...",
            "git commit",
            "```",
            "5. Push changes to upstream repository, "
            "Weblate will fetch merge from there:",
            "```",
            "git push origin",
            "```",
            "",
            f"See also {MERGE_CONFLICTS_DOCS}",
        ]
    )


def render_needs_push(outcome: NeedsPush) -> str:
    return "\n".join(
        [
            HEADER,
            "Please merge the Pull Request with the changes from Weblate "
            "into your branch.",
        ]
    )


def render_needs_commit(outcome: NeedsCommit) -> str:
    return "\n".join(
        [
            HEADER,
            "The reviewer is still working on checking your i18n changes. "
            "Wait for a Pull Request from Weblate.",
        ]
    )


def render_untranslated(outcome: Untranslated) -> str:
    links = "<br>".join(
        '<a href="{}">{} ({})</a>'.format(
            escape(stats["url"]),
            escape(
                strip_pull_request_suffix(stats.get("component_name", stats["name"]))
            ),
            escape(stats["code"]),
        )
        for stats in outcome.stats
    )
    return "\n".join(
        [
            HEADER,
            "<details>",
            "<summary>The following components have not been translated</summary>",
            f"<p>{links}</p>",
            "</details>",
            "",
            "Wait for the reviewers to check your changes in Weblate "
            "and try running github action again.",
        ]
    )


def render_missing_trunk(outcome: MissingTrunkCategory) -> str:
    return "\n".join(
        [HEADER, f"Not found category for branch '{outcome.branch}'."]
    )


RENDERERS = {
    MergeFailure: render_merge_failure,
    NeedsPush: render_needs_push,
    NeedsCommit: render_needs_commit,
    Untranslated: render_untranslated,
    MissingTrunkCategory: render_missing_trunk,
}


def render_outcome(outcome: Outcome) -> str:
    """Render outcome as a pull request comment."""
    try:
        renderer = RENDERERS[type(outcome)]
    except KeyError as error:
        msg = f"Unsupported outcome: {outcome!r}"
        raise TypeError(msg) from error
    return renderer(outcome)
