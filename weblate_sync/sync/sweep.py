# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from typing import TYPE_CHECKING

from weblate_sync.api.normalizers import get_link_url, is_link
from weblate_sync.discovery import strip_pull_request_suffix
from weblate_sync.logger import LOGGER

if TYPE_CHECKING:
    from weblate_sync.api.base import Backend
    from weblate_sync.api.types import Component
    from weblate_sync.config import Configuration
    from weblate_sync.discovery import ComponentInCode


def partition_components(
    remote_components: list[Component], components: list[ComponentInCode]
) -> tuple[list[Component], list[Component]]:
    """Split remote components to stale and alive, alive ones in keyset order."""
    order = {component.name: index for index, component in enumerate(components)}
    stale = []
    alive = []
    for component in remote_components:
        if strip_pull_request_suffix(component["name"]) in order:
            alive.append(component)
        else:
            stale.append(component)
    alive.sort(
        key=lambda component: order[strip_pull_request_suffix(component["name"])]
    )
    return stale, alive


def remove_missing_components(
    weblate: Backend,
    config: Configuration,
    category_id: str,
    category_slug: str,
    components: list[ComponentInCode],
) -> list[Component]:
    """
    Remove components without keyset directory.

    When the main component is going away, the first remaining component
    takes over the repository and the others are linked to it before
    anything is removed.
    """
    stale, alive = partition_components(
        weblate.get_components_in_category(category_id), components
    )
    if not stale:
        return []

    if alive and any(not is_link(component) for component in stale):
        main, *linked = alive
        LOGGER.info("promoting %s to main component", main["name"])
        weblate.update_component(
            main["name"],
            category_slug=category_slug,
            repo=config.git_repo,
            branch=config.branch_name,
            push_repo=config.git_repo,
            push_branch=config.branch_name,
            file_mask=main["filemask"],
        )
        link_url = get_link_url(weblate.project, category_slug, main["slug"])
        for component in linked:
            weblate.update_component(
                component["name"],
                category_slug=category_slug,
                repo=link_url,
                file_mask=component["filemask"],
            )

    for component in stale:
        weblate.remove_component(component["name"], category_slug)
    return stale
