# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Synchronization modes run for the CI events."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from weblate_sync.api.normalizers import get_link_url, is_link
from weblate_sync.discovery import (
    get_pull_request_name,
    resolve_components,
    strip_pull_request_suffix,
)
from weblate_sync.logger import LOGGER

from .checks import get_merge_failure, get_repository_outcomes, get_untranslated
from .defines import SyncMode
from .outcomes import MissingTrunkCategory, SyncResult
from .sweep import remove_missing_components

if TYPE_CHECKING:
    from collections.abc import Callable

    from weblate_sync.api.base import Backend
    from weblate_sync.api.types import Category, Component
    from weblate_sync.config import Configuration
    from weblate_sync.discovery import ComponentInCode


class PlannedComponent(NamedTuple):
    """Component to create in Weblate."""

    name: str
    component: ComponentInCode
    is_main: bool


def get_components(config: Configuration) -> list[ComponentInCode]:
    return resolve_components(
        config.keysets_path, config.main_language, config.file_format
    )


def get_main_component(remote_components: list[Component]) -> Component | None:
    """Return component holding the repository, the others link to it."""
    for component in remote_components:
        if not is_link(component):
            return component
    return None


def elect_main(
    remote_components: list[Component], components: list[ComponentInCode]
) -> ComponentInCode:
    """
    Choose keyset for the main component.

    Existing main component keeps its role while its keyset exists,
    otherwise the first keyset becomes main.
    """
    existing_main = get_main_component(remote_components)
    if existing_main is not None:
        main_name = strip_pull_request_suffix(existing_main["name"])
        for component in components:
            if component.name == main_name:
                return component
    return components[0]


def plan_components(
    components: list[ComponentInCode],
    remote_components: list[Component],
    pull_request_number: int | None = None,
) -> list[PlannedComponent]:
    """Order the plan with the main component first."""
    main = elect_main(remote_components, components)
    ordered = [main, *(component for component in components if component != main)]
    return [
        PlannedComponent(
            name=get_pull_request_name(component.name, pull_request_number),
            component=component,
            is_main=component == main,
        )
        for component in ordered
    ]


def create_components(
    weblate: Backend,
    config: Configuration,
    category: Category,
    plan: list[PlannedComponent],
    *,
    update_if_exists: bool = False,
) -> list[Component]:
    """Create main component bound to the repository and links to it."""
    result = []
    link_url = None
    for planned in plan:
        if planned.is_main:
            repo = config.git_repo
            push_repo = config.git_repo
        else:
            repo = link_url
            push_repo = None
        component = weblate.create_component(
            planned.name,
            file_mask=planned.component.file_mask,
            source=planned.component.source,
            repo=repo,
            branch=config.branch_name if planned.is_main else None,
            category_id=category["id"],
            category_slug=category["slug"],
            push_repo=push_repo,
            apply_default_addons=planned.is_main,
            update_if_exists=update_if_exists,
            pull_request_author=config.pull_request_author,
            pull_request_number=config.pull_request_number,
        )
        if planned.is_main:
            link_url = get_link_url(
                weblate.project, category["slug"], component["slug"]
            )
        result.append(component)
    return result


def pull_main_component(
    weblate: Backend, remote_components: list[Component], category_slug: str
) -> Component | None:
    """Pull upstream changes and wait until Weblate processes them."""
    main = get_main_component(remote_components)
    if main is None:
        return None
    weblate.pull_component(main["name"], category_slug)
    weblate.wait_for_tasks(
        [component["name"] for component in remote_components], category_slug
    )
    return main


def unique_names(*groups: list[Component]) -> list[str]:
    names = []
    for group in groups:
        for component in group:
            if component["name"] not in names:
                names.append(component["name"])
    return names


def sync_master(config: Configuration, weblate: Backend) -> SyncResult:
    result = SyncResult()
    category = weblate.create_category(config.branch_name)
    category_slug = category["slug"]
    recently_created = category.get("was_recently_created", False)
    LOGGER.info(
        "synchronizing branch %s into category %s", config.branch_name, category_slug
    )

    existing: list[Component] = []
    if not recently_created:
        existing = weblate.get_components_in_category(category["id"])
        pull_main_component(weblate, existing, category_slug)

    components = get_components(config)
    created = create_components(
        weblate, config, category, plan_components(components, existing)
    )

    if not recently_created:
        weblate.pull_component(created[0]["name"], category_slug)

    weblate.wait_for_tasks(unique_names(existing, created), category_slug)

    remove_missing_components(
        weblate, config, category["id"], category_slug, components
    )
    return result


def clone_master_components(
    weblate: Backend, config: Configuration, category: Category
) -> list[Component] | None:
    """Seed feature branch category with links to the master branch components."""
    master_category = weblate.find_category(config.master_branch)
    if master_category is None:
        return None

    master_components = weblate.get_components_in_category(master_category["id"])
    if not master_components:
        return []
    master_main = get_main_component(master_components) or master_components[0]
    link_url = get_link_url(
        weblate.project, master_category["slug"], master_main["slug"]
    )

    created = [
        weblate.create_component(
            get_pull_request_name(component["name"], config.pull_request_number),
            file_mask=component["filemask"],
            source=component["template"],
            repo=link_url,
            category_id=category["id"],
            category_slug=category["slug"],
            apply_default_addons=False,
            pull_request_author=config.pull_request_author,
            pull_request_number=config.pull_request_number,
        )
        for component in master_components
    ]
    weblate.wait_for_tasks(
        [component["name"] for component in created], category["slug"]
    )
    return created


def validate_pull_request(config: Configuration, weblate: Backend) -> SyncResult:
    result = SyncResult()
    category = weblate.create_category(
        get_pull_request_name(config.branch_name, config.pull_request_number)
    )
    category_slug = category["slug"]
    recently_created = category.get("was_recently_created", False)
    LOGGER.info(
        "validating pull request #%s of branch %s in category %s",
        config.pull_request_number,
        config.branch_name,
        category_slug,
    )

    if recently_created:
        existing = clone_master_components(weblate, config, category)
        if existing is None:
            LOGGER.error("not found category for branch %s", config.master_branch)
            result.add(MissingTrunkCategory(branch=config.master_branch))
            return result
    else:
        existing = weblate.get_components_in_category(category["id"])
        main = pull_main_component(weblate, existing, category_slug)
        if main is not None:
            merge_failure = get_merge_failure(
                weblate, config, main["name"], category_slug
            )
            if merge_failure is not None:
                result.add(merge_failure)
                return result

    components = get_components(config)
    created = create_components(
        weblate,
        config,
        category,
        plan_components(components, existing, config.pull_request_number),
        update_if_exists=recently_created,
    )
    main_name = created[0]["name"]

    if not recently_created:
        weblate.pull_component(main_name, category_slug)
    weblate.wait_for_tasks(
        [component["name"] for component in created], category_slug
    )

    remove_missing_components(
        weblate, config, category["id"], category_slug, components
    )

    result.extend(get_repository_outcomes(weblate, config, main_name, category_slug))
    if result.stopped:
        return result

    untranslated = get_untranslated(
        weblate, [component["name"] for component in created], category_slug
    )
    if untranslated is not None:
        result.add(untranslated)
    return result


def remove_branch(config: Configuration, weblate: Backend) -> SyncResult:
    name = get_pull_request_name(config.branch_name, config.pull_request_number)
    category = weblate.find_category(name)
    if category is None:
        LOGGER.info("category %s does not exist, nothing to remove", name)
    else:
        weblate.remove_category(category["id"])
    return SyncResult()


HANDLERS: dict[SyncMode, Callable[[Configuration, Backend], SyncResult]] = {
    SyncMode.SYNC_MASTER: sync_master,
    SyncMode.VALIDATE_PULL_REQUEST: validate_pull_request,
    SyncMode.REMOVE_BRANCH: remove_branch,
}


def run_mode(config: Configuration, weblate: Backend) -> SyncResult:
    return HANDLERS[config.mode](config, weblate)
