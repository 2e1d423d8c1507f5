# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Interface of the translation backend as seen by the synchronization."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Category, Component, RepositoryStatus, TranslationStats


class Backend:
    """
    Remote state store keyed by project, category slug and component slug.

    Every write is safe to repeat: creation first looks the object up and
    lookups return ``None`` for missing objects instead of raising.
    """

    project: str

    def find_category(self, name: str) -> Category | None:
        raise NotImplementedError

    def create_category(self, name: str) -> Category:
        """Find or create category, sets ``was_recently_created`` on creation."""
        raise NotImplementedError

    def remove_category(self, category_id: str) -> None:
        raise NotImplementedError

    def find_component(
        self, name: str, category_slug: str | None = None
    ) -> Component | None:
        raise NotImplementedError

    def create_component(
        self,
        name: str,
        *,
        file_mask: str,
        source: str,
        repo: str,
        branch: str | None = None,
        category_id: str | None = None,
        category_slug: str | None = None,
        push_repo: str | None = None,
        push_branch: str | None = None,
        apply_default_addons: bool = True,
        update_if_exists: bool = False,
        pull_request_author: str | None = None,
        pull_request_number: int | None = None,
    ) -> Component:
        """Find or create component, optionally updating existing one."""
        raise NotImplementedError

    def update_component(
        self,
        name: str,
        *,
        repo: str,
        category_slug: str | None = None,
        branch: str | None = None,
        push_repo: str | None = None,
        push_branch: str | None = None,
        file_mask: str | None = None,
    ) -> Component | None:
        raise NotImplementedError

    def remove_component(self, name: str, category_slug: str | None = None) -> None:
        raise NotImplementedError

    def get_components_in_category(self, category_id: str) -> list[Component]:
        raise NotImplementedError

    def pull_component(self, name: str, category_slug: str | None = None) -> None:
        """Pull upstream changes into the component repository."""
        raise NotImplementedError

    def get_translation_stats(
        self, name: str, category_slug: str | None = None
    ) -> list[TranslationStats]:
        raise NotImplementedError

    def get_repository_status(
        self, name: str, category_slug: str | None = None
    ) -> RepositoryStatus:
        raise NotImplementedError

    def wait_for_tasks(
        self, names: list[str], category_slug: str | None = None
    ) -> None:
        """
        Wait until no component has a pending background task.

        Raises :class:`~weblate_sync.exceptions.TaskTimeoutError` when the
        polling budget is exhausted.
        """
        raise NotImplementedError
