# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
from time import sleep
from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

from requests.exceptions import HTTPError, RequestException

from weblate_sync.exceptions import TaskTimeoutError
from weblate_sync.utils.errors import add_breadcrumb
from weblate_sync.utils.requests import get_session, request

from .base import Backend
from .normalizers import get_component_slug, normalize_data, slugify

if TYPE_CHECKING:
    from collections.abc import Iterator

    import requests

    from .types import (
        Addon,
        Category,
        Component,
        Paginated,
        RepositoryStatus,
        TranslationStats,
    )

LOGGER = logging.getLogger("weblate_sync.api")

DEFAULT_COMPONENT_ADDONS: list[Addon] = [
    {"name": "weblate.git.squash", "configuration": {"squash": "all"}},
    {"name": "weblate.flags.target_edit"},
    {"name": "weblate.flags.source_edit"},
    {"name": "weblate.flags.same_edit"},
    {
        "name": "weblate.json.customize",
        "configuration": {"sort_keys": 1, "style": "spaces", "indent": 2},
    },
    {"name": "weblate.gravity.custom"},
]


def get_pull_message(
    pull_request_number: int | None = None, pull_request_author: str | None = None
) -> str:
    """Return template for pull requests Weblate opens with translations."""
    if pull_request_number:
        title = (
            "Translations update from {{ site_title }} "
            f"for PR #{pull_request_number}\n"
        )
    else:
        title = "Translations update from {{ site_title }}\n"

    if pull_request_number and pull_request_author:
        info = (
            f"Pull Request #{pull_request_number} (author: @{pull_request_author}). "
            "You need to merge these changes into your branch."
        )
    else:
        info = ""

    return "\n".join(
        [
            title,
            info,
            "Translations update from [{{ site_title }}]({{ site_url }}) for "
            "[{{ project_name }}/{{ component_name }}]({{url}}).\n",
        ]
    )


def without_empty(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


class WeblateClient(Backend):
    """Weblate REST API client limited to a single project."""

    def __init__(
        self,
        *,
        server_url: str,
        token: str,
        project: str,
        file_format: str = "json",
        main_language: str = "en",
        wait_attempts: int = 20,
        wait_delay: float = 10,
        list_attempts: int = 5,
        list_delay: float = 2,
        session: requests.Session | None = None,
    ) -> None:
        self.server_url = server_url.rstrip("/")
        self.api_url = urljoin(f"{self.server_url}/", "api/")
        self.project = project
        self.file_format = file_format
        self.main_language = main_language
        self.wait_attempts = max(wait_attempts, 1)
        self.wait_delay = wait_delay
        self.list_attempts = max(list_attempts, 1)
        self.list_delay = list_delay
        if session is None:
            session = get_session({"Authorization": f"Token {token}"})
        self.session = session

    def request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        if endpoint.startswith("http"):
            url = endpoint
        else:
            url = urljoin(self.api_url, endpoint)
        add_breadcrumb("api", f"{method.upper()} {url}")
        return request(method, url, session=self.session, **kwargs)

    def get(self, endpoint: str, **kwargs) -> Any:
        return normalize_data(self.request("get", endpoint, **kwargs).json())

    def post(self, endpoint: str, data: dict[str, Any]) -> Any:
        return normalize_data(self.request("post", endpoint, json=data).json())

    def paginate(
        self, endpoint: str, params: dict[str, Any] | None = None
    ) -> Iterator[dict]:
        """Iterate over all results of a list endpoint following ``next``."""
        page: str | None = endpoint
        while page:
            data: Paginated[dict] = self.get(page, params=params)
            yield from data["results"]
            page = data.get("next")
            # The next URL already includes query parameters
            params = None

    def get_project_url(self) -> str:
        return f"{self.api_url}projects/{self.project}/"

    def get_component_endpoint(
        self, name: str, category_slug: str | None = None, suffix: str = ""
    ) -> str:
        slug = get_component_slug(name, category_slug)
        return f"components/{self.project}/{slug}/{suffix}"

    def find_category(self, name: str) -> Category | None:
        for category in self.paginate(
            f"projects/{self.project}/categories/", params={"page_size": 1000}
        ):
            if category["name"] == name:
                return category
        return None

    def create_category(self, name: str) -> Category:
        category = self.find_category(name)
        if category is not None:
            LOGGER.info("using existing category %s", name)
            return category

        LOGGER.info("creating category %s", name)
        created = self.post(
            "categories/",
            {"project": self.get_project_url(), "name": name, "slug": slugify(name)},
        )
        created["was_recently_created"] = True
        return created

    def remove_category(self, category_id: str) -> None:
        LOGGER.info("removing category %s", category_id)
        self.request("delete", f"categories/{category_id}/")

    def find_component(
        self, name: str, category_slug: str | None = None
    ) -> Component | None:
        try:
            return self.get(self.get_component_endpoint(name, category_slug))
        except HTTPError as error:
            if error.response is not None and error.response.status_code == 404:
                return None
            raise

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
        component = self.find_component(name, category_slug)

        if component is not None:
            if not update_if_exists:
                return component
            if apply_default_addons:
                self.install_default_addons(name, category_slug)
            self.update_component(
                name,
                category_slug=category_slug,
                repo=repo,
                branch=branch,
                push_repo=push_repo,
                push_branch=push_branch,
                file_mask=file_mask,
            )
            component["repo"] = repo
            component["branch"] = branch
            return component

        LOGGER.info("creating component %s (repository %s)", name, repo)
        data = {
            "name": name,
            "slug": slugify(name),
            "source_language": self.main_language,
            "file_format": self.file_format,
            "filemask": file_mask,
            "language_regex": "^..$",
            "vcs": "github",
            "repo": repo,
            "push": push_repo,
            "push_branch": (push_branch or branch) if push_repo else None,
            "push_on_commit": False,
            "branch": branch,
            "category": f"{self.api_url}categories/{category_id}/"
            if category_id
            else None,
            "template": source,
            "new_base": source,
            "allow_translation_propagation": False,
            "manage_units": False,
            "merge_style": "rebase",
            "pull_message": get_pull_message(pull_request_number, pull_request_author),
        }
        created = self.post(
            f"projects/{self.project}/components/", without_empty(data)
        )

        if apply_default_addons:
            self.install_default_addons(name, category_slug)

        created["was_recently_created"] = True
        return created

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
        LOGGER.info("updating component %s (repository %s)", name, repo)
        data = {
            "name": name,
            "slug": slugify(name),
            "filemask": file_mask,
            "language_regex": "^..$",
            "file_format": self.file_format,
            "repo": repo,
            "push": push_repo,
            "push_branch": (push_branch or branch) if push_repo else None,
            "branch": branch,
        }
        try:
            response = self.request(
                "patch",
                self.get_component_endpoint(name, category_slug),
                json=without_empty(data),
            )
        except HTTPError as error:
            if error.response is not None and error.response.status_code == 404:
                return None
            raise
        return normalize_data(response.json())

    def remove_component(self, name: str, category_slug: str | None = None) -> None:
        LOGGER.info("removing component %s", name)
        self.request("delete", self.get_component_endpoint(name, category_slug))

    def get_components_in_category(self, category_id: str) -> list[Component]:
        attempt = 0
        while True:
            attempt += 1
            try:
                return [
                    component
                    for component in self.paginate(
                        f"projects/{self.project}/components/"
                    )
                    if component.get("category") == category_id
                ]
            except RequestException as error:
                if attempt >= self.list_attempts:
                    raise
                LOGGER.warning(
                    "listing components failed (attempt %d/%d): %s",
                    attempt,
                    self.list_attempts,
                    error,
                )
                sleep(self.list_delay)

    def pull_component(self, name: str, category_slug: str | None = None) -> None:
        LOGGER.info("pulling remote changes into %s", name)
        self.post(
            self.get_component_endpoint(name, category_slug, "repository/"),
            {"operation": "pull"},
        )

    def get_translation_stats(
        self, name: str, category_slug: str | None = None
    ) -> list[TranslationStats]:
        stats = list(
            self.paginate(
                self.get_component_endpoint(name, category_slug, "statistics/")
            )
        )
        for item in stats:
            item["component_name"] = name
        return stats

    def install_default_addons(
        self, name: str, category_slug: str | None = None
    ) -> None:
        endpoint = self.get_component_endpoint(name, category_slug, "addons/")
        for addon in DEFAULT_COMPONENT_ADDONS:
            try:
                self.post(endpoint, addon)
            except HTTPError as error:
                # Weblate reports already installed add-on on the name field
                if not self.is_addon_conflict(error):
                    raise
                LOGGER.debug("add-on %s already installed on %s", addon["name"], name)

    @staticmethod
    def is_addon_conflict(error: HTTPError) -> bool:
        response = error.response
        if response is None or response.status_code != 400:
            return False
        try:
            data = response.json()
        except ValueError:
            return False
        return isinstance(data, dict) and "name" in data

    def get_repository_status(
        self, name: str, category_slug: str | None = None
    ) -> RepositoryStatus:
        return self.get(
            self.get_component_endpoint(name, category_slug, "repository/")
        )

    def is_task_completed(self, name: str, category_slug: str | None = None) -> bool:
        component = self.find_component(name, category_slug)
        if component is None or not component.get("task_url"):
            return True
        try:
            task = self.get(f"tasks/{component['task_url']}/")
        except HTTPError as error:
            # Finished tasks expire
            if error.response is not None and error.response.status_code == 404:
                return True
            raise
        return bool(task.get("completed"))

    def wait_for_tasks(
        self, names: list[str], category_slug: str | None = None
    ) -> None:
        for attempt in range(1, self.wait_attempts + 1):
            pending = [
                name
                for name in names
                if not self.is_task_completed(name, category_slug)
            ]
            if not pending:
                return
            LOGGER.info(
                "waiting for tasks of %s (attempt %d/%d)",
                ", ".join(pending),
                attempt,
                self.wait_attempts,
            )
            if attempt < self.wait_attempts:
                sleep(self.wait_delay)
        raise TaskTimeoutError(category_slug, pending)
