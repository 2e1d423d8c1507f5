# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""In-memory Weblate used to exercise synchronization without HTTP."""

from __future__ import annotations

import os
import shutil
import tempfile

from weblate_sync.api.base import Backend
from weblate_sync.api.normalizers import get_link_url, is_link, slugify
from weblate_sync.config import Configuration
from weblate_sync.sync.defines import NeedsPushPolicy, SyncMode

GIT_REPO = "https://github.com/example/app.git"


class FakeWeblate(Backend):
    def __init__(self, project: str = "proj") -> None:
        self.project = project
        self.categories: dict[str, dict] = {}
        self.components: dict[tuple[str, str], dict] = {}
        self.repository_status: dict[str, dict] = {}
        self.stats: dict[str, list[dict]] = {}
        self.log: list[tuple[str, str]] = []
        self.sequence = 0

    def next_id(self) -> str:
        self.sequence += 1
        return str(self.sequence)

    def get_key(self, name: str, category_slug: str | None) -> tuple[str, str]:
        return (category_slug or "", slugify(name))

    def find_category(self, name):
        for category in self.categories.values():
            if category["name"] == name:
                return dict(category)
        return None

    def create_category(self, name):
        category = self.find_category(name)
        if category is not None:
            return category
        self.log.append(("create_category", name))
        category = {
            "id": self.next_id(),
            "project": self.project,
            "name": name,
            "slug": slugify(name),
        }
        self.categories[category["id"]] = category
        return {**category, "was_recently_created": True}

    def remove_category(self, category_id):
        self.log.append(("remove_category", category_id))
        category = self.categories.pop(category_id)
        for key in [key for key in self.components if key[0] == category["slug"]]:
            del self.components[key]

    def add_component(self, category: dict, name: str, repo: str, **kwargs) -> dict:
        """Create component directly, bypassing any logic."""
        component = {
            "id": self.next_id(),
            "project": self.project,
            "name": name,
            "slug": slugify(name),
            "filemask": kwargs.get("filemask", f"keysets/{name}/*.json"),
            "template": kwargs.get("template", f"keysets/{name}/en.json"),
            "repo": repo,
            "branch": kwargs.get("branch"),
            "push": kwargs.get("push"),
            "category": category["id"],
            "task_url": None,
            "git_export": "https://weblate.example.com/git/{}/{}/{}/".format(
                self.project, category["slug"], slugify(name)
            ),
        }
        self.components[self.get_key(name, category["slug"])] = component
        return dict(component)

    def find_component(self, name, category_slug=None):
        component = self.components.get(self.get_key(name, category_slug))
        if component is None:
            return None
        return dict(component)

    def create_component(
        self,
        name,
        *,
        file_mask,
        source,
        repo,
        branch=None,
        category_id=None,
        category_slug=None,
        push_repo=None,
        push_branch=None,
        apply_default_addons=True,
        update_if_exists=False,
        pull_request_author=None,
        pull_request_number=None,
    ):
        component = self.find_component(name, category_slug)
        if component is not None:
            if update_if_exists:
                if apply_default_addons:
                    self.log.append(("install_default_addons", name))
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
        self.log.append(("create_component", name))
        created = self.add_component(
            self.categories[category_id],
            name,
            repo,
            filemask=file_mask,
            template=source,
            branch=branch,
            push=push_repo,
        )
        if apply_default_addons:
            self.log.append(("install_default_addons", name))
        return {**created, "was_recently_created": True}

    def update_component(
        self,
        name,
        *,
        repo,
        category_slug=None,
        branch=None,
        push_repo=None,
        push_branch=None,
        file_mask=None,
    ):
        component = self.components.get(self.get_key(name, category_slug))
        if component is None:
            return None
        self.log.append(("update_component", name))
        component["repo"] = repo
        if branch is not None:
            component["branch"] = branch
        if push_repo is not None:
            component["push"] = push_repo
        if file_mask is not None:
            component["filemask"] = file_mask
        return dict(component)

    def remove_component(self, name, category_slug=None):
        self.log.append(("remove_component", name))
        del self.components[self.get_key(name, category_slug)]

    def get_components_in_category(self, category_id):
        return [
            dict(component)
            for component in self.components.values()
            if component["category"] == category_id
        ]

    def pull_component(self, name, category_slug=None):
        self.log.append(("pull_component", name))

    def get_translation_stats(self, name, category_slug=None):
        self.log.append(("get_translation_stats", name))
        stats = self.stats.get(
            name,
            [{"code": "en", "name": "English", "translated_percent": 100.0}],
        )
        return [
            {
                "url": f"https://weblate.example.com/translate/{name}/{item['code']}/",
                **item,
                "component_name": name,
            }
            for item in stats
        ]

    def get_repository_status(self, name, category_slug=None):
        self.log.append(("get_repository_status", name))
        return {
            "needs_commit": False,
            "needs_merge": False,
            "needs_push": False,
            "merge_failure": None,
            **self.repository_status.get(name, {}),
        }

    def wait_for_tasks(self, names, category_slug=None):
        self.log.append(("wait_for_tasks", ",".join(names)))

    def get_category_components(self, name: str) -> dict[str, dict]:
        category = self.find_category(name)
        return {
            component["name"]: component
            for component in self.get_components_in_category(category["id"])
        }

    def get_main_components(self, name: str) -> list[str]:
        return [
            component["name"]
            for component in self.get_category_components(name).values()
            if not is_link(component)
        ]

    def get_link(self, category_name: str, component_name: str) -> str:
        return get_link_url(
            self.project, slugify(category_name), slugify(component_name)
        )

    def operations(self, operation: str) -> list[str]:
        return [name for logged, name in self.log if logged == operation]


class KeysetsMixin:
    """Creates temporary keysets directory."""

    def setUp(self) -> None:
        super().setUp()
        self.keysets_path = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.keysets_path)

    def create_keysets(self, *names: str) -> None:
        for name in names:
            path = os.path.join(self.keysets_path, name)
            os.makedirs(path, exist_ok=True)
            with open(os.path.join(path, "en.json"), "w") as handle:
                handle.write("{}")

    def remove_keyset(self, name: str) -> None:
        shutil.rmtree(os.path.join(self.keysets_path, name))

    def get_config(
        self, mode: SyncMode = SyncMode.SYNC_MASTER, **kwargs
    ) -> Configuration:
        defaults = {
            "mode": mode,
            "server_url": "https://weblate.example.com",
            "token": "wlu_token",
            "project": "proj",
            "file_format": "json",
            "main_language": "en",
            "master_branch": "master",
            "keysets_path": self.keysets_path,
            "git_repo": GIT_REPO,
            "branch_name": "master",
            "needs_push_policy": NeedsPushPolicy.FAIL,
        }
        if mode != SyncMode.SYNC_MASTER:
            defaults.update(
                {
                    "branch_name": "feature-x",
                    "pull_request_number": 42,
                    "pull_request_author": "octocat",
                }
            )
        defaults.update(kwargs)
        return Configuration(**defaults)
