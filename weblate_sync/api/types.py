# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from typing import Generic, NotRequired, TypedDict, TypeVar

T = TypeVar("T")


class Paginated(TypedDict, Generic[T]):
    count: int
    next: str | None
    previous: str | None
    results: list[T]


class Category(TypedDict):
    id: str
    project: str
    name: str
    slug: str
    was_recently_created: NotRequired[bool]


class Component(TypedDict):
    id: str
    project: str
    name: str
    slug: str
    filemask: str
    repo: str
    template: str
    branch: NotRequired[str | None]
    addons: NotRequired[list[str]]
    category: NotRequired[str | None]
    task_url: NotRequired[str | None]
    git_export: NotRequired[str | None]
    linked_component: NotRequired[str | None]
    was_recently_created: NotRequired[bool]


class TranslationStats(TypedDict):
    code: str
    name: str
    url: str
    translated_percent: float
    total: NotRequired[int]
    translated: NotRequired[int]
    fuzzy: NotRequired[int]
    failing: NotRequired[int]
    approved: NotRequired[int]
    component_name: NotRequired[str]


class RepositoryStatus(TypedDict):
    needs_commit: bool
    needs_merge: bool
    needs_push: bool
    merge_failure: NotRequired[str | None]


class Addon(TypedDict):
    name: str
    configuration: NotRequired[dict[str, str | int]]
