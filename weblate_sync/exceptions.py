# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations


class WeblateSyncError(Exception):
    """Base class for synchronization errors."""

    def __init__(self, message=None) -> None:
        super().__init__(message or self.__doc__)


class ConfigurationError(WeblateSyncError):
    """Synchronization is not properly configured."""


class ComponentNotFoundError(WeblateSyncError):
    """Component does not exist in Weblate."""

    def __init__(self, name: str, category_slug: str | None = None) -> None:
        super().__init__(
            f"Not found component {name} (category slug: {category_slug})"
        )
        self.name = name
        self.category_slug = category_slug


class TaskTimeoutError(WeblateSyncError):
    """Timed out waiting for component tasks to finish."""

    def __init__(self, category_slug: str | None, pending: list[str]) -> None:
        super().__init__(
            f"Long wait for unlocking components in category '{category_slug}': "
            + ", ".join(pending)
        )
        self.category_slug = category_slug
        self.pending = pending
