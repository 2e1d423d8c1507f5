# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Normalization of Weblate API responses and slug handling."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from django.utils.text import slugify as django_slugify

from weblate_sync.exceptions import ConfigurationError

LINK_SCHEME = "weblate://"

# Keys holding URLs which are used as they are
RAW_KEYS = {"url", "web_url", "next", "previous"}


def get_url_last_part(url: str) -> str:
    parts = [part for part in url.split("/") if part]
    if not parts:
        raise ValueError(f"Could not parse identifier from {url!r}")
    return parts[-1]


def is_api_url(value: str) -> bool:
    return value.startswith("http") and "/api/" in value


def normalize_data(value: Any) -> Any:
    """
    Normalize decoded API response.

    Hyperlinks to other API objects are replaced by their identifier (last
    path segment), objects lacking ``id`` get one from their ``url``.
    """
    if isinstance(value, list):
        return [normalize_data(item) for item in value]
    if isinstance(value, str):
        return get_url_last_part(value) if is_api_url(value) else value
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            if key in RAW_KEYS:
                result[key] = item
            else:
                result[key] = normalize_data(item)
        if "id" in result:
            result["id"] = str(result["id"])
        elif isinstance(value.get("url"), str):
            result["id"] = get_url_last_part(value["url"])
        return result
    return value


def slugify(value: str) -> str:
    """
    Convert name to a slug the way Weblate does.

    The conversion is idempotent, slugifying a slug returns it unchanged.
    """
    slug = django_slugify(value)
    if not slug:
        msg = f"Can not derive slug from {value!r}, use ASCII letters or digits"
        raise ConfigurationError(msg)
    return slug


def get_component_slug(name: str, category_slug: str | None = None) -> str:
    """Return URL path segment addressing component, optionally in a category."""
    slug = slugify(name)
    if category_slug:
        # Weblate expects the category separator escaped twice
        return quote(f"{category_slug}%2F{slug}", safe="")
    return quote(slug, safe="")


def get_link_url(project: str, category_slug: str, component_slug: str) -> str:
    """Return internal Weblate URL used to link to another component."""
    return f"{LINK_SCHEME}{project}/{category_slug}/{component_slug}"


def is_link(component: dict) -> bool:
    return (component.get("repo") or "").startswith(LINK_SCHEME)
