# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Discovery of components from the keyset directory layout."""

from __future__ import annotations

import os
from typing import NamedTuple

from weblate_sync.api.normalizers import slugify
from weblate_sync.exceptions import ConfigurationError
from weblate_sync.logger import LOGGER

# Separator of pull request number in names of feature branch objects
PR_SEPARATOR = "__"

FORMAT_EXTENSIONS = {
    "json": ".json",
    "json-nested": ".json",
    "i18next": ".json",
    "i18nextv4": ".json",
    "go-i18n-json": ".json",
    "webextension": ".json",
    "arb": ".arb",
    "po": ".po",
    "po-mono": ".po",
    "yaml": ".yml",
    "ruby-yaml": ".yml",
    "properties": ".properties",
    "xliff": ".xlf",
    "strings": ".strings",
    "aresource": ".xml",
}


class ComponentInCode(NamedTuple):
    """Component as defined by a keyset directory."""

    name: str
    source: str
    file_mask: str


def get_file_extension(file_format: str) -> str:
    return FORMAT_EXTENSIONS.get(file_format, ".json")


def resolve_components(
    keysets_path: str, main_language: str = "en", file_format: str = "json"
) -> list[ComponentInCode]:
    """
    List components for keyset directories, ordered by name.

    The first component becomes main component of newly created categories,
    so the ordering has to stay stable across runs.
    """
    full_path = os.path.join(os.getcwd(), keysets_path)
    if not os.path.isdir(full_path):
        msg = f"Keysets directory {keysets_path} does not exist"
        raise ConfigurationError(msg)

    extension = get_file_extension(file_format)
    with os.scandir(full_path) as entries:
        names = sorted(
            entry.name
            for entry in entries
            if entry.is_dir() and not entry.name.startswith(".")
        )

    if not names:
        msg = f"Keysets directory {keysets_path} does not contain any keyset"
        raise ConfigurationError(msg)

    check_slugs(names)

    components = [
        ComponentInCode(
            name=name,
            source=os.path.join(keysets_path, name, f"{main_language}{extension}"),
            file_mask=os.path.join(keysets_path, name, f"*{extension}"),
        )
        for name in names
    ]
    LOGGER.info("found keysets: %s", ", ".join(names))
    return components


def check_slugs(names: list[str]) -> None:
    """Ensure every keyset maps to its own Weblate component."""
    seen: dict[str, str] = {}
    for name in names:
        slug = slugify(name)
        if slug in seen:
            msg = (
                f"Keysets {seen[slug]} and {name} would share component slug {slug}"
            )
            raise ConfigurationError(msg)
        seen[slug] = name


def strip_pull_request_suffix(name: str) -> str:
    return name.split(PR_SEPARATOR)[0]


def get_pull_request_name(name: str, pull_request_number: int | None) -> str:
    """Return name of object isolated for a pull request."""
    if pull_request_number is None:
        return name
    return f"{name}{PR_SEPARATOR}{pull_request_number}"
