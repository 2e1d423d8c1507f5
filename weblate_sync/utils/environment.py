# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from weblate_sync.exceptions import ConfigurationError


def get_input_name(name: str) -> str:
    """Return environment variable name GitHub Actions uses for an input."""
    return "INPUT_{}".format(name.replace(" ", "_").upper())


def get_env_str(
    name: str,
    default: str | None = None,
    required: bool = False,
) -> str | None:
    file_env = f"{name}_FILE"
    if filename := os.environ.get(file_env):
        try:
            result = Path(filename).read_text().strip()
        except OSError as error:
            msg = f"Failed to open {filename} as specified by {file_env}: {error}"
            raise ConfigurationError(msg) from error
    else:
        result = os.environ.get(name, default)
    if required and not result:
        msg = f"{name} has to be configured!"
        raise ConfigurationError(msg)
    return result


def get_env_int_or_none(name: str) -> int | None:
    """Get integer value from environment."""
    string_value = get_env_str(name)
    if not string_value:
        return None
    try:
        return int(string_value)
    except ValueError as error:
        msg = f"{name} is not an integer: {error}"
        raise ConfigurationError(msg) from error


def get_env_int(name: str, default: int = 0) -> int:
    """Get integer value from environment."""
    env_int = get_env_int_or_none(name)
    if env_int is not None:
        return env_int
    return default


def get_env_float(name: str, default: float = 0.0) -> float:
    """Get float value from environment."""
    string_value = get_env_str(name)
    if not string_value:
        return default
    try:
        return float(string_value)
    except ValueError as error:
        msg = f"{name} is not an float: {error}"
        raise ConfigurationError(msg) from error


def get_env_bool(name: str, default: bool = False) -> bool:
    """Get boolean value from environment."""
    string_value = get_env_str(name)
    if not string_value:
        return default
    true_values = {"true", "yes", "1"}
    return string_value.lower() in true_values


def get_input(
    name: str, default: str | None = None, required: bool = False
) -> str | None:
    """Get GitHub Actions input, the empty string counts as not set."""
    return get_env_str(get_input_name(name), default, required) or default


def get_input_int(name: str, default: int = 0) -> int:
    return get_env_int(get_input_name(name), default)


def get_input_float(name: str, default: float = 0.0) -> float:
    return get_env_float(get_input_name(name), default)


def get_input_bool(name: str, default: bool = False) -> bool:
    return get_env_bool(get_input_name(name), default)


def get_event_payload() -> dict[str, Any]:
    """Load webhook payload of the event which triggered the workflow."""
    filename = os.environ.get("GITHUB_EVENT_PATH")
    if not filename:
        return {}
    try:
        with open(filename, encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as error:
        msg = f"Failed to load event payload from {filename}: {error}"
        raise ConfigurationError(msg) from error
