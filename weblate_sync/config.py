# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Configuration loaded from GitHub Actions inputs and the triggering event."""

from __future__ import annotations

import os
from typing import Any, NamedTuple

from weblate_sync.exceptions import ConfigurationError
from weblate_sync.sync.defines import NeedsPushPolicy, SyncMode
from weblate_sync.utils.environment import (
    get_env_str,
    get_event_payload,
    get_input,
    get_input_bool,
    get_input_float,
    get_input_int,
)

SECRET_FIELDS = {"token", "github_token", "sentry_dsn"}


class Configuration(NamedTuple):
    mode: SyncMode
    server_url: str
    token: str
    project: str
    file_format: str
    main_language: str
    master_branch: str
    keysets_path: str | None
    git_repo: str | None
    branch_name: str
    pull_request_number: int | None = None
    pull_request_author: str | None = None
    github_token: str | None = None
    github_repository: str | None = None
    github_api_url: str = "https://api.github.com"
    wait_attempts: int = 20
    wait_delay: float = 10
    list_attempts: int = 5
    list_delay: float = 2
    needs_push_policy: NeedsPushPolicy = NeedsPushPolicy.FAIL
    sentry_dsn: str | None = None

    def as_log_dict(self) -> dict[str, Any]:
        """Return configuration suitable for logging."""
        result = {}
        for key, value in self._asdict().items():
            if key in SECRET_FIELDS and value:
                value = "***"
            elif isinstance(value, (SyncMode, NeedsPushPolicy)):
                value = value.value
            result[key] = value
        return result


def get_mode(event_name: str | None, payload: dict[str, Any]) -> SyncMode:
    """Derive synchronization mode from the triggering event."""
    if event_name == "push":
        return SyncMode.SYNC_MASTER
    if event_name in {"pull_request", "pull_request_target"}:
        if payload.get("action") == "closed":
            return SyncMode.REMOVE_BRANCH
        return SyncMode.VALIDATE_PULL_REQUEST
    msg = f"Can not derive mode from event {event_name!r}, please configure mode"
    raise ConfigurationError(msg)


def parse_mode(value: str) -> SyncMode:
    try:
        return SyncMode(value)
    except ValueError as error:
        choices = ", ".join(mode.value for mode in SyncMode)
        msg = f"Unsupported mode {value!r}, use one of: {choices}"
        raise ConfigurationError(msg) from error


def parse_needs_push_policy(value: str) -> NeedsPushPolicy:
    try:
        return NeedsPushPolicy(value)
    except ValueError as error:
        choices = ", ".join(policy.value for policy in NeedsPushPolicy)
        msg = f"Unsupported needsPushPolicy {value!r}, use one of: {choices}"
        raise ConfigurationError(msg) from error


def get_branch_name(payload: dict[str, Any]) -> str | None:
    if "pull_request" in payload:
        return payload["pull_request"]["head"]["ref"]
    if ref_name := os.environ.get("GITHUB_REF_NAME"):
        return ref_name
    ref = os.environ.get("GITHUB_REF", "")
    if ref.startswith("refs/heads/"):
        return ref[len("refs/heads/") :]
    return None


def get_repository_url(payload: dict[str, Any], use_ssh: bool) -> str | None:
    """Return URL of the repository the event was triggered for."""
    if "pull_request" in payload:
        repository = payload["pull_request"].get("head", {}).get("repo")
    else:
        repository = payload.get("repository")
    if not repository:
        return None
    return repository.get("ssh_url" if use_ssh else "clone_url")


def get_pull_request_number(payload: dict[str, Any]) -> int | None:
    value = get_input("pullRequestNumber")
    if value:
        try:
            return int(value)
        except ValueError as error:
            msg = f"pullRequestNumber is not an integer: {error}"
            raise ConfigurationError(msg) from error
    if "pull_request" in payload:
        return payload["pull_request"]["number"]
    return None


def get_configuration(overrides: dict[str, Any] | None = None) -> Configuration:
    """
    Build configuration from the environment.

    Values in ``overrides`` (typically coming from command line) take
    precedence over the inputs.
    """
    overrides = {key: value for key, value in (overrides or {}).items() if value}
    payload = get_event_payload()

    if "mode" in overrides:
        mode = parse_mode(overrides["mode"])
    elif mode_input := get_input("mode"):
        mode = parse_mode(mode_input)
    else:
        mode = get_mode(os.environ.get("GITHUB_EVENT_NAME"), payload)

    master_branch = get_input("masterBranch", "master")
    branch_name = (
        overrides.get("branch_name")
        or get_input("branchName")
        or get_branch_name(payload)
    )
    if not branch_name:
        msg = "Could not determine branch name, please configure branchName"
        raise ConfigurationError(msg)

    pull_request_number = overrides.get("pull_request_number")
    if pull_request_number is None:
        pull_request_number = get_pull_request_number(payload)
    pull_request_author = get_input("pullRequestAuthor")
    if not pull_request_author and "pull_request" in payload:
        pull_request_author = payload["pull_request"].get("user", {}).get("login")

    keysets_path = overrides.get("keysets_path") or get_input("keysetsPath")
    git_repo = get_input("gitRepo") or get_repository_url(
        payload, get_input_bool("useSshGitRepo")
    )

    if mode == SyncMode.SYNC_MASTER and branch_name != master_branch:
        msg = (
            f"Branch {branch_name!r} does not match master branch {master_branch!r}"
        )
        raise ConfigurationError(msg)
    if mode != SyncMode.SYNC_MASTER and pull_request_number is None:
        msg = f"Mode {mode.value} requires pull request number"
        raise ConfigurationError(msg)
    if mode != SyncMode.REMOVE_BRANCH:
        if not keysets_path:
            msg = "keysetsPath has to be configured!"
            raise ConfigurationError(msg)
        if not git_repo:
            msg = "Could not resolve repository URL for the triggering event"
            raise ConfigurationError(msg)

    return Configuration(
        mode=mode,
        server_url=get_input("serverUrl", required=True),
        token=get_input("token", required=True),
        project=get_input("project", required=True),
        file_format=get_input("fileFormat", "json"),
        main_language=get_input("mainLanguage", "en"),
        master_branch=master_branch,
        keysets_path=keysets_path,
        git_repo=git_repo,
        branch_name=branch_name,
        pull_request_number=pull_request_number,
        pull_request_author=pull_request_author,
        github_token=get_input("githubToken"),
        github_repository=os.environ.get("GITHUB_REPOSITORY"),
        github_api_url=os.environ.get("GITHUB_API_URL", "https://api.github.com"),
        wait_attempts=get_input_int("waitAttempts", 20),
        wait_delay=get_input_float("waitDelay", 10),
        list_attempts=get_input_int("listAttempts", 5),
        list_delay=get_input_float("listDelay", 2),
        needs_push_policy=parse_needs_push_policy(
            get_input("needsPushPolicy", NeedsPushPolicy.FAIL.value)
        ),
        sentry_dsn=get_env_str("SENTRY_DSN"),
    )
