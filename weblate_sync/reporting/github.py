# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Publishing of results to GitHub."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from weblate_sync.utils.requests import request

from .messages import render_outcome

if TYPE_CHECKING:
    from weblate_sync.config import Configuration
    from weblate_sync.sync.outcomes import SyncResult

LOGGER = logging.getLogger("weblate_sync.reporting")


def escape_command_data(value: str) -> str:
    """Escape data of a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str) -> None:
    """Emit GitHub Actions error annotation."""
    sys.stdout.write(f"::error::{escape_command_data(message)}\n")
    sys.stdout.flush()


class GithubReporter:
    """Posts comments to GitHub pull requests."""

    def __init__(
        self, token: str, repository: str, api_url: str = "https://api.github.com"
    ) -> None:
        self.token = token
        self.repository = repository
        self.api_url = api_url.rstrip("/")

    def get_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github.v3+json",
            "Authorization": f"token {self.token}",
        }

    def create_comment(self, number: int, body: str) -> dict:
        url = f"{self.api_url}/repos/{self.repository}/issues/{number}/comments"
        LOGGER.info("commenting on pull request #%d", number)
        response = request(
            "post", url, headers=self.get_headers(), json={"body": body}
        )
        return response.json()


def get_reporter(config: Configuration) -> GithubReporter | None:
    if not config.github_token or not config.github_repository:
        return None
    return GithubReporter(
        config.github_token, config.github_repository, config.github_api_url
    )


def publish_result(
    result: SyncResult,
    config: Configuration,
    reporter: GithubReporter | None = None,
) -> None:
    """Report every outcome as a pull request comment and a failure annotation."""
    for outcome in result.outcomes:
        body = render_outcome(outcome)
        if reporter is not None and config.pull_request_number is not None:
            reporter.create_comment(config.pull_request_number, body)
        else:
            LOGGER.warning("not commenting on pull request, GitHub is not configured")
        set_failed(body)
