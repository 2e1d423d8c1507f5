# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import requests
from requests import Response

from weblate_sync.logger import LOGGER
from weblate_sync.utils.version import USER_AGENT

# Weblate can take a while to answer on large projects
DEFAULT_TIMEOUT = 120


def get_session(headers: dict[str, str] | None = None) -> requests.Session:
    """Return session carrying our User-Agent and given default headers."""
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    if headers:
        session.headers.update(headers)
    return session


def request(
    method: str,
    url: str,
    *,
    session: requests.Session | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    raise_for_status: bool = True,
    **kwargs,
) -> Response:
    LOGGER.debug("HTTP %s %s", method.upper(), url)
    if session is None:
        agent = {"User-Agent": USER_AGENT}
        if headers is None:
            headers = agent
        else:
            headers.update(agent)
        response = requests.request(
            method, url, headers=headers, timeout=timeout, **kwargs
        )
    else:
        response = session.request(
            method, url, headers=headers, timeout=timeout, **kwargs
        )
    if raise_for_status:
        response.raise_for_status()
    return response
