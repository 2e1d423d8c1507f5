# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
import sys
from typing import Literal

import sentry_sdk
from sentry_sdk.integrations.logging import ignore_logger

from weblate_sync.utils.version import USER_AGENT

ERROR_LOGGER = "weblate_sync.errors"

LOGGER = logging.getLogger(ERROR_LOGGER)

SENTRY_ENABLED = False


def report_error(
    cause: str,
    *,
    level: Literal[
        "fatal", "critical", "error", "warning", "info", "debug"
    ] = "warning",
    category_slug: str | None = None,
) -> None:
    """
    Report errors.

    Logs the currently handled exception and forwards it to Sentry when it
    was configured using :func:`init_sentry`.
    """
    __traceback_hide__ = True  # noqa: F841
    if SENTRY_ENABLED:
        sentry_sdk.set_tag("cause", cause)
        if category_slug is not None:
            sentry_sdk.set_tag("category", category_slug)
        sentry_sdk.set_level(level)
        sentry_sdk.capture_exception()

    log = getattr(LOGGER, level)

    error = sys.exc_info()[1]
    if error:
        log("%s: %s: %s", cause, error.__class__.__name__, error)
    else:
        log("%s", cause)


def add_breadcrumb(category: str, message: str, level: str = "info", **data) -> None:
    if not SENTRY_ENABLED:
        return
    sentry_sdk.add_breadcrumb(
        category=category, message=message, level=level, data=data
    )


def init_sentry(dsn: str | None) -> None:
    global SENTRY_ENABLED  # noqa: PLW0603

    if not dsn:
        return
    sentry_sdk.init(
        dsn=dsn,
        release=USER_AGENT,
        in_app_include=["weblate_sync"],
        attach_stacktrace=True,
    )
    # Errors are captured explicitly in report_error
    ignore_logger(ERROR_LOGGER)
    SENTRY_ENABLED = True
