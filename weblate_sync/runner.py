# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import argparse
import json
import logging
import sys

from weblate_sync.api.client import WeblateClient
from weblate_sync.config import get_configuration
from weblate_sync.exceptions import ConfigurationError
from weblate_sync.logger import LOGGER
from weblate_sync.reporting.github import get_reporter, publish_result, set_failed
from weblate_sync.sync.defines import SyncMode
from weblate_sync.sync.modes import run_mode
from weblate_sync.utils.environment import get_env_bool, get_input_bool
from weblate_sync.utils.errors import init_sentry, report_error
from weblate_sync.utils.version import VERSION


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weblate-sync",
        description="Synchronize Weblate categories and components with branches",
    )
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SyncMode],
        help="Synchronization mode, derived from the GitHub event by default",
    )
    parser.add_argument("--keysets-path", help="Directory with keysets")
    parser.add_argument("--branch", dest="branch_name", help="Branch name")
    parser.add_argument(
        "--pull-request",
        dest="pull_request_number",
        type=int,
        help="Pull request number",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def setup_logging(verbose: bool) -> None:
    if not LOGGER.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )
        LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG if verbose else logging.INFO)


def main(argv=None) -> int:
    args = get_parser().parse_args(argv)
    setup_logging(
        args.verbose or get_input_bool("debug") or get_env_bool("RUNNER_DEBUG")
    )

    try:
        config = get_configuration(vars(args))
    except ConfigurationError as error:
        LOGGER.error("%s", error)
        set_failed(str(error))
        return 1

    init_sentry(config.sentry_dsn)
    LOGGER.info("Config:\n%s", json.dumps(config.as_log_dict(), indent=4))

    weblate = WeblateClient(
        server_url=config.server_url,
        token=config.token,
        project=config.project,
        file_format=config.file_format,
        main_language=config.main_language,
        wait_attempts=config.wait_attempts,
        wait_delay=config.wait_delay,
        list_attempts=config.list_attempts,
        list_delay=config.list_delay,
    )

    try:
        result = run_mode(config, weblate)
    except ConfigurationError as error:
        LOGGER.error("%s", error)
        set_failed(str(error))
        return 1
    except Exception as error:
        report_error(
            "Synchronization failed",
            level="error",
            category_slug=getattr(error, "category_slug", None),
        )
        set_failed(f"Synchronization failed: {error}")
        raise

    if result.failed:
        try:
            publish_result(result, config, get_reporter(config))
        except Exception:
            report_error("Publishing results failed", level="error")
            raise
        return 1
    LOGGER.info("synchronization of %s finished", config.branch_name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
