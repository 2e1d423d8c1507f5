# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from unittest import TestCase
from unittest.mock import patch

from weblate_sync.exceptions import TaskTimeoutError
from weblate_sync.utils import errors


class ReportErrorTest(TestCase):
    def test_log(self) -> None:
        with self.assertLogs(errors.ERROR_LOGGER, "ERROR") as logs:
            try:
                raise TaskTimeoutError("master", ["common", "errors"])
            except TaskTimeoutError:
                errors.report_error("Synchronization failed", level="error")
        self.assertEqual(
            logs.output,
            [
                "ERROR:weblate_sync.errors:Synchronization failed: TaskTimeoutError: "
                "Long wait for unlocking components in category 'master': "
                "common, errors"
            ],
        )

    def test_without_exception(self) -> None:
        with self.assertLogs(errors.ERROR_LOGGER, "WARNING") as logs:
            errors.report_error("Publishing")
        self.assertEqual(logs.output, ["WARNING:weblate_sync.errors:Publishing"])

    @patch.object(errors, "SENTRY_ENABLED", True)
    def test_sentry(self) -> None:
        with (
            patch("sentry_sdk.capture_exception") as capture_exception,
            patch("sentry_sdk.set_tag") as set_tag,
            self.assertLogs(errors.ERROR_LOGGER, "ERROR"),
        ):
            try:
                raise ValueError("broken")
            except ValueError:
                errors.report_error(
                    "Synchronization failed", level="error", category_slug="master"
                )
        capture_exception.assert_called_once()
        set_tag.assert_any_call("category", "master")

    def test_init_disabled(self) -> None:
        with patch("sentry_sdk.init") as init:
            errors.init_sentry(None)
        init.assert_not_called()
        self.assertFalse(errors.SENTRY_ENABLED)
