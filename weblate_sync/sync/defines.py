# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from enum import Enum


class SyncMode(Enum):
    SYNC_MASTER = "sync-master"
    VALIDATE_PULL_REQUEST = "validate-pr"
    REMOVE_BRANCH = "remove-branch"


class NeedsPushPolicy(Enum):
    # Report and stop evaluating further checks
    FAIL = "fail"
    # Report, evaluate remaining checks, the run still fails
    CONTINUE = "continue"
