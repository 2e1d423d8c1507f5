# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# weblate-sync version
VERSION = "1.3.0"

# User-Agent string to use
USER_AGENT = f"weblate-sync/{VERSION}"
