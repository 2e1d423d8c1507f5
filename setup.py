#!/usr/bin/env python3

# Copyright © Michal Čihař <michal@weblate.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

import os

from setuptools import find_packages, setup

with open(os.path.join(os.path.dirname(__file__), "README.md"), encoding="utf-8") as handle:
    LONG_DESCRIPTION = handle.read()

setup(
    name="weblate-sync",
    version="1.3.0",
    description="Synchronize Weblate categories and components with repository branches",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    license="GPL-3.0-or-later",
    python_requires=">=3.11",
    packages=find_packages(include=["weblate_sync", "weblate_sync.*"]),
    install_requires=[
        "Django>=5.1,<6",
        "requests>=2.32,<3",
        "sentry-sdk>=2.15,<3",
    ],
    extras_require={
        "test": [
            "pytest>=8",
            "responses>=0.25",
        ],
    },
    entry_points={
        "console_scripts": ["weblate-sync = weblate_sync.runner:main"],
    },
    classifiers=[
        "Environment :: Console",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Internationalization",
        "Topic :: Software Development :: Localization",
    ],
)
