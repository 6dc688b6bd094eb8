"""Shared fixtures — Qt runs headless on the offscreen platform."""

import os

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

import pytest

SAMPLE_MAKEFILE = (
    "VERSION = 5\n"
    "PATCHLEVEL = 10\n"
    "SUBLEVEL = 7\n"
    "NAME = Kleptomaniac Octopus\n"
)

# Head of the real Makefile during an -rc cycle
UPSTREAM_MAKEFILE_HEAD = (
    "# SPDX-License-Identifier: GPL-2.0\n"
    "VERSION = 6\n"
    "PATCHLEVEL = 12\n"
    "SUBLEVEL = 0\n"
    "EXTRAVERSION = -rc3\n"
    "NAME = Baby Opossum Posse\n"
    "\n"
    "# *DOCUMENTATION*\n"
    "# To see a list of typical targets exe"
)


@pytest.fixture(scope='session')
def qapp():
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def sample_makefile():
    return SAMPLE_MAKEFILE


@pytest.fixture
def upstream_makefile_head():
    return UPSTREAM_MAKEFILE_HEAD
