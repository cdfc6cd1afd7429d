"""
Module: conftest.py

Author: Michael Economou
Date: 2026-03-02

Global pytest configuration and fixtures for the samplepool test suite.
Includes CI-friendly setup for PyQt5 testing and the fake collaborators
shared by the core tests.
"""

import os
import sys

# Add project root to sys.path so 'samplepool' imports without an install
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Widgets are created without a display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from samplepool.app.ports.ui_scheduler import ImmediateScheduler
from samplepool.core.browser_controller import DualPaneBrowser
from samplepool.core.transfer.queue_controller import TransferQueueController
from tests.mocks import POOL, SAMPLES, FakeFilesystem, FakeUserDialogs


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add custom markers if not already added via pyproject.toml
    config.addinivalue_line("markers", "gui: mark test as requiring GUI")
    config.addinivalue_line("markers", "local_only: mark test as local environment only")


def pytest_collection_modifyitems(session, config, items):
    """Modify test collection to handle CI environment."""
    _ = session
    _ = config

    is_ci = "CI" in os.environ or "GITHUB_ACTIONS" in os.environ

    if is_ci:
        skip_gui = pytest.mark.skip(reason="GUI tests don't work on CI")
        skip_local = pytest.mark.skip(reason="Local-only tests skipped on CI")

        for item in items:
            if "gui" in item.keywords:
                item.add_marker(skip_gui)
            if "local_only" in item.keywords:
                item.add_marker(skip_local)


@pytest.fixture(scope="session")
def ci_environment():
    """Fixture to detect CI environment."""
    return "CI" in os.environ or "GITHUB_ACTIONS" in os.environ


# -----------------------------------------------------------------------------
# Core fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def fake_fs():
    """In-memory filesystem with a samples folder and an empty pool."""
    return FakeFilesystem(
        {
            SAMPLES: [("drums", True), ("a.wav", False), ("b.wav", False), ("c.wav", False)],
            os.path.join(SAMPLES, "drums"): [("kick.wav", False)],
            POOL: [],
        },
        home=SAMPLES,
    )


@pytest.fixture
def dialogs():
    return FakeUserDialogs()


@pytest.fixture
def controller(fake_fs):
    return TransferQueueController(fake_fs)


@pytest.fixture
def browser(fake_fs, dialogs):
    """Browser with both panes loaded synchronously."""
    browser = DualPaneBrowser(fake_fs, ImmediateScheduler(), dialogs, POOL)
    browser.initialize(SAMPLES)
    return browser


# -----------------------------------------------------------------------------
# Qt fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication for all GUI tests."""
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])

    yield app


@pytest.fixture(autouse=True)
def qt_cleanup(request):
    """Close top-level widgets left behind by GUI tests."""
    yield

    if "gui" not in request.keywords:
        return

    from PyQt5.QtCore import QCoreApplication
    from PyQt5.QtWidgets import QApplication

    QCoreApplication.processEvents()
    for widget in QApplication.topLevelWidgets():
        try:
            widget.close()
            widget.deleteLater()
        except RuntimeError:
            pass
    QCoreApplication.processEvents()
