"""Shared fixtures for the PathViz test suite."""

import pytest


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication so QObject timers and signals have an event loop owner."""
    from PySide6.QtCore import QCoreApplication
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
