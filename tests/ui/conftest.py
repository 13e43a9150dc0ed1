"""Qt fixtures for the widget tests in this package."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

# No display on headless Linux: render offscreen unless a platform is chosen.
_HEADLESS = sys.platform.startswith("linux") and not (
    os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")
)
if _HEADLESS:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication(["gambit-tests"])
    assert isinstance(app, QApplication)
    return app


@pytest.fixture(autouse=True)
def _close_windows(qapp: QApplication) -> Iterator[None]:
    """Close whatever top-level widgets a test left open."""
    yield
    for widget in qapp.topLevelWidgets():
        widget.close()
        widget.deleteLater()
    qapp.processEvents()
