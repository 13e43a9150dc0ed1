"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from gambit.ui.settings import AppSettings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)


def _configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from gambit.ui.theme import APP_STYLE

    app.setApplicationName("Gambit")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from gambit.ui.main_window import MainWindow

    settings = settings or AppSettings()
    _configure_logging(settings)

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()
    _LOGGER.info("Main window shown")

    return app.exec()
