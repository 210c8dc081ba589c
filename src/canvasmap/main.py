"""
Application Initialization
==========================
Creates the Qt application, the main window and starts the event loop.
"""
import logging
import sys

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

from canvasmap.config import APP_ID, ORG_ID, VISIBLE_APP_NAME, MapConfig
from canvasmap.logging_config import setup_logging
from canvasmap.view.main_window import MainWindow


def main() -> None:
    # Use logging.DEBUG to see click hit-tests
    setup_logging(level=logging.INFO)

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    config = MapConfig.from_settings(QSettings())

    window = MainWindow(config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
