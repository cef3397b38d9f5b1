"""
Main entry point for the PassKeeper password manager.
"""

import sys
import signal
import logging
from typing import Optional
from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt

from passkeeper.ui import MainWindow
from passkeeper.storage import CredentialStore
from passkeeper import config

logger = logging.getLogger(__name__)


class PasswordManagerApp:
    """Main application class for the password manager."""

    def __init__(self):
        """Initialize the application."""
        self.app = QApplication.instance() or QApplication(sys.argv)
        self.app.setApplicationName(config.APP_NAME)
        self.app.setOrganizationName(config.APP_NAME)

        # Set application style
        self.app.setStyle(config.APP_STYLE)

        # Session state
        self.store = CredentialStore()
        self.main_window: Optional[MainWindow] = None

        # Handle Ctrl+C gracefully
        signal.signal(signal.SIGINT, signal.SIG_DFL)

    def run(self) -> int:
        """Run the application."""
        logger.info(f"Starting {config.APP_TITLE_PREFIX}")
        self.main_window = MainWindow(self.store)
        self.main_window.show()
        return self.app.exec_()

    def cleanup(self):
        """Clean up resources."""
        logger.info(f"Discarding {len(self.store)} credentials at session end")
        self.store.clear()


def main():
    """Main entry point."""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    # Enable high DPI scaling
    if hasattr(Qt, 'AA_EnableHighDpiScaling'):
        QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    if hasattr(Qt, 'AA_UseHighDpiPixmaps'):
        QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    # Create and run application
    app = PasswordManagerApp()

    try:
        return app.run()
    finally:
        app.cleanup()


if __name__ == "__main__":
    sys.exit(main())
