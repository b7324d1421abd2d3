"""
Drawer - Main Entry Point

Single-screen photo annotation tool.

Usage:
    python -m photo_drawer.main
"""

import sys

from PyQt6.QtWidgets import QApplication

from .config import Config
from .events.event_bus import get_event_bus
from .utils.logging_config import LoggingConfig


def setup_application() -> QApplication:
    """
    Initialize and configure the Qt application

    Returns:
        Configured QApplication instance
    """
    app = QApplication.instance() or QApplication(sys.argv)

    # Set application metadata
    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    app.setOrganizationName(Config.APP_AUTHOR)

    # Initialize event bus (singleton)
    get_event_bus()

    return app


def main():
    """
    Main entry point for Drawer

    Creates the application, sets up the main window, and runs the event loop.
    """
    # Setup logging first
    LoggingConfig.setup_logging(Config.get_log_dir())

    logger = LoggingConfig.get_logger(__name__)
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}...")
    logger.info(f"Log file: {LoggingConfig.get_log_file_path()}")
    logger.info(f"Photo library: {Config.get_photo_library_path()}")

    app = setup_application()

    # Create and show main window
    from .widgets.main_window import MainWindow
    window = MainWindow()
    window.show()

    logger.info("Application started successfully!")

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
