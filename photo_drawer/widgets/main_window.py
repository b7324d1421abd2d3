"""
MainWindow - Main application window

Pattern: QMainWindow with a single drawing screen

Layout:
    +-----------------------------+
    |  DrawingCanvas (F x F)      |
    +-----------------------------+
    |  DrawingToolbar             |
    +-----------------------------+
    |  Status bar                 |
    +-----------------------------+
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QStatusBar, QFileDialog
)
from PyQt6.QtCore import Qt

from ..config import Config
from ..events.event_bus import EventBus, get_event_bus
from .controllers import DrawerController
from .drawing_canvas import DrawingCanvas
from .drawing_toolbar import DrawingToolbar

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window

    Features:
    - Preview frame with freehand drawing
    - Toolbar (select, save, draw/erase, color, line width)
    - Status bar for load/save progress and errors
    - Event bus integration
    """

    def __init__(
        self,
        controller: Optional[DrawerController] = None,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self._event_bus = event_bus or get_event_bus()
        self._controller = controller or DrawerController(event_bus=self._event_bus, parent=self)

        self._setup_window()
        self._create_widgets()
        self._create_layout()
        self._connect_signals()

    def _setup_window(self):
        """Configure window properties"""
        self.setWindowTitle(f"{Config.APP_NAME} v{Config.APP_VERSION}")
        self.resize(Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

    def _create_widgets(self):
        """Create all widgets"""
        self._canvas = DrawingCanvas(self._controller)
        self._toolbar = DrawingToolbar()

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Select a photo to start drawing")

    def _create_layout(self):
        """Create main layout"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(8)
        layout.addWidget(self._canvas, alignment=Qt.AlignmentFlag.AlignHCenter)
        layout.addWidget(self._toolbar)
        layout.addStretch()

    def _connect_signals(self):
        """Connect signals and slots"""
        # Toolbar -> controller
        self._toolbar.select_clicked.connect(self._on_select_clicked)
        self._toolbar.save_clicked.connect(self._on_save_clicked)
        self._toolbar.mode_changed.connect(self._controller.set_mode)
        self._toolbar.color_changed.connect(self._controller.set_color)
        self._toolbar.line_width_changed.connect(self._controller.set_line_width)

        # Event bus -> UI
        self._event_bus.image_changed.connect(self._on_image_changed)
        self._event_bus.strokes_changed.connect(self._on_strokes_changed)
        self._event_bus.loading_started.connect(self._on_loading_started)
        self._event_bus.export_finished.connect(self._on_export_finished)
        self._event_bus.error_occurred.connect(self._on_error)

    # ==================== Handlers ====================

    def _on_select_clicked(self):
        """Open the photo picker"""
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Photo",
            "",
            Config.SUPPORTED_IMAGE_FILTER
        )
        if not file_path:
            self._status_bar.showMessage("Selection cancelled", 3000)
            return
        self._controller.select_file(file_path)

    def _on_save_clicked(self):
        self._controller.save()

    def _on_image_changed(self, width: int, height: int):
        self._toolbar.set_save_enabled(True)
        self._status_bar.showMessage(f"Photo loaded ({width}x{height})")

    def _on_strokes_changed(self, count: int):
        if count:
            self._status_bar.showMessage(f"{count} stroke{'s' if count != 1 else ''}")

    def _on_loading_started(self, operation: str):
        if operation == "image":
            self._status_bar.showMessage("Loading photo...")
        elif operation == "save":
            self._status_bar.showMessage("Saving...")

    def _on_export_finished(self, path: str):
        self._status_bar.showMessage(f"Saved to {path}", 5000)

    def _on_error(self, error_type: str, message: str):
        logger.debug(f"{error_type} error shown to user: {message}")
        self._status_bar.showMessage(message, 5000)


__all__ = ['MainWindow']
