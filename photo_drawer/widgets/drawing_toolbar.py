"""
Drawing Toolbar Widget

Single-row toolbar under the preview frame with:
- Select (photo picker) and Save buttons
- Draw/erase toggle
- Color picker swatch
- Line width slider
"""

from typing import Optional

from PyQt6.QtWidgets import (
    QWidget, QHBoxLayout, QPushButton, QCheckBox, QLabel, QSlider, QColorDialog
)
from PyQt6.QtCore import pyqtSignal, Qt
from PyQt6.QtGui import QColor

from ..config import Config
from ..utils.color_utils import contrasting_text_color, normalize_color


class DrawingToolbar(QWidget):
    """Toolbar for the drawing screen."""

    # Signals
    select_clicked = pyqtSignal()
    save_clicked = pyqtSignal()
    mode_changed = pyqtSignal(bool)  # True = draw, False = erase
    color_changed = pyqtSignal(str)  # '#rrggbb'
    line_width_changed = pyqtSignal(float)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._color = normalize_color(Config.DEFAULT_DRAW_COLOR)

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Build the single-row toolbar UI."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        self._select_btn = QPushButton("Select")
        self._select_btn.setToolTip("Pick a photo (Ctrl+O)")
        self._select_btn.setShortcut("Ctrl+O")
        layout.addWidget(self._select_btn)

        self._save_btn = QPushButton("Save")
        self._save_btn.setToolTip("Save drawing to the photo library (Ctrl+S)")
        self._save_btn.setShortcut("Ctrl+S")
        self._save_btn.setEnabled(False)
        layout.addWidget(self._save_btn)

        self._draw_toggle = QCheckBox("Draw")
        self._draw_toggle.setToolTip("Checked: draw with the chosen color. Unchecked: erase")
        self._draw_toggle.setChecked(True)
        layout.addWidget(self._draw_toggle)

        self._color_btn = QPushButton()
        self._color_btn.setFixedSize(28, 28)
        self._color_btn.setToolTip("Stroke color")
        layout.addWidget(self._color_btn)
        self._update_color_button()

        self._width_slider = QSlider(Qt.Orientation.Horizontal)
        self._width_slider.setRange(int(Config.MIN_LINE_WIDTH), int(Config.MAX_LINE_WIDTH))
        self._width_slider.setValue(int(Config.DEFAULT_LINE_WIDTH))
        self._width_slider.setFixedWidth(80)
        self._width_slider.setToolTip(
            f"Line width ({int(Config.MIN_LINE_WIDTH)}-{int(Config.MAX_LINE_WIDTH)})"
        )
        layout.addWidget(self._width_slider)

        self._width_label = QLabel(str(int(Config.DEFAULT_LINE_WIDTH)))
        self._width_label.setFixedWidth(24)
        layout.addWidget(self._width_label)

        layout.addStretch()

    def _connect_signals(self):
        self._select_btn.clicked.connect(self.select_clicked.emit)
        self._save_btn.clicked.connect(self.save_clicked.emit)
        self._draw_toggle.toggled.connect(self.mode_changed.emit)
        self._color_btn.clicked.connect(self._pick_color)
        self._width_slider.valueChanged.connect(self._on_width_changed)

    # ==================== Handlers ====================

    def _pick_color(self):
        color = QColorDialog.getColor(QColor(self._color), self, "Stroke Color")
        if color.isValid():
            self.set_color(color.name())
            self.color_changed.emit(self._color)

    def _on_width_changed(self, value: int):
        self._width_label.setText(str(value))
        self.line_width_changed.emit(float(value))

    def _update_color_button(self):
        self._color_btn.setStyleSheet(
            f"background-color: {self._color}; "
            f"color: {contrasting_text_color(self._color)}; border: 1px solid #555;"
        )

    # ==================== Public API ====================

    def set_color(self, color: str):
        """Update the swatch without emitting color_changed."""
        self._color = normalize_color(color)
        self._update_color_button()

    def set_save_enabled(self, enabled: bool):
        self._save_btn.setEnabled(enabled)


__all__ = ['DrawingToolbar']
