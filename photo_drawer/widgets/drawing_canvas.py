"""
DrawingCanvas - Square preview frame with freehand stroke input

Shows the current image scaled to fit the frame and centered, with all
strokes drawn on top using the live line width. Mouse drags are
forwarded to the controller as gesture events in frame coordinates.
"""

from typing import Optional

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter, QColor, QMouseEvent

from ..config import Config
from ..core.export_compositor import paint_polyline
from ..utils.image_utils import fit_rect
from .controllers.drawer_controller import DrawerController


class DrawingCanvas(QWidget):
    """
    Fixed-size preview frame for drawing over the selected photo.

    Usage:
        canvas = DrawingCanvas(controller)
        layout.addWidget(canvas)
    """

    BACKGROUND_COLOR = '#2d2d2d'
    PLACEHOLDER_COLOR = '#9e9e9e'

    def __init__(self, controller: DrawerController, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._controller = controller
        self._frame_size = Config.FRAME_SIZE

        self.setFixedSize(self._frame_size, self._frame_size)
        self.setCursor(Qt.CursorShape.CrossCursor)

        self._controller.state_changed.connect(self.update)

    @property
    def frame_size(self) -> int:
        return self._frame_size

    # ==================== Mouse Events ====================

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self._controller.start_gesture((pos.x(), pos.y()))
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if event.buttons() & Qt.MouseButton.LeftButton:
            pos = event.position()
            self._controller.extend_gesture((pos.x(), pos.y()))
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self._controller.end_gesture()
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    # ==================== Painting ====================

    def paintEvent(self, event):
        """Draw image, committed strokes and the stroke in progress."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), QColor(self.BACKGROUND_COLOR))

        state = self._controller.state
        image = state.image
        if image is None:
            painter.setPen(QColor(self.PLACEHOLDER_COLOR))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "Select a photo")
            painter.end()
            return

        painter.drawImage(fit_rect(image.width(), image.height(), self._frame_size), image)

        width = state.line_width
        for stroke in state.strokes:
            paint_polyline(painter, stroke.points, stroke.color, width)

        if state.is_stroke_in_progress:
            paint_polyline(painter, state.current_points, state.current_color, width)

        painter.end()


__all__ = ['DrawingCanvas']
