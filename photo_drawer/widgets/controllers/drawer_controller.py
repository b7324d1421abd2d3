"""
DrawerController - Coordinates canvas state, loading and saving

Owns the CanvasState and is the only object that mutates it. Widgets
forward user input here; results are announced on the event bus.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QColor

from ...core.export_compositor import ExportError, export_state
from ...core.stroke_canvas_state import CanvasState, Point
from ...events.event_bus import EventBus, get_event_bus
from ...services.image_loader import ImageLoader
from ...services.photo_library import PhotoLibrary
from ...utils.image_utils import DecodeError

logger = logging.getLogger(__name__)


class DrawerController(QObject):
    """
    Drives the single drawing screen.

    Handles:
    - Picking a file and swapping in the decoded image
    - Gesture events building and committing strokes
    - Draw/erase mode, color and line width changes
    - Flattening and handing the result to the photo library
    """

    state_changed = pyqtSignal()  # canvas needs a repaint

    def __init__(
        self,
        state: Optional[CanvasState] = None,
        image_loader: Optional[ImageLoader] = None,
        photo_library: Optional[PhotoLibrary] = None,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QObject] = None
    ):
        """
        Initialize drawer controller.

        Args:
            state: Canvas state to drive (new one if omitted)
            image_loader: Background file reader
            photo_library: Sink for flattened images
            event_bus: Event bus for announcements
            parent: Parent QObject
        """
        super().__init__(parent)
        self._state = state or CanvasState()
        self._image_loader = image_loader or ImageLoader(self)
        self._photo_library = photo_library or PhotoLibrary(parent=self)
        self._event_bus = event_bus or get_event_bus()

        self._image_loader.image_data_ready.connect(self._on_image_data_ready)
        self._image_loader.load_failed.connect(self._on_load_failed)
        self._photo_library.save_finished.connect(self._on_save_finished)
        self._photo_library.save_failed.connect(self._on_save_failed)

        self._event_bus.set_drawing_mode(self._state.is_drawing)
        self._event_bus.set_color(self._state.chosen_color)
        self._event_bus.set_line_width(self._state.line_width)

    @property
    def state(self) -> CanvasState:
        return self._state

    @property
    def image_loader(self) -> ImageLoader:
        return self._image_loader

    @property
    def photo_library(self) -> PhotoLibrary:
        return self._photo_library

    # ==================== IMAGE SELECTION ====================

    def select_file(self, image_path: Union[str, Path]) -> int:
        """
        Start loading a picked file.

        The current image stays editable until the load resolves.

        Returns:
            Request id of the load
        """
        self._event_bus.start_loading("image")
        return self._image_loader.load(image_path)

    def select_image_data(self, data: bytes) -> bool:
        """
        Replace the current image with decoded bytes.

        Returns:
            True if the image was replaced, False on decode failure
        """
        try:
            image = self._state.select_image(data)
        except DecodeError as e:
            logger.warning(f"Selected file is not a valid image: {e}")
            self._event_bus.report_error("decode", str(e))
            return False

        self._event_bus.set_image(image.width(), image.height())
        self._event_bus.set_stroke_count(0)
        self.state_changed.emit()
        return True

    def _on_image_data_ready(self, data: bytes):
        self._event_bus.finish_loading("image")
        self.select_image_data(data)

    def _on_load_failed(self, error_message: str):
        self._event_bus.finish_loading("image")
        self._event_bus.report_error("load", error_message)

    # ==================== GESTURES ====================

    def start_gesture(self, point: Point):
        """Pointer pressed inside the preview frame."""
        if not self._state.has_image:
            return
        self._state.start_gesture(point)
        self.state_changed.emit()

    def extend_gesture(self, point: Point):
        """Pointer dragged."""
        if not self._state.is_stroke_in_progress:
            return
        self._state.extend_stroke(point)
        self.state_changed.emit()

    def end_gesture(self):
        """Pointer released."""
        stroke = self._state.commit_stroke()
        if stroke is None:
            return
        self._event_bus.set_stroke_count(self._state.stroke_count())
        self.state_changed.emit()

    # ==================== SETTINGS ====================

    def set_mode(self, is_drawing: bool):
        self._state.set_mode(is_drawing)
        self._event_bus.set_drawing_mode(self._state.is_drawing)
        self.state_changed.emit()

    def set_color(self, color: Union[str, QColor]):
        """
        Set the draw color.

        Raises:
            ValueError: If color is invalid
        """
        self._state.set_color(color)
        self._event_bus.set_color(self._state.chosen_color)
        self.state_changed.emit()

    def set_line_width(self, width: float):
        self._state.set_line_width(width)
        self._event_bus.set_line_width(self._state.line_width)
        self.state_changed.emit()

    # ==================== EXPORT ====================

    def save(self) -> bool:
        """
        Flatten the strokes and queue the result for the photo library.

        Returns:
            True if a save was queued, False if there was nothing to export
        """
        try:
            flattened = export_state(self._state)
        except ExportError as e:
            logger.warning(f"Export skipped: {e}")
            self._event_bus.report_error("export", str(e))
            return False

        self._event_bus.start_loading("save")
        self._photo_library.save_image(flattened)
        return True

    def _on_save_finished(self, path: str):
        self._event_bus.finish_loading("save")
        self._event_bus.report_export(path)

    def _on_save_failed(self, error_message: str):
        self._event_bus.finish_loading("save")
        self._event_bus.report_error("save", error_message)


__all__ = ['DrawerController']
