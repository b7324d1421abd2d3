"""
EventBus - Central event system for the drawing screen

Pattern: Observer/Publisher-Subscriber
"""

from PyQt6.QtCore import QObject, pyqtSignal
from typing import Optional


class EventBus(QObject):
    """
    Central event bus for decoupled communication between components

    Usage:
        event_bus = get_event_bus()
        event_bus.strokes_changed.connect(some_handler)
        event_bus.set_stroke_count(3)
    """

    # Image events
    image_changed = pyqtSignal(int, int)  # width, height

    # Stroke events
    strokes_changed = pyqtSignal(int)  # committed stroke count

    # Tool setting events
    drawing_mode_changed = pyqtSignal(bool)  # True = draw, False = erase
    color_changed = pyqtSignal(str)  # '#rrggbb'
    line_width_changed = pyqtSignal(float)

    # Export events
    export_finished = pyqtSignal(str)  # saved file path

    # Loading state events
    loading_started = pyqtSignal(str)  # operation_name
    loading_finished = pyqtSignal(str)  # operation_name

    # Error events
    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    def __init__(self):
        super().__init__()

        # State storage
        self._stroke_count: int = 0
        self._is_drawing: bool = True
        self._color: str = ""
        self._line_width: float = 0.0

    # Getters (read current state)

    def get_stroke_count(self) -> int:
        """Get last announced committed stroke count"""
        return self._stroke_count

    def is_drawing_mode(self) -> bool:
        """Check if draw (not erase) mode is active"""
        return self._is_drawing

    def get_color(self) -> str:
        """Get last announced draw color"""
        return self._color

    def get_line_width(self) -> float:
        """Get last announced line width"""
        return self._line_width

    # Setters (update state and emit signals)

    def set_image(self, width: int, height: int):
        """
        Announce a newly selected image

        Args:
            width: Native image width
            height: Native image height
        """
        self.image_changed.emit(width, height)

    def set_stroke_count(self, count: int):
        """
        Announce the committed stroke count

        Emits on every call, since a new image resets the count to 0
        even when it was already 0.
        """
        self._stroke_count = count
        self.strokes_changed.emit(count)

    def set_drawing_mode(self, is_drawing: bool):
        """
        Set draw/erase mode

        Args:
            is_drawing: True to draw, False to erase
        """
        if self._is_drawing != is_drawing:
            self._is_drawing = is_drawing
            self.drawing_mode_changed.emit(is_drawing)

    def set_color(self, color: str):
        """
        Set draw color

        Args:
            color: '#rrggbb' color string
        """
        if self._color != color:
            self._color = color
            self.color_changed.emit(color)

    def set_line_width(self, width: float):
        """
        Set line width

        Args:
            width: Line width in preview units
        """
        if self._line_width != width:
            self._line_width = width
            self.line_width_changed.emit(width)

    # Convenience methods

    def report_error(self, error_type: str, message: str):
        """
        Report an error to the UI

        Args:
            error_type: Type of error (e.g., "load", "decode", "export", "save")
            message: Human-readable error message
        """
        self.error_occurred.emit(error_type, message)

    def report_export(self, path: str):
        """Signal that a flattened image was saved"""
        self.export_finished.emit(path)

    def start_loading(self, operation: str):
        """Signal that a background operation has started"""
        self.loading_started.emit(operation)

    def finish_loading(self, operation: str):
        """Signal that a background operation has finished"""
        self.loading_finished.emit(operation)


# Singleton instance (lazy initialization)
_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global EventBus singleton instance

    Returns:
        Global EventBus instance
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


# Export
__all__ = ['EventBus', 'get_event_bus']
