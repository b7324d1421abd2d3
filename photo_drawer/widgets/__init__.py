"""UI Widgets for Drawer"""

from .main_window import MainWindow
from .drawing_canvas import DrawingCanvas
from .drawing_toolbar import DrawingToolbar

__all__ = [
    'MainWindow',
    'DrawingCanvas',
    'DrawingToolbar',
]
