"""
Stroke canvas state - the image being annotated and its strokes

Tracks:
- The currently loaded image (replaced wholesale per selection)
- Committed strokes, in commit (back-to-front) order
- The in-progress stroke built from one drag gesture
- Draw/erase mode, chosen color, erase color and line width

Strokes are recorded in preview-frame coordinates. Line width is not
stored per stroke: the live value applies to every stroke when the
canvas is rendered or exported.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from PyQt6.QtGui import QImage

from ..config import Config
from ..utils.color_utils import ColorLike, normalize_color
from ..utils.image_utils import decode_image

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class Stroke:
    """One committed freehand polyline with a fixed color."""
    points: Tuple[Point, ...]
    color: str

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_degenerate(self) -> bool:
        """True when the stroke never moves away from its first point."""
        if not self.points:
            return True
        first = self.points[0]
        return all(p == first for p in self.points[1:])


def active_color(is_drawing: bool, chosen_color: str, erase_color: str) -> str:
    """
    Get the color a new stroke is committed with.

    Args:
        is_drawing: True in draw mode, False in erase mode
        chosen_color: Color picked by the user
        erase_color: Fixed erase color

    Returns:
        chosen_color when drawing, erase_color otherwise
    """
    return chosen_color if is_drawing else erase_color


def _as_point(point: Union[Point, List[float]]) -> Point:
    return (float(point[0]), float(point[1]))


class CanvasState:
    """
    Owned, mutable state of the single drawing screen.

    Gesture contract: start_gesture -> extend_stroke* -> commit_stroke.

    Usage:
        state = CanvasState()
        state.select_image(data)
        state.start_gesture((10, 10))
        state.extend_stroke((20, 15))
        stroke = state.commit_stroke()
    """

    def __init__(
        self,
        chosen_color: ColorLike = Config.DEFAULT_DRAW_COLOR,
        erase_color: ColorLike = Config.ERASE_COLOR,
        line_width: float = Config.DEFAULT_LINE_WIDTH,
    ):
        self._image: Optional[QImage] = None
        self._strokes: List[Stroke] = []
        self._current_points: List[Point] = []
        self._is_drawing = True
        self._chosen_color = normalize_color(chosen_color)
        self._erase_color = normalize_color(erase_color)
        self._line_width = Config.DEFAULT_LINE_WIDTH
        self.set_line_width(line_width)

    # ==================== Properties ====================

    @property
    def image(self) -> Optional[QImage]:
        return self._image

    @property
    def has_image(self) -> bool:
        return self._image is not None

    @property
    def strokes(self) -> Tuple[Stroke, ...]:
        return tuple(self._strokes)

    @property
    def current_points(self) -> Tuple[Point, ...]:
        return tuple(self._current_points)

    @property
    def is_stroke_in_progress(self) -> bool:
        return bool(self._current_points)

    @property
    def is_drawing(self) -> bool:
        return self._is_drawing

    @property
    def chosen_color(self) -> str:
        return self._chosen_color

    @property
    def erase_color(self) -> str:
        return self._erase_color

    @property
    def current_color(self) -> str:
        """Color the in-progress stroke will be committed with."""
        return active_color(self._is_drawing, self._chosen_color, self._erase_color)

    @property
    def line_width(self) -> float:
        return self._line_width

    def stroke_count(self) -> int:
        return len(self._strokes)

    def total_points(self) -> int:
        return sum(len(stroke) for stroke in self._strokes)

    # ==================== Image ====================

    def select_image(self, data: bytes) -> QImage:
        """
        Decode image bytes and make the result the current image.

        Clears committed and in-progress strokes on success. On failure
        the previous image and strokes are left untouched.

        Args:
            data: Raw encoded image bytes

        Returns:
            The decoded image

        Raises:
            DecodeError: If the bytes are not a valid image
        """
        image = decode_image(data)

        self._image = image
        self.clear_strokes()
        logger.debug(f"Image selected: {image.width()}x{image.height()}")
        return image

    def clear_strokes(self):
        """Drop committed and in-progress strokes."""
        self._strokes.clear()
        self._current_points = []

    # ==================== Strokes ====================

    def begin_stroke(self, point: Point):
        """Start a stroke at point, or extend the one in progress."""
        self._current_points.append(_as_point(point))

    def extend_stroke(self, point: Point):
        """Append point to the in-progress stroke (no-op if none)."""
        if not self._current_points:
            return
        self._current_points.append(_as_point(point))

    def start_gesture(self, point: Point):
        """Begin a fresh stroke at point, discarding any unfinished one."""
        if self._current_points:
            logger.debug(f"Discarding unfinished stroke ({len(self._current_points)} points)")
        self._current_points = []
        self.begin_stroke(point)

    def commit_stroke(self) -> Optional[Stroke]:
        """
        Move the in-progress stroke into the committed list.

        Returns:
            The committed stroke, or None if no stroke was in progress
        """
        if not self._current_points:
            return None

        stroke = Stroke(points=tuple(self._current_points), color=self.current_color)
        self._strokes.append(stroke)
        self._current_points = []
        return stroke

    # ==================== Settings ====================

    def set_mode(self, is_drawing: bool):
        """Switch between drawing (True) and erasing (False)."""
        self._is_drawing = bool(is_drawing)

    def set_color(self, color: ColorLike):
        """
        Set the chosen draw color.

        Raises:
            ValueError: If color is not a valid color
        """
        self._chosen_color = normalize_color(color)

    def set_line_width(self, width: float):
        """Set the shared line width, clamped to the configured range."""
        self._line_width = max(Config.MIN_LINE_WIDTH, min(Config.MAX_LINE_WIDTH, float(width)))


__all__ = ['Point', 'Stroke', 'CanvasState', 'active_color']
