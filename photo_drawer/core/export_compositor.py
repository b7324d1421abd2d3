"""
Export Compositor - Burn strokes into the full-resolution image

Strokes are captured in the square preview frame, where the image is
shown scaled to fit and centered. Exporting maps every stroke point back
into native image pixels and rasterizes the polylines onto a copy of the
source image.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QImage, QPainter, QPainterPath, QPen, QColor

from ..config import Config
from .stroke_canvas_state import CanvasState, Point, Stroke

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when the flattened image cannot be produced."""
    pass


def calculate_transformations(
    width: float,
    height: float,
    frame_size: float = Config.FRAME_SIZE
) -> Tuple[float, float, float]:
    """
    Compute the preview-to-native mapping for an image.

    The longer image side spans the whole frame; the offset re-centers
    the shorter side.

    Args:
        width: Native image width
        height: Native image height
        frame_size: Preview frame side length

    Returns:
        Tuple of (scale, tx, ty), tx/ty in native pixels
    """
    if frame_size <= 0:
        raise ValueError(f"Frame size must be positive, got {frame_size}")

    tx = 0.0
    ty = 0.0
    if width > height:
        scale = width / frame_size
        ty = (width - height) / 2
    else:
        scale = height / frame_size
        tx = (height - width) / 2
    return scale, tx, ty


def map_point(point: Point, scale: float, tx: float, ty: float) -> Point:
    """Map a preview-frame point to native image coordinates."""
    return (point[0] * scale - tx, point[1] * scale - ty)


def map_stroke_points(
    points: Iterable[Point],
    scale: float,
    tx: float,
    ty: float
) -> List[Point]:
    """Map every point of a polyline to native image coordinates."""
    return [map_point(p, scale, tx, ty) for p in points]


def paint_polyline(painter: QPainter, points: Sequence[Point], color: str, width: float):
    """
    Stroke a polyline with round caps and joins.

    A polyline that never leaves its first point is drawn as a filled
    dot of the stroke width.
    """
    if not points:
        return

    qcolor = QColor(color)
    first = points[0]

    if all(p == first for p in points[1:]):
        radius = width / 2.0
        painter.setPen(QPen(Qt.PenStyle.NoPen))
        painter.setBrush(qcolor)
        painter.drawEllipse(QPointF(first[0], first[1]), radius, radius)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        return

    pen = QPen(qcolor, width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    painter.setPen(pen)
    painter.setBrush(Qt.BrushStyle.NoBrush)

    path = QPainterPath()
    path.moveTo(first[0], first[1])
    for x, y in points[1:]:
        path.lineTo(x, y)
    painter.drawPath(path)


class RasterCanvas:
    """
    Drawing surface holding a copy of the source image.

    Usage:
        canvas = RasterCanvas(image)
        canvas.draw_polyline([(0, 0), (10, 10)], '#ff0000', 4.0)
        canvas.end()
        result = canvas.image()
    """

    def __init__(self, source: QImage):
        if source is None or source.isNull():
            raise ExportError("No image to draw on")

        self._image = source.copy().convertToFormat(QImage.Format.Format_ARGB32)
        if self._image.isNull():
            raise ExportError(
                f"Could not allocate drawing surface ({source.width()}x{source.height()})"
            )

        self._painter = QPainter()
        if not self._painter.begin(self._image):
            raise ExportError("Could not start painting on drawing surface")
        self._painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    def draw_polyline(self, points: Sequence[Point], color: str, width: float):
        """Stroke a polyline in native image coordinates."""
        if not self._painter.isActive():
            raise ExportError("Drawing surface is already closed")
        paint_polyline(self._painter, points, color, width)

    def end(self):
        """Finish painting. Safe to call more than once."""
        if self._painter.isActive():
            self._painter.end()

    def image(self) -> QImage:
        """Get the surface contents (ends painting first)."""
        self.end()
        return self._image


def export_image(
    image: QImage,
    strokes: Sequence[Stroke],
    line_width: float,
    frame_size: float = Config.FRAME_SIZE
) -> QImage:
    """
    Flatten strokes onto a full-resolution copy of image.

    Strokes are drawn oldest first so later strokes cover earlier ones.
    The source image is not modified.

    Args:
        image: Source image at native resolution
        strokes: Committed strokes in preview-frame coordinates
        line_width: Line width in preview units, applied to every stroke
        frame_size: Preview frame side length

    Returns:
        Flattened image

    Raises:
        ExportError: If no image is loaded or the surface fails
    """
    if image is None or image.isNull():
        raise ExportError("No image loaded")

    scale, tx, ty = calculate_transformations(image.width(), image.height(), frame_size)
    native_width = line_width * scale

    canvas = RasterCanvas(image)
    try:
        for stroke in strokes:
            native_points = map_stroke_points(stroke.points, scale, tx, ty)
            canvas.draw_polyline(native_points, stroke.color, native_width)
    finally:
        canvas.end()

    logger.debug(
        f"Flattened {len(strokes)} strokes onto {image.width()}x{image.height()} "
        f"(scale={scale:.3f}, tx={tx:.1f}, ty={ty:.1f})"
    )
    return canvas.image()


def export_state(state: CanvasState, frame_size: float = Config.FRAME_SIZE) -> QImage:
    """Flatten a canvas state using its live line width."""
    return export_image(state.image, state.strokes, state.line_width, frame_size)


__all__ = [
    'ExportError',
    'calculate_transformations',
    'map_point',
    'map_stroke_points',
    'paint_polyline',
    'RasterCanvas',
    'export_image',
    'export_state',
]
