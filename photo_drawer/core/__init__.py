"""Core drawing state and export logic"""

from .stroke_canvas_state import Point, Stroke, CanvasState, active_color
from .export_compositor import (
    ExportError,
    calculate_transformations,
    map_point,
    map_stroke_points,
    paint_polyline,
    RasterCanvas,
    export_image,
    export_state,
)

__all__ = [
    'Point',
    'Stroke',
    'CanvasState',
    'active_color',
    'ExportError',
    'calculate_transformations',
    'map_point',
    'map_stroke_points',
    'paint_polyline',
    'RasterCanvas',
    'export_image',
    'export_state',
]
