"""Utility functions for Drawer"""

from .image_utils import DecodeError, decode_image, read_image_bytes, fit_rect, qimage_to_array
from .color_utils import normalize_color, hex_to_rgb, contrasting_text_color
from .file_utils import ensure_parent_exists, get_unique_path
from .logging_config import LoggingConfig

__all__ = [
    # Image utilities
    'DecodeError',
    'decode_image',
    'read_image_bytes',
    'fit_rect',
    'qimage_to_array',
    # Color utilities
    'normalize_color',
    'hex_to_rgb',
    'contrasting_text_color',
    # File utilities
    'ensure_parent_exists',
    'get_unique_path',
    # Logging
    'LoggingConfig',
]
