"""
Image utilities for decoding, framing and conversion

Pattern: Image loading helpers
"""

from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QImage


class DecodeError(Exception):
    """Raised when bytes cannot be decoded into an image."""
    pass


def decode_image(data: Optional[Union[bytes, bytearray]]) -> QImage:
    """
    Decode encoded image bytes into a QImage.

    Args:
        data: Raw encoded image bytes (PNG, JPEG, ...)

    Returns:
        Decoded QImage

    Raises:
        DecodeError: If data is empty or not a readable image
    """
    if not data:
        raise DecodeError("No image data")

    image = QImage.fromData(bytes(data))
    if image.isNull():
        raise DecodeError(f"Could not decode image ({len(data)} bytes)")

    return image


def read_image_bytes(image_path: Path) -> bytes:
    """
    Read raw bytes of an image file.

    Args:
        image_path: Path to image file

    Returns:
        File contents

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: On read errors
    """
    if not image_path.exists():
        raise FileNotFoundError(f"Image file not found: {image_path}")
    return image_path.read_bytes()


def fit_rect(width: float, height: float, frame_size: float) -> QRectF:
    """
    Get the rect an image occupies when scaled to fit a square frame.

    The longer side fills the frame and the shorter side is centered.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        frame_size: Frame side length

    Returns:
        Target rect in frame coordinates
    """
    if width <= 0 or height <= 0:
        return QRectF(0, 0, frame_size, frame_size)

    if width > height:
        shown_height = frame_size * height / width
        return QRectF(0, (frame_size - shown_height) / 2, frame_size, shown_height)

    shown_width = frame_size * width / height
    return QRectF((frame_size - shown_width) / 2, 0, shown_width, frame_size)


def qimage_to_array(image: QImage) -> np.ndarray:
    """
    Convert a QImage to a BGRA uint8 array (OpenCV channel order).

    Args:
        image: Source QImage

    Returns:
        Array of shape (height, width, 4)
    """
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width, height = rgba.width(), rgba.height()

    ptr = rgba.constBits()
    ptr.setsize(rgba.sizeInBytes())
    rows = np.frombuffer(ptr, dtype=np.uint8).reshape((height, rgba.bytesPerLine()))
    array = rows[:, :width * 4].reshape((height, width, 4)).copy()

    return cv2.cvtColor(array, cv2.COLOR_RGBA2BGRA)


__all__ = [
    'DecodeError',
    'decode_image',
    'read_image_bytes',
    'fit_rect',
    'qimage_to_array',
]
