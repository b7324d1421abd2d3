"""Color conversion utilities

Strokes store colors as lowercase '#rrggbb' strings; these helpers
normalize user input (hex strings, QColor) into that form.
"""

from typing import Tuple, Union

from PyQt6.QtGui import QColor

ColorLike = Union[str, QColor]


def normalize_color(color: ColorLike) -> str:
    """Convert a hex string or QColor to a lowercase '#rrggbb' string

    Args:
        color: Hex color ('#AABBCC', 'AABBCC', '#abc') or QColor

    Returns:
        Hex color string (e.g., "#ff5733")

    Raises:
        ValueError: If the color is not valid

    Example:
        >>> normalize_color('#FFF')
        '#ffffff'
    """
    if isinstance(color, QColor):
        qcolor = QColor(color)
    else:
        text = str(color).strip()
        qcolor = QColor(text)
        # Bare hex digits ('AABBCC')
        if not qcolor.isValid() and text and not text.startswith('#'):
            qcolor = QColor('#' + text)

    if not qcolor.isValid():
        raise ValueError(f"Invalid color: {color!r}")

    return qcolor.name(QColor.NameFormat.HexRgb)


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Convert hex color to RGB tuple (0-255 range)

    Args:
        hex_color: Hex color string (e.g., '#AABBCC' or 'AABBCC')

    Returns:
        Tuple of (r, g, b) values in 0-255 range
    """
    hex_color = hex_color.lstrip('#')
    # Handle 3-digit hex codes
    if len(hex_color) == 3:
        hex_color = ''.join([c*2 for c in hex_color])
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def contrasting_text_color(hex_color: str) -> str:
    """Pick black or white text for a swatch of the given color"""
    r, g, b = hex_to_rgb(hex_color)
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return '#000000' if luminance > 140 else '#ffffff'


__all__ = ['normalize_color', 'hex_to_rgb', 'contrasting_text_color']
