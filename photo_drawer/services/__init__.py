"""Background services for Drawer"""

from .image_loader import ImageLoader, ImageLoadTask
from .photo_library import PhotoLibrary, generate_export_filename, write_image

__all__ = [
    'ImageLoader',
    'ImageLoadTask',
    'PhotoLibrary',
    'generate_export_filename',
    'write_image',
]
