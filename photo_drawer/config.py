"""
Global configuration for Drawer

Preview frame geometry, stroke defaults and the folders the app writes to.
"""

import os
import sys
from pathlib import Path
from typing import Final


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Drawer"
    APP_VERSION: Final[str] = "1.0.0"
    APP_AUTHOR: Final[str] = "Drawer"

    # Preview frame (square, side length in preview units)
    FRAME_SIZE: Final[int] = 300

    # Stroke settings
    DEFAULT_LINE_WIDTH: Final[float] = 20.0
    MIN_LINE_WIDTH: Final[float] = 1.0
    MAX_LINE_WIDTH: Final[float] = 60.0
    DEFAULT_DRAW_COLOR: Final[str] = "#000000"
    ERASE_COLOR: Final[str] = "#ffffff"

    # Background loading
    LOADER_THREAD_COUNT: Final[int] = 2

    # Export settings
    EXPORT_FORMAT: Final[str] = "png"  # "png" or "jpg"
    JPEG_QUALITY: Final[int] = 95
    EXPORT_FILE_PREFIX: Final[str] = "drawer"

    # Picker
    SUPPORTED_IMAGE_FILTER: Final[str] = (
        "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp);;All Files (*)"
    )

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 420
    DEFAULT_WINDOW_HEIGHT: Final[int] = 440

    # Environment overrides
    LIBRARY_DIR_ENV: Final[str] = "DRAWER_LIBRARY_DIR"
    LOG_FILE_NAME: Final[str] = "drawer.log"

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows), Application Support (macOS)
        or .local/share (Linux).
        """
        if sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / cls.APP_NAME
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / cls.APP_NAME
        else:
            # Linux / Unix
            user_dir = Path.home() / '.local' / 'share' / cls.APP_NAME

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get log directory"""
        log_dir = cls.get_user_data_dir() / 'logs'
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    @classmethod
    def get_photo_library_path(cls) -> Path:
        """
        Get the folder flattened images are saved into, without creating it.

        DRAWER_LIBRARY_DIR overrides the default ~/Pictures/Drawer.
        """
        override = os.environ.get(cls.LIBRARY_DIR_ENV)
        if override:
            return Path(override).expanduser()
        return Path.home() / 'Pictures' / cls.APP_NAME

    @classmethod
    def get_photo_library_dir(cls) -> Path:
        """
        Get the photo library folder.

        Auto-creates if it doesn't exist.

        Raises:
            OSError: If the folder cannot be created
        """
        library_dir = cls.get_photo_library_path()
        library_dir.mkdir(parents=True, exist_ok=True)
        return library_dir

    @classmethod
    def get_export_extension(cls) -> str:
        """Get file extension for exported images"""
        fmt = cls.EXPORT_FORMAT.lower()
        if fmt not in ('png', 'jpg'):
            raise ValueError(f"Unsupported export format: {cls.EXPORT_FORMAT}")
        return fmt


__all__ = ['Config']
