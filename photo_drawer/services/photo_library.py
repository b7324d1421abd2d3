"""
Photo Library - Save flattened images to the user's picture folder

Saving is fire-and-forget for the caller: the write happens on a worker
thread and the outcome is reported through save_finished / save_failed.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import cv2
from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal
from PyQt6.QtGui import QImage

from ..config import Config
from ..utils.file_utils import ensure_parent_exists, get_unique_path
from ..utils.image_utils import qimage_to_array

logger = logging.getLogger(__name__)


def generate_export_filename(extension: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Generate a filename for an exported image.

    Format: drawer_YYYYmmdd_HHMMSS.{extension}

    Args:
        extension: File extension without dot (defaults to configured format)
        now: Timestamp to use (defaults to current time)

    Returns:
        Filename (not full path)
    """
    extension = (extension or Config.get_export_extension()).lstrip('.')
    timestamp = (now or datetime.now()).strftime('%Y%m%d_%H%M%S')
    return f"{Config.EXPORT_FILE_PREFIX}_{timestamp}.{extension}"


def write_image(image: QImage, path: Path, quality: int = Config.JPEG_QUALITY) -> Path:
    """
    Encode and write an image with OpenCV.

    JPEG output drops the alpha channel and honors quality; other
    formats keep BGRA.

    Args:
        image: Image to write
        path: Output path (extension selects the encoder)
        quality: JPEG quality 0-100

    Returns:
        The written path

    Raises:
        ValueError: If image is null
        OSError: If the encoder fails
    """
    if image is None or image.isNull():
        raise ValueError("Cannot write a null image")

    array = qimage_to_array(image)
    params = []
    if path.suffix.lower() in ('.jpg', '.jpeg'):
        array = cv2.cvtColor(array, cv2.COLOR_BGRA2BGR)
        params = [cv2.IMWRITE_JPEG_QUALITY, int(quality)]

    ensure_parent_exists(path)
    if not cv2.imwrite(str(path), array, params):
        raise OSError(f"Could not write image: {path}")

    return path


class SaveImageSignals(QObject):
    """Signals for SaveImageTask"""

    save_complete = pyqtSignal(str)  # file path
    save_failed = pyqtSignal(str)  # error_message


class SaveImageTask(QRunnable):
    """Background task writing one image into the library folder"""

    def __init__(self, image: QImage, library_dir: Optional[Path], extension: str):
        super().__init__()
        self.image = image.copy()
        self.library_dir = library_dir
        self.extension = extension
        self.signals = SaveImageSignals()

    def run(self):
        """Execute save task"""
        try:
            library_dir = self.library_dir or Config.get_photo_library_dir()
            target = get_unique_path(library_dir / generate_export_filename(self.extension))
            write_image(self.image, target)
        except (OSError, ValueError, cv2.error) as e:
            self.signals.save_failed.emit(f"Save failed: {e}")
            return

        self.signals.save_complete.emit(str(target))


class PhotoLibrary(QObject):
    """
    Sink for flattened images

    Usage:
        library = PhotoLibrary()
        library.save_finished.connect(on_saved)
        library.save_image(image)
    """

    save_finished = pyqtSignal(str)  # file path
    save_failed = pyqtSignal(str)  # error_message

    def __init__(
        self,
        library_dir: Optional[Path] = None,
        parent: Optional[QObject] = None,
        extension: Optional[str] = None
    ):
        super().__init__(parent)
        self._library_dir = Path(library_dir) if library_dir else None
        self._extension = extension or Config.get_export_extension()

        # Single worker keeps saves ordered and file names collision-free
        self.thread_pool = QThreadPool(self)
        self.thread_pool.setMaxThreadCount(1)
        self._pending_count = 0

    @property
    def library_dir(self) -> Path:
        """Target folder (Config default when not given; created on first save)."""
        return self._library_dir or Config.get_photo_library_path()

    @property
    def pending_count(self) -> int:
        return self._pending_count

    def save_image(self, image: QImage):
        """
        Queue image for saving.

        Raises:
            ValueError: If image is null
        """
        if image is None or image.isNull():
            raise ValueError("Cannot save a null image")

        task = SaveImageTask(image, self._library_dir, self._extension)
        task.signals.save_complete.connect(self._on_save_complete)
        task.signals.save_failed.connect(self._on_save_failed)

        self._pending_count += 1
        logger.debug(f"Saving {image.width()}x{image.height()} image to {self.library_dir}")
        self.thread_pool.start(task)

    def _on_save_complete(self, path: str):
        self._pending_count -= 1
        logger.info(f"Saved image: {path}")
        self.save_finished.emit(path)

    def _on_save_failed(self, error_message: str):
        self._pending_count -= 1
        logger.warning(error_message)
        self.save_failed.emit(error_message)


__all__ = [
    'PhotoLibrary',
    'SaveImageTask',
    'generate_export_filename',
    'write_image',
]
