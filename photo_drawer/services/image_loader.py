"""
ImageLoader - Async image file loading with QThreadPool

Pattern: Background loading with QRunnable workers

Only the most recent request is delivered: when the user picks another
file before an earlier read finishes, the earlier result is dropped.
Decoding happens on the receiving (UI) side so that a decode failure
can leave the current canvas untouched.
"""

import logging
import time
from pathlib import Path
from typing import Dict, Optional, Union

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from ..config import Config
from ..utils.image_utils import read_image_bytes

logger = logging.getLogger(__name__)


class ImageLoadSignals(QObject):
    """Signals for ImageLoadTask"""

    load_complete = pyqtSignal(int, object, float)  # request_id, bytes, elapsed_ms
    load_failed = pyqtSignal(int, str)  # request_id, error_message


class ImageLoadTask(QRunnable):
    """
    Background task reading the raw bytes of one image file

    Usage:
        task = ImageLoadTask(request_id, image_path)
        threadpool.start(task)
    """

    def __init__(self, request_id: int, image_path: Path):
        super().__init__()
        self.request_id = request_id
        self.image_path = image_path
        self.signals = ImageLoadSignals()
        self.start_time = time.time()

    def run(self):
        """Execute image loading task"""
        try:
            data = read_image_bytes(self.image_path)
        except OSError as e:
            self.signals.load_failed.emit(
                self.request_id,
                f"Could not read {self.image_path.name}: {e}"
            )
            return

        elapsed_ms = (time.time() - self.start_time) * 1000
        self.signals.load_complete.emit(self.request_id, data, elapsed_ms)


class ImageLoader(QObject):
    """
    Manages async image loading with last-request-wins delivery

    Usage:
        loader = ImageLoader()
        loader.image_data_ready.connect(on_bytes)
        loader.load(path)
    """

    # Signals (latest request only)
    image_data_ready = pyqtSignal(object)  # bytes
    load_failed = pyqtSignal(str)  # error_message

    def __init__(self, parent: Optional[QObject] = None, thread_pool: Optional[QThreadPool] = None):
        super().__init__(parent)

        self.thread_pool = thread_pool or QThreadPool(self)
        self.thread_pool.setMaxThreadCount(Config.LOADER_THREAD_COUNT)

        self._latest_request_id = 0
        self._resolved_request_id = 0
        self._active_tasks: Dict[int, ImageLoadTask] = {}

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    @property
    def is_pending(self) -> bool:
        """True while the most recent request has not been delivered."""
        return self._resolved_request_id < self._latest_request_id

    def load(self, image_path: Union[str, Path]) -> int:
        """
        Start reading an image file in the background.

        Supersedes any earlier request.

        Args:
            image_path: Path to the image file

        Returns:
            Request id of this load
        """
        self._latest_request_id += 1
        request_id = self._latest_request_id

        task = ImageLoadTask(request_id, Path(image_path))
        task.signals.load_complete.connect(self._on_load_complete)
        task.signals.load_failed.connect(self._on_load_failed)
        self._active_tasks[request_id] = task

        logger.debug(f"Loading image #{request_id}: {image_path}")
        self.thread_pool.start(task)
        return request_id

    def _on_load_complete(self, request_id: int, data: bytes, elapsed_ms: float):
        """Handle finished read"""
        self._active_tasks.pop(request_id, None)

        if request_id != self._latest_request_id:
            logger.debug(f"Dropping superseded image load #{request_id}")
            return

        self._resolved_request_id = request_id
        logger.debug(f"Image #{request_id} read: {len(data)} bytes in {elapsed_ms:.1f} ms")
        self.image_data_ready.emit(data)

    def _on_load_failed(self, request_id: int, error_message: str):
        """Handle failed read"""
        self._active_tasks.pop(request_id, None)

        if request_id != self._latest_request_id:
            logger.debug(f"Ignoring failure of superseded image load #{request_id}")
            return

        self._resolved_request_id = request_id
        logger.warning(error_message)
        self.load_failed.emit(error_message)


__all__ = ['ImageLoader', 'ImageLoadTask', 'ImageLoadSignals']
