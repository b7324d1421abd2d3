import os
import sys
from pathlib import Path

# Headless Qt for widget and painter tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Allow importing photo_drawer from repository root
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from PyQt6.QtCore import QBuffer, QByteArray, QCoreApplication, QIODevice
from PyQt6.QtGui import QColor, QImage
from PyQt6.QtWidgets import QApplication

from photo_drawer.events.event_bus import EventBus


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def make_image():
    def _make(width: int, height: int, color: str = "#ffffff") -> QImage:
        image = QImage(width, height, QImage.Format.Format_RGB32)
        image.fill(QColor(color))
        return image
    return _make


@pytest.fixture
def make_image_bytes(make_image):
    def _make(width: int, height: int, color: str = "#ffffff", fmt: str = "PNG") -> bytes:
        data = QByteArray()
        buffer = QBuffer(data)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        assert make_image(width, height, color).save(buffer, fmt)
        buffer.close()
        return bytes(data)
    return _make


@pytest.fixture
def drain():
    """Wait for thread pools, then deliver queued cross-thread signals."""
    def _drain(*pools):
        for pool in pools:
            assert pool.waitForDone(5000)
        for _ in range(3):
            QCoreApplication.processEvents()
    return _drain


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def library_dir(tmp_path, monkeypatch):
    target = tmp_path / "library"
    monkeypatch.setenv("DRAWER_LIBRARY_DIR", str(target))
    return target
