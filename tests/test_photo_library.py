from datetime import datetime
from pathlib import Path

import cv2
import pytest
from PyQt6.QtGui import QImage

from photo_drawer.config import Config
from photo_drawer.services.photo_library import PhotoLibrary, generate_export_filename, write_image


@pytest.fixture
def library(tmp_path):
    photo_library = PhotoLibrary(library_dir=tmp_path / "library")
    results = {"saved": [], "errors": []}
    photo_library.save_finished.connect(results["saved"].append)
    photo_library.save_failed.connect(results["errors"].append)
    photo_library.results = results
    return photo_library


def test_generate_export_filename():
    stamp = datetime(2024, 12, 15, 14, 30, 22)

    assert generate_export_filename("png", now=stamp) == "drawer_20241215_143022.png"
    assert generate_export_filename(".jpg", now=stamp) == "drawer_20241215_143022.jpg"
    assert generate_export_filename(now=stamp).endswith("." + Config.get_export_extension())


def test_write_png_keeps_size_and_color(tmp_path, make_image):
    path = write_image(make_image(40, 20, "#ff0000"), tmp_path / "out" / "flat.png")

    array = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    assert array.shape == (20, 40, 4)
    assert tuple(array[10, 20]) == (0, 0, 255, 255)


def test_write_jpg_drops_alpha(tmp_path, make_image):
    path = write_image(make_image(40, 20, "#0000ff"), tmp_path / "flat.jpg", quality=90)

    array = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    assert array.shape == (20, 40, 3)
    assert array[10, 20][0] > 200


def test_write_null_image_raises(tmp_path):
    with pytest.raises(ValueError):
        write_image(QImage(), tmp_path / "flat.png")


def test_save_image_writes_into_library(library, drain, make_image):
    library.save_image(make_image(64, 48))
    assert library.pending_count == 1
    drain(library.thread_pool)

    assert library.results["errors"] == []
    assert len(library.results["saved"]) == 1
    saved = Path(library.results["saved"][0])
    assert saved.parent == library.library_dir
    assert saved.name.startswith(Config.EXPORT_FILE_PREFIX + "_")
    assert cv2.imread(str(saved)).shape[:2] == (48, 64)
    assert library.pending_count == 0


def test_back_to_back_saves_get_distinct_names(library, drain, make_image):
    library.save_image(make_image(8, 8))
    library.save_image(make_image(8, 8))
    drain(library.thread_pool)

    saved = library.results["saved"]
    assert len(saved) == 2
    assert len(set(saved)) == 2
    assert all(Path(p).exists() for p in saved)


def test_save_null_image_raises(library):
    with pytest.raises(ValueError):
        library.save_image(QImage())
    assert library.pending_count == 0


def test_library_dir_defaults_to_config(library_dir):
    assert PhotoLibrary().library_dir == library_dir
    assert not library_dir.exists()


def test_default_library_dir_is_created_on_save(library_dir, drain, make_image):
    photo_library = PhotoLibrary()
    saved = []
    photo_library.save_finished.connect(saved.append)

    photo_library.save_image(make_image(8, 8))
    drain(photo_library.thread_pool)

    assert library_dir.is_dir()
    assert [Path(p).parent for p in saved] == [library_dir]


def test_unusable_library_dir_reports_failure(tmp_path, monkeypatch, drain, make_image):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a folder")
    monkeypatch.setenv(Config.LIBRARY_DIR_ENV, str(blocker / "library"))
    photo_library = PhotoLibrary()
    errors = []
    photo_library.save_failed.connect(errors.append)

    photo_library.save_image(make_image(8, 8))
    drain(photo_library.thread_pool)

    assert len(errors) == 1
    assert photo_library.pending_count == 0
