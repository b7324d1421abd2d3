import pytest
from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtGui import QMouseEvent

from photo_drawer.services.photo_library import PhotoLibrary
from photo_drawer.widgets import DrawingCanvas, MainWindow
from photo_drawer.widgets.controllers import DrawerController


def _mouse(kind, x, y, button=Qt.MouseButton.LeftButton, buttons=Qt.MouseButton.LeftButton):
    pos = QPointF(x, y)
    return QMouseEvent(kind, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


@pytest.fixture
def controller(tmp_path, event_bus):
    library = PhotoLibrary(library_dir=tmp_path / "library")
    return DrawerController(photo_library=library, event_bus=event_bus)


@pytest.fixture
def window(controller, event_bus):
    main_window = MainWindow(controller=controller, event_bus=event_bus)
    yield main_window
    main_window.close()


def test_canvas_turns_drag_into_stroke(controller, make_image_bytes):
    controller.select_image_data(make_image_bytes(300, 300))
    canvas = DrawingCanvas(controller)

    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 50, 150))
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 150, 150, button=Qt.MouseButton.NoButton))
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 250, 150, button=Qt.MouseButton.NoButton))
    canvas.mouseReleaseEvent(
        _mouse(QEvent.Type.MouseButtonRelease, 250, 150, buttons=Qt.MouseButton.NoButton)
    )

    (stroke,) = controller.state.strokes
    assert stroke.points == ((50.0, 150.0), (150.0, 150.0), (250.0, 150.0))


def test_canvas_ignores_hover(controller, make_image_bytes):
    controller.select_image_data(make_image_bytes(300, 300))
    canvas = DrawingCanvas(controller)

    canvas.mouseMoveEvent(_mouse(
        QEvent.Type.MouseMove, 10, 10,
        button=Qt.MouseButton.NoButton, buttons=Qt.MouseButton.NoButton
    ))

    assert not controller.state.is_stroke_in_progress


def test_canvas_paints_strokes_over_image(controller, make_image_bytes):
    controller.select_image_data(make_image_bytes(300, 300))
    controller.set_color("#ff0000")
    controller.start_gesture((50, 150))
    controller.extend_gesture((250, 150))
    controller.end_gesture()
    canvas = DrawingCanvas(controller)

    rendered = canvas.grab().toImage()

    assert rendered.pixelColor(150, 150).name() == "#ff0000"
    assert rendered.pixelColor(150, 50).name() == "#ffffff"


def test_toolbar_drives_controller(window, controller):
    toolbar = window._toolbar

    toolbar._width_slider.setValue(30)
    toolbar._draw_toggle.setChecked(False)

    assert controller.state.line_width == 30.0
    assert not controller.state.is_drawing


def test_save_enabled_after_image_loads(window, controller, make_image_bytes):
    assert not window._toolbar._save_btn.isEnabled()

    controller.select_image_data(make_image_bytes(20, 10))

    assert window._toolbar._save_btn.isEnabled()
    assert "20x10" in window.statusBar().currentMessage()


def test_errors_show_in_status_bar(window, controller):
    controller.save()

    assert window.statusBar().currentMessage() == "No image loaded"
