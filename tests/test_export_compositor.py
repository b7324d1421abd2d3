import pytest
from PyQt6.QtGui import QImage

from photo_drawer.core.export_compositor import (
    ExportError,
    RasterCanvas,
    calculate_transformations,
    export_image,
    export_state,
    map_point,
    map_stroke_points,
)
from photo_drawer.core.stroke_canvas_state import CanvasState, Stroke

WHITE = "#ffffff"
RED = "#ff0000"
BLUE = "#0000ff"


def _pixel(image, x, y):
    return image.pixelColor(x, y).name()


def _stroke(points, color=RED):
    return Stroke(points=tuple((float(x), float(y)) for x, y in points), color=color)


class TestTransformations:

    def test_portrait(self):
        scale, tx, ty = calculate_transformations(400, 800, 300)

        assert scale == pytest.approx(800 / 300)
        assert tx == pytest.approx(200)
        assert ty == 0

        x, y = map_point((100, 50), scale, tx, ty)
        assert x == pytest.approx(66.6667, abs=1e-3)
        assert y == pytest.approx(133.3333, abs=1e-3)

    def test_landscape(self):
        scale, tx, ty = calculate_transformations(800, 400, 300)

        assert scale == pytest.approx(800 / 300)
        assert tx == 0
        assert ty == pytest.approx(200)
        assert map_point((150, 150), scale, tx, ty) == pytest.approx((400, 200))

    def test_square_has_no_offset(self):
        scale, tx, ty = calculate_transformations(600, 600, 300)

        assert (scale, tx, ty) == (2.0, 0.0, 0.0)
        assert map_stroke_points([(0, 0), (300, 300)], scale, tx, ty) == [(0, 0), (600, 600)]

    def test_rejects_non_positive_frame(self):
        with pytest.raises(ValueError):
            calculate_transformations(100, 100, 0)


class TestExportImage:

    def test_no_image_raises(self):
        with pytest.raises(ExportError):
            export_image(None, [], 20.0)
        with pytest.raises(ExportError):
            export_image(QImage(), [], 20.0)

    def test_export_state_without_image_raises(self):
        with pytest.raises(ExportError):
            export_state(CanvasState())

    def test_output_matches_native_size_and_source_is_untouched(self, make_image):
        source = make_image(640, 480)

        result = export_image(source, [_stroke([(0, 150), (300, 150)])], 20.0)

        assert (result.width(), result.height()) == (640, 480)
        assert _pixel(result, 320, 240) == RED
        assert _pixel(source, 320, 240) == WHITE

    def test_stroke_width_is_scaled_to_native(self, make_image):
        # 600px square: scale 2, preview width 10 -> 20 native pixels
        source = make_image(600, 600)

        result = export_image(source, [_stroke([(50, 150), (250, 150)])], 10.0)

        assert _pixel(result, 300, 300) == RED
        assert _pixel(result, 300, 307) == RED
        assert _pixel(result, 300, 316) == WHITE

    def test_later_strokes_cover_earlier_ones(self, make_image):
        source = make_image(300, 300)
        strokes = [
            _stroke([(50, 150), (250, 150)], RED),
            _stroke([(150, 50), (150, 250)], BLUE),
        ]

        result = export_image(source, strokes, 10.0)

        assert _pixel(result, 150, 150) == BLUE
        assert _pixel(result, 80, 150) == RED

    def test_erase_stroke_paints_erase_color(self, make_image):
        source = make_image(300, 300, "#336699")

        result = export_image(source, [_stroke([(10, 10), (100, 10)], WHITE)], 8.0)

        assert _pixel(result, 50, 10) == WHITE
        assert _pixel(result, 50, 100) == "#336699"

    def test_tap_renders_dot(self, make_image):
        source = make_image(800, 400)

        # Landscape letterbox: preview (150, 150) lands at native (400, 200)
        result = export_image(source, [_stroke([(150, 150)])], 6.0)

        assert _pixel(result, 400, 200) == RED
        assert _pixel(result, 400, 240) == WHITE

    def test_line_width_is_read_at_export(self, make_image_bytes):
        state = CanvasState(chosen_color=RED, line_width=2.0)
        state.select_image(make_image_bytes(300, 300))
        state.start_gesture((50, 150))
        state.extend_stroke((250, 150))
        state.commit_stroke()

        thin = export_state(state)
        state.set_line_width(30.0)
        thick = export_state(state)

        assert _pixel(thin, 150, 160) == WHITE
        assert _pixel(thick, 150, 160) == RED


class TestRasterCanvas:

    def test_rejects_null_source(self):
        with pytest.raises(ExportError):
            RasterCanvas(QImage())

    def test_draw_after_end_raises(self, make_image):
        canvas = RasterCanvas(make_image(10, 10))
        canvas.end()
        canvas.end()

        with pytest.raises(ExportError):
            canvas.draw_polyline([(0, 0), (5, 5)], RED, 1.0)

    def test_image_ends_painting(self, make_image):
        canvas = RasterCanvas(make_image(20, 20))
        canvas.draw_polyline([(0, 10), (20, 10)], RED, 4.0)

        result = canvas.image()

        assert _pixel(result, 10, 10) == RED
        assert result.format() == QImage.Format.Format_ARGB32
