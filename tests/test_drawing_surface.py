import io

from PIL import Image

from formula_pad.client.drawing_surface import DrawingSurface
from formula_pad.utils.pictures_utils import decode_data_url


def test_undo_on_empty_surface_is_noop():
    surface = DrawingSurface()
    surface.undo()
    assert surface.is_empty()


def test_undo_pops_last_stroke_only():
    surface = DrawingSurface()
    surface.draw([(10, 10), (20, 20)])
    surface.draw([(30, 30), (40, 40), (50, 45)])
    surface.undo()
    assert surface.to_data() == [
        {"points": [{"x": 10, "y": 10}, {"x": 20, "y": 20}], "color": "black", "width": 2.5}
    ]


def test_pointer_events_build_strokes():
    surface = DrawingSurface()
    surface.add_point(1, 1)
    surface.end_stroke()
    assert surface.is_empty()

    surface.begin_stroke(1, 2)
    surface.add_point(3, 4)
    surface.end_stroke()
    assert len(surface.strokes) == 1
    assert surface.strokes[0].points == [(1, 2), (3, 4)]


def test_clear_wipes_strokes():
    surface = DrawingSurface()
    surface.draw([(1, 1), (2, 2)])
    surface.clear()
    assert surface.is_empty()


def test_from_data_restores_strokes():
    source = DrawingSurface()
    source.draw([(5, 5), (6, 8)])
    target = DrawingSurface()
    target.from_data(source.to_data())
    assert target.to_data() == source.to_data()


def test_export_image_is_png_data_url_of_surface_size():
    surface = DrawingSurface(width=200, height=100, pen_width=6)
    surface.draw([(10, 50), (190, 50)])
    mime, content = decode_data_url(surface.export_image(), max_bytes=1 << 20)
    assert mime == "image/png"
    img = Image.open(io.BytesIO(content)).convert("RGB")
    assert img.size == (200, 100)
    assert img.getpixel((100, 50)) == (0, 0, 0)
    assert img.getpixel((100, 5)) == (255, 255, 255)


def test_export_blank_surface():
    url = DrawingSurface().export_image()
    assert url.startswith("data:image/png;base64,")
