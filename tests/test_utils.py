import numpy as np
import pytest
from PIL import Image

import converter
import main
from tinyqoi import DecodeError, IncompleteImage, Qoi, draw, load_qoi, to_array, to_image


@pytest.fixture
def qoi_file(tmp_path, solid_rows_qoi):
    path = tmp_path / "rows.qoi"
    path.write_bytes(solid_rows_qoi)
    return path


def test_load_qoi(qoi_file):
    qoi = load_qoi(str(qoi_file))
    assert isinstance(qoi, Qoi)
    assert qoi.size == (3, 3)


def test_to_array(solid_rows_qoi):
    array = to_array(Qoi(solid_rows_qoi))
    assert array.shape == (3, 3, 3)
    assert array.dtype == np.uint8
    assert array[0].tolist() == [[255, 0, 0]] * 3
    assert array[2].tolist() == [[0, 0, 255]] * 3


def test_to_array_rejects_short_stream(make_qoi):
    qoi = Qoi(make_qoi(3, 3, [0xFE, 1, 2, 3, 0xC0]))
    with pytest.raises(IncompleteImage, match="1 of 9 pixels"):
        to_array(qoi)


def test_to_array_ignores_extra_pixels(make_qoi):
    qoi = Qoi(make_qoi(2, 1, [0xFE, 1, 2, 3, 0xC5]))
    assert to_array(qoi).tolist() == [[[1, 2, 3], [1, 2, 3]]]


def test_to_image(solid_rows_qoi):
    image = to_image(Qoi(solid_rows_qoi))
    assert image.mode == "RGB"
    assert image.size == (3, 3)
    assert image.getpixel((2, 1)) == (0, 255, 0)


def test_draw_at_offset(solid_rows_qoi):
    target = Image.new("RGB", (5, 5), (9, 9, 9))
    written = draw(Qoi(solid_rows_qoi), target, offset=(1, 2))

    assert written == 9
    assert target.getpixel((0, 0)) == (9, 9, 9)
    assert target.getpixel((1, 2)) == (255, 0, 0)
    assert target.getpixel((3, 3)) == (0, 255, 0)
    assert target.getpixel((3, 4)) == (0, 0, 255)


def test_draw_is_clipped(solid_rows_qoi):
    target = Image.new("RGB", (2, 2))
    written = draw(Qoi(solid_rows_qoi), target, offset=(-1, 1))

    assert written == 2
    assert target.getpixel((0, 1)) == (255, 0, 0)
    assert target.getpixel((1, 1)) == (255, 0, 0)
    assert target.getpixel((0, 0)) == (0, 0, 0)


def test_converter_writes_png(qoi_file, tmp_path):
    png_path = tmp_path / "rows.png"
    assert converter.main([str(qoi_file), str(png_path)]) == 0

    with Image.open(png_path) as png:
        assert png.size == (3, 3)
        assert png.convert("RGB").getpixel((0, 2)) == (0, 0, 255)


def test_converter_reports_invalid_file(tmp_path, capsys):
    bad = tmp_path / "bad.qoi"
    bad.write_bytes(b"not a qoi file at all!!")
    assert converter.main([str(bad), str(tmp_path / "out.png")]) == 1
    assert "signature" in capsys.readouterr().err


def test_viewer_check_match(qoi_file, tmp_path):
    png_path = tmp_path / "reference.png"
    to_image(load_qoi(str(qoi_file))).save(png_path)
    assert main.main([str(qoi_file), "--check", str(png_path)]) == 0


def test_viewer_check_mismatch(qoi_file, tmp_path):
    png_path = tmp_path / "reference.png"
    Image.new("RGB", (3, 3)).save(png_path)
    assert main.main([str(qoi_file), "--check", str(png_path)]) == 1


def test_viewer_reports_truncated_file(tmp_path, solid_rows_qoi, capsys):
    path = tmp_path / "cut.qoi"
    path.write_bytes(solid_rows_qoi[:-1])
    assert main.main([str(path)]) == 1
    assert "end marker" in capsys.readouterr().err


def test_viewer_shows_window(qoi_file, monkeypatch):
    shown = []
    monkeypatch.setattr(Image.Image, "show", lambda self, title=None: shown.append(title))
    assert main.main([str(qoi_file)]) == 0
    assert shown == [main.WINDOW_TITLE]


@pytest.fixture
def short_qoi_file(tmp_path, make_qoi):
    # Valid header and end marker, but only one of nine pixels
    path = tmp_path / "short.qoi"
    path.write_bytes(make_qoi(3, 3, [0xFE, 1, 2, 3]))
    return path


def test_incomplete_image_is_decode_error():
    assert issubclass(IncompleteImage, DecodeError)


def test_converter_reports_short_stream(short_qoi_file, tmp_path, capsys):
    png_path = tmp_path / "short.png"
    assert converter.main([str(short_qoi_file), str(png_path)]) == 1
    assert "Incomplete image (1 of 9 pixels)" in capsys.readouterr().err
    assert not png_path.exists()


def test_viewer_reports_short_stream(short_qoi_file, capsys):
    assert main.main([str(short_qoi_file)]) == 1
    assert "Incomplete image" in capsys.readouterr().err


def test_viewer_reports_missing_reference(qoi_file, tmp_path, capsys):
    missing = tmp_path / "nope.png"
    assert main.main([str(qoi_file), "--check", str(missing)]) == 1
    assert "nope.png" in capsys.readouterr().err


def test_viewer_reports_unreadable_reference(qoi_file, tmp_path, capsys):
    not_png = tmp_path / "garbage.png"
    not_png.write_bytes(b"definitely not a png")
    assert main.main([str(qoi_file), "--check", str(not_png)]) == 1
    assert "Error:" in capsys.readouterr().err
