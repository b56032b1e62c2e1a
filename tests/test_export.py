# tests/test_export.py

import io
import zipfile

import pytest
from PIL import Image

from rat.halftone.export import (
    ZIP_FILENAME,
    encode_pages,
    encode_png,
    load_image,
    svg_to_bytes,
    write_outputs,
    zip_files,
)
from rat.halftone.rendering import rasterize_image, rasterize_svg
from rat.models import Backend, RasterizeResult


def test_load_image_converts_to_rgba(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (8, 4), 128).save(path)
    image = load_image(path)
    assert image.mode == "RGBA"
    assert image.size == (8, 4)


def test_load_image_rejects_missing_file(tmp_path):
    with pytest.raises(ValueError, match="Failed to load image"):
        load_image(tmp_path / "nope.png")


def test_load_image_rejects_non_image(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not an image")
    with pytest.raises(ValueError):
        load_image(path)


def test_encode_png_round_trips_pixels():
    image = Image.new("RGBA", (3, 2), (1, 2, 3, 4))
    data = encode_png(image)
    assert data.startswith(b"\x89PNG")
    decoded = Image.open(io.BytesIO(data))
    assert decoded.getpixel((2, 1)) == (1, 2, 3, 4)


def test_zip_files_stores_uncompressed():
    data = zip_files([("1.png", b"abc"), ("2.png", b"defg")])
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        assert archive.namelist() == ["1.png", "2.png"]
        assert archive.read("2.png") == b"defg"
        assert all(info.compress_type == zipfile.ZIP_STORED for info in archive.infolist())


def test_encode_pages_numbers_from_one(make_config):
    config = make_config(width=288, pages_width=2)
    result = RasterizeResult(backend=Backend.SVG, pages=rasterize_svg(config))
    files = encode_pages(result)
    assert [name for name, _ in files] == ["1.svg", "2.svg"]
    assert files[0][1] == svg_to_bytes(result.pages[0])
    assert b"<circle" in files[0][1]


def test_write_outputs_with_archive(tmp_path, make_config):
    config = make_config(width=288, pages_width=2, color=(0, 0, 0, 255))
    result = RasterizeResult(backend=Backend.IMAGE, pages=rasterize_image(config))
    written = write_outputs(result, tmp_path / "out", zip_all=True)

    assert [path.name for path in written] == ["1.png", "2.png", ZIP_FILENAME]
    assert all(path.exists() for path in written)
    with zipfile.ZipFile(written[-1]) as archive:
        assert archive.namelist() == ["1.png", "2.png"]
        assert archive.read("1.png") == written[0].read_bytes()


def test_write_outputs_without_archive(tmp_path, make_config):
    result = RasterizeResult(backend=Backend.IMAGE, pages=rasterize_image(make_config()))
    written = write_outputs(result, tmp_path)
    assert [path.name for path in written] == ["1.png"]
    assert not (tmp_path / ZIP_FILENAME).exists()


def test_write_outputs_removes_pages_from_earlier_run(tmp_path, make_config):
    (tmp_path / "3.png").write_bytes(b"old")
    (tmp_path / "2.svg").write_bytes(b"old")
    (tmp_path / ZIP_FILENAME).write_bytes(b"old")
    (tmp_path / "notes.txt").write_text("keep me")

    result = RasterizeResult(backend=Backend.IMAGE, pages=rasterize_image(make_config()))
    written = write_outputs(result, tmp_path)

    assert [path.name for path in written] == ["1.png"]
    assert sorted(path.name for path in tmp_path.iterdir()) == ["1.png", "notes.txt"]
