# tests/test_app.py

import zipfile

from PIL import Image

from rat.app import apply_arguments, build_parser, main
from rat.models import Backend, HalftoneSettings, PaperSize


def write_image(path, size=(60, 40), color=(30, 30, 30)):
    Image.new("RGB", size, color).save(path)
    return path


def run(tmp_path, *options):
    """Run the CLI with an isolated config file and output directory."""
    return main(
        [
            *options,
            "--output-dir",
            str(tmp_path / "out"),
            "--config",
            str(tmp_path / "config.json"),
        ]
    )


def test_arguments_override_settings():
    args = build_parser().parse_args(
        ["in.png", "--paper-size", "A4", "--backend", "SVG", "--pages-width", "2"]
    )
    settings = apply_arguments(HalftoneSettings(pages_height=3), args)
    assert settings.paper_size is PaperSize.A4
    assert settings.backend is Backend.SVG
    assert (settings.pages_width, settings.pages_height) == (2, 3)


def test_both_radius_bounds_applied_together():
    args = build_parser().parse_args(
        ["in.png", "--min-radius", "50", "--max-radius", "80"]
    )
    settings = apply_arguments(HalftoneSettings(max_radius_percentage=0.3), args)
    assert settings.min_radius_percentage == 0.5
    assert settings.max_radius_percentage == 0.8


def test_main_writes_svg_pages_and_archive(tmp_path):
    source = write_image(tmp_path / "source.png")
    status = run(
        tmp_path, str(source), "--backend", "SVG", "--pages-width", "2", "--zip"
    )
    assert status == 0
    out = tmp_path / "out"
    assert (out / "1.svg").exists()
    with zipfile.ZipFile(out / "pages.zip") as archive:
        assert "1.svg" in archive.namelist()


def test_main_saves_settings(tmp_path):
    source = write_image(tmp_path / "source.png")
    run(tmp_path, str(source), "--square-size", "30", "--save-settings")
    config = tmp_path / "config.json"
    assert config.exists()
    assert '"square_size": 30.0' in config.read_text()


def test_main_reports_unreadable_input(tmp_path, capsys):
    status = run(tmp_path, str(tmp_path / "missing.png"))
    assert status == 1
    assert "Error: Failed to load image" in capsys.readouterr().err


def test_main_reports_invalid_settings(tmp_path, capsys):
    source = write_image(tmp_path / "source.png")
    status = run(tmp_path, str(source), "--pages-width", "0")
    assert status == 1
    assert "pages_width" in capsys.readouterr().err


def test_main_rejects_infinite_square_size(tmp_path, capsys):
    source = write_image(tmp_path / "source.png")
    status = run(tmp_path, str(source), "--square-size", "inf")
    assert status == 1
    assert "square_size" in capsys.readouterr().err
