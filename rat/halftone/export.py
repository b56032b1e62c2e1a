"""Encoding and archiving of rendered pages.

AIDEV-NOTE: The engine only produces Pillow images and svg.py documents.
This module turns them into files: PNG/SVG bytes per page, numbered from 1,
plus an optional uncompressed ZIP of all pages.
"""

import io
import re
import zipfile
from pathlib import Path

import svg
from PIL import Image

from rat.models import Backend, RasterizeResult

ZIP_FILENAME = "pages.zip"

PAGE_FILE_PATTERN = re.compile(r"^\d+\.(png|svg)$")


def load_image(file_path: "str | Path") -> Image.Image:
    """Load and validate an image file.

    Args:
        file_path: Path to image file (PNG, JPG, etc.)

    Returns:
        PIL Image in RGBA mode

    Raises:
        ValueError: If file cannot be loaded or is invalid
    """
    try:
        image = Image.open(file_path)
        # AIDEV-NOTE: Always convert to RGBA for consistent processing
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        else:
            image.load()
        return image
    except Exception as e:
        raise ValueError(f"Failed to load image: {e}") from e


def encode_png(image: Image.Image) -> bytes:
    """Encode a rendered page as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def svg_to_bytes(document: svg.SVG) -> bytes:
    """Serialize a rendered page as UTF-8 SVG text."""
    return document.as_str().encode("utf-8")


def zip_files(files: "list[tuple[str, bytes]]") -> bytes:
    """Store (filename, bytes) pairs uncompressed in a ZIP archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
        for filename, data in files:
            archive.writestr(filename, data)
    return buffer.getvalue()


def encode_pages(result: RasterizeResult) -> "list[tuple[str, bytes]]":
    """Encode every page of a result, named 1.png, 2.png, ... or 1.svg, ...

    Returns:
        List of (filename, bytes) pairs in page order
    """
    if result.backend == Backend.IMAGE:
        return [
            (f"{i}.png", encode_png(page)) for i, page in enumerate(result.pages, 1)
        ]
    return [(f"{i}.svg", svg_to_bytes(page)) for i, page in enumerate(result.pages, 1)]


def remove_stale_outputs(output_dir: Path) -> "list[Path]":
    """Delete numbered page files and the page archive from a directory."""
    removed = []
    for path in sorted(output_dir.iterdir()):
        if path.is_file() and (
            PAGE_FILE_PATTERN.match(path.name) or path.name == ZIP_FILENAME
        ):
            path.unlink()
            removed.append(path)
    return removed


def write_outputs(
    result: RasterizeResult, output_dir: "str | Path", zip_all: bool = False
) -> "list[Path]":
    """Write every page (and optionally a ZIP of all pages) to a directory.

    Args:
        result: Rendered pages
        output_dir: Target directory, created if missing
        zip_all: Also write pages.zip containing every page

    Returns:
        Paths written, page files first

    AIDEV-NOTE: Numbered page files and pages.zip left by an earlier run
    are removed first, so the directory only holds this run's pages.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    remove_stale_outputs(output_dir)

    files = encode_pages(result)
    written = []
    for filename, data in files:
        path = output_dir / filename
        path.write_bytes(data)
        written.append(path)

    if zip_all:
        zip_path = output_dir / ZIP_FILENAME
        zip_path.write_bytes(zip_files(files))
        written.append(zip_path)

    return written
