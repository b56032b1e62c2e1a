"""Main halftone processor orchestrating the complete pipeline.

AIDEV-NOTE: This module handles the complete pipeline from a source image
to printable halftone pages. The heavy lifting lives in the tiling,
sampling and rendering modules; this class wires them to the user's
settings and reports progress.
"""

import time
from pathlib import Path

from PIL import Image

from rat.models import (
    Backend,
    HalftoneSettings,
    RasterizeConfig,
    RasterizeResult,
)

from .export import load_image, write_outputs
from .rendering import rasterize_image, rasterize_svg


class HalftoneProcessor:
    """Turns images into halftone pages using a set of HalftoneSettings."""

    def __init__(self, settings: HalftoneSettings | None = None):
        self.settings = settings or HalftoneSettings()

    def load_image(self, file_path: str | Path) -> Image.Image:
        """Load an image file as RGBA. Raises ValueError if unreadable."""
        return load_image(file_path)

    def build_config(self, image: Image.Image) -> RasterizeConfig:
        """Build a validated RasterizeConfig for the current settings.

        Raises:
            ValueError: If the settings describe an invalid run
        """
        return RasterizeConfig.from_settings(image, self.settings)

    def rasterize(self, image: Image.Image) -> RasterizeResult:
        """Render an in-memory image with the configured backend.

        Args:
            image: Source image (any mode, converted to RGBA when scaled)

        Returns:
            RasterizeResult holding one output per surviving page
        """
        config = self.build_config(image)
        backend = self.settings.backend

        print("Starting rasterization")
        start = time.perf_counter()
        if backend == Backend.IMAGE:
            pages = rasterize_image(config)
        elif backend == Backend.SVG:
            pages = rasterize_svg(config)
        else:
            raise NotImplementedError(f"Backend {backend} not implemented.")
        elapsed = time.perf_counter() - start
        print(f"Rasterized {len(pages)} page(s) in {elapsed * 1000:.1f} ms")

        return RasterizeResult(backend=backend, pages=pages, elapsed_seconds=elapsed)

    def process(
        self,
        file_path: str | Path,
        output_dir: str | Path,
        zip_all: bool = False,
    ) -> "list[Path]":
        """Execute complete pipeline: load, rasterize and write pages.

        Args:
            file_path: Path to input image
            output_dir: Directory to write page files into
            zip_all: Also write an archive of every page

        Returns:
            Paths of the written files
        """
        print("Loading image...")
        image = self.load_image(file_path)
        print(f"finished loading image: {Path(file_path).name} ({image.width}x{image.height})")

        width_inches, height_inches = self.settings.total_inches()
        print(f"{width_inches:g}in x {height_inches:g}in")
        print(f"{self.settings.pages_width}w x {self.settings.pages_height}h pages")
        print(f"square size: {self.settings.square_size:g}")

        result = self.rasterize(image)

        if result.page_count == 0:
            print("Warning: no pages produced")

        written = write_outputs(result, output_dir, zip_all=zip_all)
        for path in written:
            print(f"✓ Wrote {path}")
        return written
