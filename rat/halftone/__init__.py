"""Halftone engine: source image to printable dot-screen pages.

AIDEV-NOTE: This package handles the complete pipeline from an image to
halftone pages. Organized into modular components:
- processor: Main HalftoneProcessor orchestrator
- tiling: Scaling the image to the page grid and slicing it into pages
- sampling: Brick-offset cells, brightness sampling and radius mapping
- rendering: Raster (filled circles) and vector (SVG circles) backends
- export: PNG/SVG encoding and ZIP archiving
- utils: Brightness, color, radius and scaling helpers
"""

from .processor import HalftoneProcessor
from .rendering import rasterize_image, rasterize_svg
from .sampling import halftone_pages

__all__ = ["HalftoneProcessor", "halftone_pages", "rasterize_image", "rasterize_svg"]
