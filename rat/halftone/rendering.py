"""Rendering backends for sampled halftone dots.

AIDEV-NOTE: This module contains the two output styles for the same dot
geometry: raster (filled circles painted into an RGBA Pillow image) and
vector (svg.py documents of circle elements). Both fold over the
(Page, dots) pairs produced by sampling.halftone_pages().
"""

from typing import Iterable

import numpy as np
import svg
from PIL import Image

from rat.models import Dot, Page, RasterizeConfig

from .sampling import halftone_pages


def _draw_span(
    canvas: np.ndarray, y: int, x_start: int, x_end: int, color: "tuple[int, ...]"
) -> None:
    """Fill pixels x_start..x_end (inclusive) on row y, clipped to the canvas."""
    height, width = canvas.shape[:2]
    if not 0 <= y < height:
        return
    x_start = max(x_start, 0)
    x_end = min(x_end, width - 1)
    if x_start <= x_end:
        canvas[y, x_start : x_end + 1] = color


def draw_filled_circle(
    canvas: np.ndarray,
    center: "tuple[int, int]",
    radius: int,
    color: "tuple[int, int, int, int]",
) -> None:
    """Paint a filled circle into an RGBA array in place.

    Args:
        canvas: RGBA array, shape (height, width, 4)
        center: (x, y) center in pixels, may lie outside the canvas
        radius: Integer radius in pixels
        color: RGBA color (0-255 each channel)

    AIDEV-NOTE: Midpoint circle algorithm, filling the horizontal span
    between each pair of mirrored octant points. Pixels outside the canvas
    are silently skipped. A radius of 0 paints only the center pixel.
    """
    x0, y0 = center
    x = 0
    y = radius
    p = 1 - radius

    while x <= y:
        _draw_span(canvas, y0 + y, x0 - x, x0 + x, color)
        _draw_span(canvas, y0 + x, x0 - y, x0 + y, color)
        _draw_span(canvas, y0 - y, x0 - x, x0 + x, color)
        _draw_span(canvas, y0 - x, x0 - y, x0 + y, color)

        x += 1
        if p < 0:
            p += 2 * x + 1
        else:
            y -= 1
            p += 2 * (x - y) + 1


def render_raster_page(page: Page, dots: "Iterable[Dot]") -> Image.Image:
    """Paint one page's dots onto a transparent RGBA image.

    Args:
        page: Page region, sets the output size
        dots: Dots with centers relative to the page

    Returns:
        RGBA Pillow image the size of the page
    """
    canvas = np.zeros((page.height, page.width, 4), dtype=np.uint8)

    for dot in dots:
        # A zero radius is an invisible dot, not a single pixel
        if dot.radius <= 0:
            continue
        draw_filled_circle(
            canvas, (dot.center_x, dot.center_y), int(dot.radius), dot.color
        )

    return Image.fromarray(canvas)


def render_vector_page(page: Page, dots: "Iterable[Dot]") -> svg.SVG:
    """Build an SVG document of circles for one page.

    Args:
        page: Page region, sets the document viewBox
        dots: Dots with centers relative to the page

    Returns:
        svg.SVG document with one circle element per dot

    AIDEV-NOTE: Dot color is not written; circles use the SVG default
    fill.
    """
    elements: list[svg.Element] = [
        svg.Circle(cx=dot.center_x, cy=dot.center_y, r=dot.radius) for dot in dots
    ]
    return svg.SVG(
        viewBox=svg.ViewBoxSpec(0, 0, page.width, page.height),
        elements=elements,
    )


def rasterize_image(config: RasterizeConfig) -> "list[Image.Image]":
    """Render every surviving page as an RGBA image, in row-major order."""
    return [render_raster_page(page, dots) for page, dots in halftone_pages(config)]


def rasterize_svg(config: RasterizeConfig) -> "list[svg.SVG]":
    """Render every surviving page as an SVG document, in row-major order."""
    return [render_vector_page(page, dots) for page, dots in halftone_pages(config)]
