"""Halftone sampling: turn each page into a list of dots.

AIDEV-NOTE: Both renderers consume the output of halftone_pages(), so the
raster and vector backends can never disagree on geometry. Pages and
cells are independent work items; nothing here carries state between
them.
"""

import math
from typing import Iterator

import numpy as np

from rat.models import Cell, ColorDepth, Dot, Page, RasterizeConfig

from .tiling import scale_and_tile
from .utils import average_brightness, average_color, clipped_span, max_radius, radius

BLACK = (0, 0, 0, 255)


def layout_cells(page_width: int, page_height: int, square_size: float) -> "list[Cell]":
    """Divide a page into square cells with a brick offset.

    Args:
        page_width: Page width in pixels
        page_height: Page height in pixels
        square_size: Cell edge length in pixels

    Returns:
        List of Cell regions in row-major order. Odd rows are shifted
        right by half a cell; cells that start at or past the page edge
        are left out.
    """
    half_square_size = math.floor(square_size / 2.0)
    square_size_floor = math.floor(square_size)
    squares_width = math.ceil(page_width / square_size)
    squares_height = math.ceil(page_height / square_size)

    cells = []
    for square_y in range(squares_height):
        for square_x in range(squares_width):
            x = math.floor(square_x * square_size)
            if square_y % 2 == 1:
                x += half_square_size
            y = math.floor(square_y * square_size)

            x_span = clipped_span(x, square_size_floor, page_width)
            y_span = clipped_span(y, square_size_floor, page_height)

            if x_span > 0 and y_span > 0:
                cells.append(Cell(x=x, y=y, width=x_span, height=y_span))

    return cells


def sample_cell(
    page_pixels: np.ndarray,
    cell: Cell,
    half_square_size: int,
    adjusted_min_radius: float,
    adjusted_max_radius: float,
    color_depth: ColorDepth,
) -> Dot:
    """Sample one cell of a page into a dot.

    Args:
        page_pixels: RGBA array of the page, shape (height, width, 4)
        cell: Cell region within the page
        half_square_size: Offset from cell origin to dot center
        adjusted_min_radius: Smallest radius a dot may have
        adjusted_max_radius: Radius of a fully black cell
        color_depth: RGB samples the cell color, Grayscale uses black

    Returns:
        Dot centered half a square from the cell origin
    """
    pixels = page_pixels[cell.y : cell.y + cell.height, cell.x : cell.x + cell.width]

    if color_depth == ColorDepth.RGB:
        color = average_color(pixels)
    else:
        color = BLACK

    brightness = average_brightness(pixels)

    return Dot(
        center_x=cell.x + half_square_size,
        center_y=cell.y + half_square_size,
        radius=radius(brightness, adjusted_min_radius, adjusted_max_radius),
        color=color,
    )


def sample_page(page_pixels: np.ndarray, config: RasterizeConfig) -> "list[Dot]":
    """Sample every cell of a page.

    Args:
        page_pixels: RGBA array of the page, shape (height, width, 4)
        config: Validated rasterization config

    Returns:
        List of Dots in row-major cell order
    """
    page_height, page_width = page_pixels.shape[:2]
    theoretical_max = max_radius(config.square_size)
    adjusted_min_radius = theoretical_max * config.min_radius_percentage
    adjusted_max_radius = theoretical_max * config.max_radius_percentage
    half_square_size = math.floor(config.square_size / 2.0)

    return [
        sample_cell(
            page_pixels,
            cell,
            half_square_size,
            adjusted_min_radius,
            adjusted_max_radius,
            config.color_depth,
        )
        for cell in layout_cells(page_width, page_height, config.square_size)
    ]


def page_pixels(image_pixels: np.ndarray, page: Page) -> np.ndarray:
    """Slice a page region out of the scaled image array (no copy)."""
    return image_pixels[page.y : page.y + page.height, page.x : page.x + page.width]


def halftone_pages(config: RasterizeConfig) -> "Iterator[tuple[Page, list[Dot]]]":
    """Scale, tile and sample the config's image.

    Yields:
        (Page, dots) pairs in row-major page order, one per surviving page
    """
    scaled_image, pages = scale_and_tile(config)
    image_pixels = np.asarray(scaled_image)

    for page in pages:
        yield page, sample_page(page_pixels(image_pixels, page), config)
