"""Page tiling: split the scaled image into paper-sized pages.

AIDEV-NOTE: Pages are enumerated left-right, top-bottom. A page whose
origin falls at or past the scaled image edge on either axis is dropped,
and pages along the right/bottom edges are clipped to the image.
"""

import math

from PIL import Image

from rat.models import Page, RasterizeConfig

from .utils import clipped_span, scale_image_to_pages


def pages_bounding_box(
    pages_width: int,
    pages_height: int,
    paper_width_pixels: float,
    paper_height_pixels: float,
) -> "tuple[int, int]":
    """Pixel size of the whole page grid, rounded up."""
    return (
        math.ceil(pages_width * paper_width_pixels),
        math.ceil(pages_height * paper_height_pixels),
    )


def tile_pages(
    image_width: int,
    image_height: int,
    pages_width: int,
    pages_height: int,
    paper_width_pixels: float,
    paper_height_pixels: float,
) -> "list[Page]":
    """Compute the page regions covering a scaled image.

    Args:
        image_width: Scaled image width in pixels
        image_height: Scaled image height in pixels
        pages_width: Number of pages across
        pages_height: Number of pages down
        paper_width_pixels: Width of one sheet in pixels
        paper_height_pixels: Height of one sheet in pixels

    Returns:
        List of Page regions in row-major order, at most
        pages_width * pages_height long
    """
    full_width = math.floor(paper_width_pixels)
    full_height = math.floor(paper_height_pixels)

    pages = []
    for page_y in range(pages_height):
        for page_x in range(pages_width):
            x = math.floor(page_x * paper_width_pixels)
            y = math.floor(page_y * paper_height_pixels)

            x_span = clipped_span(x, full_width, image_width)
            y_span = clipped_span(y, full_height, image_height)

            if x_span > 0 and y_span > 0:
                pages.append(Page(x=x, y=y, width=x_span, height=y_span))

    return pages


def scale_and_tile(config: RasterizeConfig) -> "tuple[Image.Image, list[Page]]":
    """Scale the config's image to the page grid and tile it.

    Returns:
        Tuple of (scaled RGBA image, list of Page regions)
    """
    box_width, box_height = pages_bounding_box(
        config.pages_width,
        config.pages_height,
        config.paper_width_pixels,
        config.paper_height_pixels,
    )
    scaled_image = scale_image_to_pages(config.image, box_width, box_height)
    pages = tile_pages(
        scaled_image.width,
        scaled_image.height,
        config.pages_width,
        config.pages_height,
        config.paper_width_pixels,
        config.paper_height_pixels,
    )
    return scaled_image, pages
