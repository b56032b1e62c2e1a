"""Utility functions for sampling, radius maths and image scaling.

AIDEV-NOTE: This module contains the small pure helpers used throughout the
halftone pipeline. Pixel arrays are numpy arrays of RGBA uint8 values with
shape (..., 4), as produced by np.asarray() on an RGBA Pillow image.
"""

import math

import numpy as np
from PIL import Image

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def luma(r: int, g: int, b: int) -> float:
    """Get brightness (0-1) of a single RGB pixel.

    Args:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)

    Returns:
        Brightness value from 0 (black) to 1 (white)
    """
    return 0.299 * (r / 255.0) + 0.587 * (g / 255.0) + 0.114 * (b / 255.0)


def average_brightness(pixels: np.ndarray) -> float:
    """Mean luma over every pixel in the array.

    Args:
        pixels: RGBA pixel array, shape (..., 4), non-empty

    Returns:
        Average brightness from 0 (black) to 1 (white)

    AIDEV-NOTE: Alpha is ignored. A fully transparent pixel counts by its
    RGB values just like an opaque one.
    """
    rgb = pixels.reshape(-1, pixels.shape[-1])[:, :3].astype(np.float64) / 255.0
    return float((rgb @ LUMA_WEIGHTS).mean())


def average_color(pixels: np.ndarray) -> "tuple[int, int, int, int]":
    """Per-channel arithmetic mean of an RGBA pixel array.

    Args:
        pixels: RGBA pixel array, shape (..., 4), non-empty

    Returns:
        RGBA tuple (0-255 each channel), each channel floor-divided

    AIDEV-NOTE: This is the true mean. Every pixel is weighted once,
    including the first one.
    """
    flat = pixels.reshape(-1, pixels.shape[-1]).astype(np.int64)
    count = flat.shape[0]
    totals = flat.sum(axis=0)
    r, g, b, a = (int(total // count) for total in totals[:4])
    return (r, g, b, a)


def max_radius(square_size: float) -> float:
    """Radius of the circle that exactly circumscribes a square.

    This is the "theoretical" max radius for a cell of the given size,
    scaled down by the configured min/max fractions.
    """
    return square_size * math.sqrt(2.0) / 2.0


def radius(
    brightness: float, adjusted_min_radius: float, adjusted_max_radius: float
) -> float:
    """Map brightness to a dot radius.

    Darker cells get larger dots. The result never drops below
    adjusted_min_radius; with a minimum of 0, a pure white cell gets a
    zero radius.
    """
    calculated_radius = (1.0 - brightness) * adjusted_max_radius
    if calculated_radius < adjusted_min_radius:
        return adjusted_min_radius
    return calculated_radius


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def fit_dimensions(
    width: int, height: int, max_width: int, max_height: int
) -> "tuple[int, int]":
    """Largest size with the same aspect ratio that fits inside the bounds.

    Args:
        width: Original width in pixels
        height: Original height in pixels
        max_width: Bounding box width in pixels
        max_height: Bounding box height in pixels

    Returns:
        Tuple of (new_width, new_height), each at least 1 pixel

    AIDEV-NOTE: One axis matches the bounding box, the other may be
    smaller. Both upscaling and downscaling are allowed.
    """
    scale = min(max_width / width, max_height / height)
    new_width = max(_round_half_up(width * scale), 1)
    new_height = max(_round_half_up(height * scale), 1)
    return new_width, new_height


def scale_image_to_pages(
    image: Image.Image, max_width: int, max_height: int
) -> Image.Image:
    """Scale an image to fit the page-grid bounding box.

    Args:
        image: Input PIL image
        max_width: Bounding box width in pixels
        max_height: Bounding box height in pixels

    Returns:
        RGBA image resized with nearest-neighbour sampling
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    new_size = fit_dimensions(image.width, image.height, max_width, max_height)
    if new_size == image.size:
        return image.copy()
    return image.resize(new_size, Image.Resampling.NEAREST)


def clipped_span(origin: int, full_span: int, limit: int) -> int:
    """Span of a region starting at origin, clipped to limit.

    Returns full_span if the region ends strictly before limit, otherwise
    the pixels left up to limit. Zero or less means the region lies at or
    beyond the edge and should be dropped.
    """
    if origin + full_span < limit:
        return full_span
    return limit - origin
