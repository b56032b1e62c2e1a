# tests/conftest.py

import numpy as np
import pytest
from PIL import Image

from rat.models import ColorDepth, RasterizeConfig


def solid_image(width, height, color):
    return Image.new("RGBA", (width, height), color)


def _solid_pixels(width, height, color):
    return np.asarray(solid_image(width, height, color))


@pytest.fixture
def solid_pixels():
    """Factory for RGBA page arrays of a single color."""
    return _solid_pixels


@pytest.fixture
def make_config():
    """Factory for configs over a solid-color source image."""

    def _make(
        width=144,
        height=144,
        color=(255, 255, 255, 255),
        image=None,
        **overrides,
    ):
        options = dict(
            paper_width_pixels=144.0,
            paper_height_pixels=144.0,
            pages_width=1,
            pages_height=1,
            square_size=18.0,
            min_radius_percentage=0.0,
            max_radius_percentage=1.0,
            color_depth=ColorDepth.RGB,
        )
        options.update(overrides)
        if image is None:
            image = solid_image(width, height, color)
        return RasterizeConfig(image=image, **options)

    return _make
