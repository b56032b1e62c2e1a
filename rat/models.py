"""Data models and constants for the rat halftone tool."""

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from PIL import Image

# AIDEV-NOTE: All page and cell geometry is expressed in pixels at this density
PIXELS_PER_INCH = 72.0

# Configuration file path
CONFIG_FILE = Path.home() / ".rat_config.json"


class NamedEnum(Enum):
    """Enum whose value is its user-facing display name."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, name: str):
        """Look up a member by display name, returning None if unknown."""
        for member in cls:
            if member.value == name:
                return member
        return None

    @classmethod
    def names(cls) -> "list[str]":
        return [member.value for member in cls]


class Orientation(NamedEnum):
    """Page orientation. Landscape swaps paper width and height."""

    PORTRAIT = "Portrait"
    LANDSCAPE = "Landscape"


class ColorDepth(NamedEnum):
    """Dot color mode for the raster backend."""

    RGB = "RGB"
    GRAYSCALE = "Grayscale"


class Backend(NamedEnum):
    """Output renderer."""

    IMAGE = "Image"
    SVG = "SVG"


@dataclass(frozen=True)
class PaperDimensions:
    """Physical and pixel size of one sheet of paper."""

    width_inches: float
    height_inches: float
    width_pixels: float
    height_pixels: float


class PaperSize(NamedEnum):
    """Supported paper sizes.

    AIDEV-NOTE: Nominal sizes are portrait, in inches. Keep the table in
    declaration order, it drives the choice lists in the CLI.
    """

    US_LETTER = "US Letter"
    A4 = "A4"
    A3 = "A3"

    @classmethod
    def sizes(cls) -> "list[PaperSize]":
        return list(cls)

    def dimensions(self, orientation: Orientation) -> PaperDimensions:
        width, height = _PAPER_INCHES[self]
        if orientation == Orientation.LANDSCAPE:
            width, height = height, width
        return PaperDimensions(
            width_inches=width,
            height_inches=height,
            width_pixels=width * PIXELS_PER_INCH,
            height_pixels=height * PIXELS_PER_INCH,
        )

    def width_inches(self, orientation: Orientation) -> float:
        return self.dimensions(orientation).width_inches

    def height_inches(self, orientation: Orientation) -> float:
        return self.dimensions(orientation).height_inches

    def width_pixels(self, orientation: Orientation) -> float:
        return self.dimensions(orientation).width_pixels

    def height_pixels(self, orientation: Orientation) -> float:
        return self.dimensions(orientation).height_pixels


_PAPER_INCHES = {
    PaperSize.US_LETTER: (8.5, 11.0),
    PaperSize.A4: (8.3, 11.7),
    PaperSize.A3: (11.7, 16.5),
}


@dataclass
class HalftoneSettings:
    """Operator-chosen settings for a rasterization run.

    AIDEV-NOTE: Defaults match the values the tool starts up with.
    Radius bounds are stored as fractions (0-1) of the theoretical
    maximum radius but edited as integer percentages.
    """

    paper_size: PaperSize = PaperSize.US_LETTER
    orientation: Orientation = Orientation.PORTRAIT
    pages_width: int = 1
    pages_height: int = 1
    square_size: float = 18.0  # pixels
    min_radius_percentage: float = 0.0  # fraction 0-1
    max_radius_percentage: float = 1.0  # fraction 0-1
    backend: Backend = Backend.IMAGE
    color_depth: ColorDepth = ColorDepth.RGB

    def set_min_radius_percentage(self, percent: int) -> None:
        """Set the minimum radius from an integer percentage.

        Values are clamped to 0-100. A minimum above the current maximum
        resets the minimum to 0%.
        """
        self.min_radius_percentage = _clamp_percentage(percent)
        if self.min_radius_percentage > self.max_radius_percentage:
            print("min raster % > max raster %, setting to 0%")
            self.min_radius_percentage = 0.0
        print(f"set min raster percentage to {self.min_radius_percentage * 100.0:g}%")

    def set_max_radius_percentage(self, percent: int) -> None:
        """Set the maximum radius from an integer percentage.

        Values are clamped to 0-100. A maximum below the current minimum
        resets the maximum to 100%.
        """
        self.max_radius_percentage = _clamp_percentage(percent)
        if self.max_radius_percentage < self.min_radius_percentage:
            print("max raster % < min raster %, setting to 100%")
            self.max_radius_percentage = 1.0
        print(f"set max raster percentage to {self.max_radius_percentage * 100.0:g}%")

    def total_inches(self) -> "tuple[float, float]":
        """Physical size of the whole page grid in inches."""
        dims = self.paper_size.dimensions(self.orientation)
        return (
            dims.width_inches * self.pages_width,
            dims.height_inches * self.pages_height,
        )


def _clamp_percentage(percent: int) -> float:
    if percent < 0:
        return 0.0
    if percent > 100:
        return 1.0
    return percent / 100.0


# --- Halftone Engine Models ---


@dataclass
class RasterizeConfig:
    """The request object for one rasterization run.

    AIDEV-NOTE: Validated once here so the sampling loop never has to.
    The image is borrowed and never modified by the engine.
    """

    image: Image.Image
    paper_width_pixels: float
    paper_height_pixels: float
    pages_width: int = 1
    pages_height: int = 1
    square_size: float = 18.0
    min_radius_percentage: float = 0.0
    max_radius_percentage: float = 1.0
    color_depth: ColorDepth = ColorDepth.RGB

    def __post_init__(self):
        if self.pages_width < 1:
            raise ValueError(f"pages_width must be at least 1, got {self.pages_width}")
        if self.pages_height < 1:
            raise ValueError(f"pages_height must be at least 1, got {self.pages_height}")
        for name in ("square_size", "paper_width_pixels", "paper_height_pixels"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be a positive finite number, got {value}")
        grid_width = self.pages_width * self.paper_width_pixels
        grid_height = self.pages_height * self.paper_height_pixels
        if not (math.isfinite(grid_width) and math.isfinite(grid_height)):
            raise ValueError(f"page grid is too large ({grid_width} x {grid_height})")
        # At most one dot per sheet
        largest_side = max(self.paper_width_pixels, self.paper_height_pixels)
        if self.square_size > largest_side:
            raise ValueError(
                f"square_size must not exceed the paper size ({largest_side}), "
                f"got {self.square_size}"
            )
        for name in ("min_radius_percentage", "max_radius_percentage"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.min_radius_percentage > self.max_radius_percentage:
            raise ValueError(
                "min_radius_percentage must not exceed max_radius_percentage "
                f"({self.min_radius_percentage} > {self.max_radius_percentage})"
            )

    @classmethod
    def from_settings(
        cls, image: Image.Image, settings: HalftoneSettings
    ) -> "RasterizeConfig":
        """Build a config from saved or CLI settings."""
        dims = settings.paper_size.dimensions(settings.orientation)
        return cls(
            image=image,
            paper_width_pixels=dims.width_pixels,
            paper_height_pixels=dims.height_pixels,
            pages_width=settings.pages_width,
            pages_height=settings.pages_height,
            square_size=settings.square_size,
            min_radius_percentage=settings.min_radius_percentage,
            max_radius_percentage=settings.max_radius_percentage,
            color_depth=settings.color_depth,
        )


@dataclass(frozen=True)
class Page:
    """A paper-sized region of the scaled source image.

    Offsets and spans are in pixels of the scaled image.
    """

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Cell:
    """A square sampling region within a page, relative to the page origin."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Dot:
    """The sampled result for one cell.

    AIDEV-NOTE: Shared by both renderers. Center is relative to the page,
    color is RGBA (0-255) and only used by the raster backend.
    """

    center_x: int
    center_y: int
    radius: float
    color: "tuple[int, int, int, int]" = (0, 0, 0, 255)


@dataclass
class RasterizeResult:
    """Rendered pages for one run, in row-major page order."""

    backend: Backend
    pages: list = field(default_factory=list)  # PIL images or svg.SVG documents
    elapsed_seconds: float = 0.0

    @property
    def page_count(self) -> int:
        return len(self.pages)
