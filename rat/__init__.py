"""rat - raster art tool: print any image as a halftone across several pages."""

__version__ = "0.1.0"
