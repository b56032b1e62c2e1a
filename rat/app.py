"""rat - Main entry point.

Prints an image as a halftone dot screen spread over a grid of pages.
"""

import argparse
import sys
from pathlib import Path

from rat.config_manager import ConfigManager
from rat.halftone import HalftoneProcessor
from rat.models import (
    CONFIG_FILE,
    Backend,
    ColorDepth,
    HalftoneSettings,
    Orientation,
    PaperSize,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rat",
        description="Rasterize an image into halftone pages (PNG or SVG).",
    )
    parser.add_argument("input", type=Path, help="Image file to rasterize")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path("pages"),
        help="Directory to write pages into (default: ./pages)",
    )
    parser.add_argument("--paper-size", choices=PaperSize.names())
    parser.add_argument("--orientation", choices=Orientation.names())
    parser.add_argument("--pages-width", type=int, help="Pages across")
    parser.add_argument("--pages-height", type=int, help="Pages down")
    parser.add_argument(
        "--square-size", type=float, help="Cell size in pixels (72 per inch)"
    )
    parser.add_argument(
        "--min-radius", type=int, help="Minimum dot radius, percent of max"
    )
    parser.add_argument(
        "--max-radius", type=int, help="Maximum dot radius, percent of max"
    )
    parser.add_argument("--backend", choices=Backend.names())
    parser.add_argument("--color-depth", choices=ColorDepth.names())
    parser.add_argument("--zip", action="store_true", help="Also write pages.zip")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the resulting settings as the new defaults",
    )
    parser.add_argument(
        "--config", type=Path, default=CONFIG_FILE, help="Settings file"
    )
    return parser


def apply_arguments(
    settings: HalftoneSettings, args: argparse.Namespace
) -> HalftoneSettings:
    """Override saved settings with any options given on the command line."""
    if args.paper_size is not None:
        settings.paper_size = PaperSize.from_string(args.paper_size)
    if args.orientation is not None:
        settings.orientation = Orientation.from_string(args.orientation)
    if args.backend is not None:
        settings.backend = Backend.from_string(args.backend)
    if args.color_depth is not None:
        settings.color_depth = ColorDepth.from_string(args.color_depth)
    if args.pages_width is not None:
        settings.pages_width = args.pages_width
    if args.pages_height is not None:
        settings.pages_height = args.pages_height
    if args.square_size is not None:
        settings.square_size = args.square_size

    # Both bounds given: start from an open range so neither resets the other
    if args.min_radius is not None and args.max_radius is not None:
        settings.min_radius_percentage = 0.0
    if args.max_radius is not None:
        settings.set_max_radius_percentage(args.max_radius)
    if args.min_radius is not None:
        settings.set_min_radius_percentage(args.min_radius)

    return settings


def main(argv: "list[str] | None" = None) -> int:
    """Run the rasterizer from the command line."""
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    settings = apply_arguments(config_manager.load(), args)

    if args.save_settings:
        success, error = config_manager.save(settings)
        if success:
            print(f"✓ Saved configuration to {config_manager.config_path}")
        else:
            print(f"Warning: Could not save config file: {error}")

    processor = HalftoneProcessor(settings)
    try:
        processor.process(args.input, args.output_dir, zip_all=args.zip)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
