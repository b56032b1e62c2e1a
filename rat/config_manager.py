"""Configuration persistence manager for the rat halftone tool.

This module handles loading and saving of halftone settings to/from JSON files.
"""

import json
import math
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

from rat.models import (
    CONFIG_FILE,
    Backend,
    ColorDepth,
    HalftoneSettings,
    Orientation,
    PaperSize,
)


def _positive_int(value: Any) -> int:
    result = int(value)
    if result < 1:
        raise ValueError(f"expected at least 1, got {result}")
    return result


def _positive_float(value: Any) -> float:
    result = float(value)
    if not (math.isfinite(result) and result > 0):
        raise ValueError(f"expected a positive number, got {result}")
    return result


def _fraction(value: Any) -> float:
    result = float(value)
    if math.isnan(result):
        raise ValueError("expected a number, got nan")
    return min(max(result, 0.0), 1.0)


def _named(enum_class) -> Callable[[Any], Enum]:
    def convert(value: Any) -> Enum:
        member = enum_class.from_string(value)
        if member is None:
            raise ValueError(f"unknown {enum_class.__name__} {value!r}")
        return member

    return convert


# AIDEV-NOTE: One converter per persisted field; a field that fails to
# convert keeps its default without affecting the others.
FIELD_CONVERTERS = {
    "paper_size": _named(PaperSize),
    "orientation": _named(Orientation),
    "backend": _named(Backend),
    "color_depth": _named(ColorDepth),
    "pages_width": _positive_int,
    "pages_height": _positive_int,
    "square_size": _positive_float,
    "min_radius_percentage": _fraction,
    "max_radius_percentage": _fraction,
}


class ConfigManager:
    """Handles loading and saving of halftone settings."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.rat_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> HalftoneSettings:
        """Load settings from file, returning defaults if not found.

        Each field falls back to its default on its own when missing or
        invalid. Radius bounds go through the same clamping and ordering
        rules as HalftoneSettings' percentage setters.

        Returns:
            HalftoneSettings with loaded or default values
        """
        settings = HalftoneSettings()

        try:
            if not self.config_path.exists():
                return settings
            with open(self.config_path, "r") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
        except Exception as e:
            print(f"Warning: Could not load config file: {e}")
            return settings

        loaded = {}
        for key, convert in FIELD_CONVERTERS.items():
            if key not in data:
                continue
            try:
                loaded[key] = convert(data[key])
            except (TypeError, ValueError, OverflowError) as e:
                print(f"Warning: Ignoring config value {key!r}: {e}")

        min_fraction = loaded.pop("min_radius_percentage", None)
        max_fraction = loaded.pop("max_radius_percentage", None)
        for key, value in loaded.items():
            setattr(settings, key, value)

        # Max first, against the default minimum of 0, then min against it
        if max_fraction is not None:
            settings.set_max_radius_percentage(round(max_fraction * 100))
        if min_fraction is not None:
            settings.set_min_radius_percentage(round(min_fraction * 100))

        print(f"✓ Loaded configuration from {self.config_path}")
        return settings

    def save(self, settings: HalftoneSettings) -> Tuple[bool, Optional[str]]:
        """Save settings to file.

        Args:
            settings: HalftoneSettings to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        data = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in asdict(settings).items()
        }
        try:
            with open(self.config_path, "w") as f:
                json.dump(data, f, indent=2)
            return True, None
        except Exception as e:
            return False, str(e)
