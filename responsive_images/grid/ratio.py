"""
Aspect ratio parsing and crop oversampling.
"""

import re
from typing import Any, Optional

from responsive_images.errors import ConfigurationError
from responsive_images.models import (
    AspectRatio,
    FixedRatio,
    Grid,
    NaturalRatio,
    RatioSpec,
    SourceImage,
    WrapperKind,
)


ASPECT_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*[/:]\s*(\d+(?:\.\d+)?)\s*$")


def parse_ratio(value: Any) -> Optional[RatioSpec]:
    """
    Parse a loosely typed ratio option.

    Args:
        value: None/False (no ratio), True (source ratio), a positive number
            (height/width), "W/H" or "W:H", or an existing RatioSpec.

    Returns:
        RatioSpec, or None when no ratio is requested.

    Raises:
        ConfigurationError: If the value cannot be understood.
    """
    if isinstance(value, (NaturalRatio, FixedRatio, AspectRatio)):
        return value
    if value is None or value is False:
        return None
    if value is True:
        return NaturalRatio()
    if isinstance(value, (int, float)):
        if value <= 0:
            raise ConfigurationError(f"Ratio must be positive: {value}")
        return FixedRatio(value=float(value))
    if isinstance(value, str):
        match = ASPECT_PATTERN.match(value)
        if match:
            width, height = float(match.group(1)), float(match.group(2))
            if width <= 0 or height <= 0:
                raise ConfigurationError(f"Invalid aspect ratio: {value}")
            if width.is_integer() and height.is_integer():
                return AspectRatio(width=int(width), height=int(height))
            return FixedRatio(value=height / width)
        try:
            number = float(value)
        except ValueError:
            raise ConfigurationError(f"Invalid ratio: {value!r}") from None
        return parse_ratio(number)
    raise ConfigurationError(f"Invalid ratio: {value!r}")


def oversample_percent(source_ratio: float, container_ratio: float) -> float:
    """Percentage of the container size the source must be sampled at."""
    if source_ratio < container_ratio:
        return 10000 / (source_ratio * 100)
    return source_ratio * 100


def adjust_grid(
    grid: Grid,
    ratio: Optional[RatioSpec],
    ratio_crop: bool,
    source: SourceImage
) -> Grid:
    """
    Inflate grid sizes so a cropped image still has enough source pixels.

    Only applies when a ratio is set and cropping is requested; a contained
    image is displayed smaller than its box and needs no extra pixels.

    Args:
        grid: Grid to adjust (left untouched).
        ratio: Requested container ratio.
        ratio_crop: Whether the image is cropped to the ratio.
        source: Source image dimensions.

    Returns:
        A new Grid.
    """
    adjusted = dict(grid)
    if ratio is None or not ratio_crop:
        return adjusted
    crop_ratio = ratio.resolve(source)
    if crop_ratio == source.ratio:
        # box already has the source ratio, nothing is cropped
        return adjusted

    percent = oversample_percent(source.ratio, crop_ratio)
    if percent <= 100:
        return adjusted

    factor = percent / 100
    return {activation: entry.scaled(factor) for activation, entry in adjusted.items()}


def wrapper_kind(ratio: Optional[RatioSpec], ratio_crop: bool, source: SourceImage) -> WrapperKind:
    """Structural wrapper the markup layer has to emit."""
    if ratio is None:
        return WrapperKind.NONE
    if ratio.resolve(source) == source.ratio:
        return WrapperKind.RATIO
    return WrapperKind.CROP if ratio_crop else WrapperKind.CONTAIN


def ratio_percent(ratio: Optional[RatioSpec], source: SourceImage) -> Optional[float]:
    """Padding percentage for a ratio box."""
    if ratio is None:
        return None
    return round(ratio.resolve(source) * 100, 5)
