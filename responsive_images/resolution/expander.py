"""
Resolution expansion: one target width per breakpoint -> every device-pixel-ratio variant.
"""

import math
from typing import Any, List, Optional, Tuple

from responsive_images.errors import ConfigurationError
from responsive_images.models import (
    HIRES_SOURCE,
    Grid,
    ResolutionDict,
    SourceImage,
    round_half_up,
)


# numbers at or below this are resolution factors, above it pixel widths
MAX_FACTOR_VALUE = 10


def reproportion(
    source: SourceImage,
    width: Optional[int] = None,
    height: Optional[int] = None
) -> Tuple[int, int]:
    """
    Fill in the missing dimension from the source aspect ratio.

    When both are given, the dimension with the smaller scale relative to the
    source becomes the master, so neither axis exceeds what was asked for.

    Args:
        source: Source image dimensions.
        width: Target width, or None/0.
        height: Target height, or None/0.

    Returns:
        (width, height) tuple.

    Raises:
        ConfigurationError: If neither dimension is given.
    """
    if not width and not height:
        raise ConfigurationError("Cannot reproportion without a width or a height")

    if width and not height:
        return width, round_half_up(width * source.height / source.width)
    if height and not width:
        return round_half_up(height * source.width / source.height), height

    width_scale = width / source.width
    height_scale = height / source.height
    if width_scale <= height_scale:
        return width, round_half_up(source.height * width_scale)
    return round_half_up(source.width * height_scale), height


def normalize_hires(value: Any) -> Any:
    """
    Normalize a hires width option.

    Returns "source", a float (factor or pixel width), or None to disable
    high resolution variants.
    """
    if value is None or value is False:
        return None
    if value is True:
        return HIRES_SOURCE
    if isinstance(value, str):
        if value.strip().lower() == HIRES_SOURCE:
            return HIRES_SOURCE
        try:
            value = float(value)
        except ValueError:
            raise ConfigurationError(f"Invalid hires value: {value!r}") from None
    if isinstance(value, (int, float)):
        if value == 0:
            return None
        if value < 0:
            raise ConfigurationError(f"Invalid hires value: {value}")
        return float(value)
    raise ConfigurationError(f"Invalid hires value: {value!r}")


def resolve_max_height(hires_height: Any, source: SourceImage) -> Optional[int]:
    """Height ceiling from the hires height option."""
    if hires_height is None:
        return None
    if hires_height == HIRES_SOURCE:
        return source.height
    if isinstance(hires_height, bool) or not isinstance(hires_height, int):
        raise ConfigurationError(f"Invalid hires height: {hires_height!r}, expected an integer or '{HIRES_SOURCE}'")
    return hires_height


def resolution_factors(max_factor: float, step: float) -> List[float]:
    """Factors from max_factor down to 1, biggest first; 1.0 is always included."""
    count = int(math.floor((max_factor - 1) / step + 1e-9))
    factors = [round(max_factor - i * step, 6) for i in range(count + 1)]
    factors = [f for f in factors if f >= 1]
    if not factors or factors[-1] != 1:
        factors.append(1.0)
    return factors


class ResolutionExpander:
    """Expands a Grid into resolution variants capped by the source size."""

    def __init__(
        self,
        max_resolution_factor: float = 2.0,
        resolution_step: float = 0.5,
        hires: Any = HIRES_SOURCE,
        hires_height: Any = None
    ):
        """
        Initialize the expander.

        Args:
            max_resolution_factor: Biggest device-pixel-ratio to support.
            resolution_step: Decrement between factors.
            hires: "source" to cap at the source width, a factor (<= 10)
                overriding max_resolution_factor, a pixel width (> 10), or a
                falsy value to only produce 1x.
            hires_height: "source", a pixel height, or None for no limit.
        """
        self.hires = normalize_hires(hires)
        self.hires_height = hires_height
        self.max_resolution_factor = float(max_resolution_factor)
        self.resolution_step = float(resolution_step)

    def limits(self, source: SourceImage) -> Tuple[float, int, Optional[int]]:
        """
        Resolve (max factor, max width, max height) for a source.

        Raises:
            ConfigurationError: On an invalid factor, step or height option.
        """
        max_factor = self.max_resolution_factor
        max_width = source.width

        if self.hires is None:
            max_factor = 1.0
        elif self.hires != HIRES_SOURCE:
            if self.hires <= MAX_FACTOR_VALUE:
                max_factor = self.hires
                max_width = min(source.width, int(source.width * max_factor))
            else:
                max_width = min(source.width, int(self.hires))

        max_height = resolve_max_height(self.hires_height, source)

        if max_factor < 1:
            raise ConfigurationError(f"Invalid max resolution: {max_factor}")
        if self.resolution_step <= 0:
            raise ConfigurationError(f"Invalid resolution step: {self.resolution_step}")

        return max_factor, max_width, max_height

    def expand(self, grid: Grid, source: SourceImage) -> ResolutionDict:
        """
        Build the resolution dictionary for a Grid.

        Args:
            grid: Target sizes, biggest media query first.
            source: Source image dimensions.

        Returns:
            ResolutionDict in the Grid's key order; factors biggest first.
            Activation width 0 always has at least one entry.
        """
        max_factor, max_width, max_height = self.limits(source)
        factors = resolution_factors(max_factor, self.resolution_step)

        resolutions: ResolutionDict = {}
        for activation, entry in grid.items():
            if entry.width <= 0:
                # degenerate layout, passed through unscaled for the caller to reject
                resolutions[activation] = {1.0: entry.width}
                continue

            variants = {}
            for factor in factors:
                width = math.floor(entry.width * factor)
                height = math.floor(entry.height * factor) if entry.height else None
                hires_width, hires_height = reproportion(source, width, height)

                if hires_width > max_width:
                    continue
                if max_height is not None and hires_height is not None and hires_height > max_height:
                    continue
                variants[factor] = hires_width
            if variants:
                resolutions[activation] = variants

        if 0 not in resolutions:
            # nothing fits the smallest screens, fall back to the biggest width we may serve
            resolutions[0] = {1.0: max_width}

        return resolutions
