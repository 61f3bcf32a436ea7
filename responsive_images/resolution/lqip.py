"""
Low quality image placeholder selection.
"""

import base64
import re
from typing import Any, Optional

from responsive_images.errors import ConfigurationError
from responsive_images.models import (
    XS,
    LqipChoice,
    LqipKind,
    ResolutionDict,
    SourceImage,
)


LQIP_XS = XS
LQIP_PIXEL = "pixel"

# transparent 1x1 gif
PIXEL_DATA_URI = "data:image/gif;base64,R0lGODlhAQABAAAAACH5BAEKAAEALAAAAAABAAEAAAICTAEAOw=="

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def smallest_width(resolutions: ResolutionDict) -> int:
    """Smallest width across every breakpoint and factor."""
    widths = [width for factors in resolutions.values() for width in factors.values()]
    if not widths:
        raise ValueError("Resolution dictionary has no widths")
    return min(widths)


def svg_rect_data_uri(color: str, source: Optional[SourceImage] = None) -> str:
    """Solid color SVG with the source's proportions, as a data URI."""
    width, height = (source.width, source.height) if source else (100, 100)
    svg = (
        f'<svg preserveAspectRatio="none" viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="{width}" height="{height}" fill="{color}" /></svg>'
    )
    return "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("utf-8")


def pixel_choice() -> LqipChoice:
    return LqipChoice(kind=LqipKind.INLINE, data_uri=PIXEL_DATA_URI)


def select_lqip(
    resolutions: ResolutionDict,
    policy: Any = LQIP_XS,
    source: Optional[SourceImage] = None
) -> LqipChoice:
    """
    Choose the placeholder source.

    Args:
        resolutions: Computed resolution dictionary.
        policy: "xs" or None (smallest width), "pixel" (inline transparent
            pixel), a width in pixels, a hex color (inline SVG), or any other
            string as an alternate file.
        source: Source dimensions, used to keep the SVG's aspect ratio.

    Returns:
        LqipChoice.
    """
    if policy is None or policy == LQIP_XS or policy == "":
        return LqipChoice(kind=LqipKind.WIDTH, width=smallest_width(resolutions))

    if policy == LQIP_PIXEL:
        return pixel_choice()

    if isinstance(policy, bool):
        raise ConfigurationError(f"Invalid LQIP policy: {policy!r}")

    if isinstance(policy, (int, float)):
        return LqipChoice(kind=LqipKind.WIDTH, width=int(policy))

    if isinstance(policy, str):
        if policy.startswith("#"):
            if not HEX_COLOR.match(policy):
                raise ConfigurationError(f"Invalid LQIP color: {policy}")
            return LqipChoice(kind=LqipKind.INLINE, data_uri=svg_rect_data_uri(policy, source))
        if policy.isdigit():
            return LqipChoice(kind=LqipKind.WIDTH, width=int(policy))
        return LqipChoice(kind=LqipKind.FILE, file=policy)

    raise ConfigurationError(f"Invalid LQIP policy: {policy!r}")
