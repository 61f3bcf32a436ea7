"""
Resolution matching for pre-rendered images with a fixed set of widths.
"""

from typing import Dict, Iterable, Union

from responsive_images.errors import ConfigurationError
from responsive_images.models import ResolutionDict


def match_static_widths(
    widths: Union[Iterable[int], Dict[int, int]],
    max_resolution_factor: float = 1.0,
    resolution_step: float = 0.5
) -> ResolutionDict:
    """
    Pick an existing width for every resolution factor.

    Args:
        widths: Available widths, or a media width -> width mapping. A plain
            list uses each width as its own media width.
        max_resolution_factor: Biggest factor to look for.
        resolution_step: Increment between factors.

    Returns:
        ResolutionDict keyed by media width, biggest first. For each factor
        the exact width or the smallest bigger one is used; factors without a
        candidate are left out.
    """
    if max_resolution_factor < 1:
        raise ConfigurationError(f"Invalid max resolution: {max_resolution_factor}")
    if resolution_step <= 0:
        raise ConfigurationError(f"Invalid resolution step: {resolution_step}")

    if isinstance(widths, dict):
        media = dict(widths)
    else:
        media = {width: width for width in widths}
    if not media:
        raise ConfigurationError("No widths given")

    available = sorted(set(media.values()))
    factors = []
    i = 0
    while True:
        factor = round(1 + i * resolution_step, 6)
        if factor > max_resolution_factor:
            break
        factors.append(factor)
        i += 1

    resolutions: ResolutionDict = {}
    for media_width in sorted(media, reverse=True):
        width = media[media_width]
        variants = {}
        for factor in reversed(factors):
            wanted = width * factor
            found = next((w for w in available if w >= wanted), None)
            if found is not None:
                variants[factor] = found
        resolutions[media_width] = variants
    return resolutions
