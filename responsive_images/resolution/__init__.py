"""
Resolution variants and placeholder selection.
"""

from responsive_images.resolution.expander import ResolutionExpander, reproportion
from responsive_images.resolution.lqip import select_lqip
from responsive_images.resolution.static import match_static_widths

__all__ = [
    "ResolutionExpander",
    "match_static_widths",
    "reproportion",
    "select_lqip",
]
