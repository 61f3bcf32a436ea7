"""
Grid computation: column parsing, breakpoint arithmetic and crop oversampling.
"""

from responsive_images.grid.columns import normalize_signature, parse_columns
from responsive_images.grid.ratio import adjust_grid, parse_ratio, wrapper_kind
from responsive_images.grid.resolver import GridCache, GridResolver

__all__ = [
    "GridCache",
    "GridResolver",
    "adjust_grid",
    "normalize_signature",
    "parse_columns",
    "parse_ratio",
    "wrapper_kind",
]
