"""
Column class parsing: turns ``col-*`` tokens into column fractions.
"""

import re
from typing import AbstractSet, FrozenSet, Iterable, Optional, Union

from responsive_images.models import XS, ColumnFraction


# col, col-6, col-md, col-md-6, col-xs-6
COLUMN_PATTERN = re.compile(r"^col(?:-(?P<breakpoint>[a-z]+))?(?:-(?P<numerator>\d+))?$")


def tokenize(classes: Union[str, Iterable[str], None]) -> list:
    """Split a class attribute (or a list of class strings) into tokens."""
    if not classes:
        return []
    if isinstance(classes, str):
        return classes.split()
    tokens = []
    for item in classes:
        tokens.extend(str(item).split())
    return tokens


def parse_token(
    token: str,
    grid_columns: int = 12,
    breakpoints: Optional[AbstractSet[str]] = None
) -> Optional[ColumnFraction]:
    """
    Parse a single class token.

    Args:
        token: A CSS class name.
        grid_columns: Number of columns in the grid.
        breakpoints: Known breakpoint names; unknown names are dropped when given.

    Returns:
        ColumnFraction, or None if the token is not a usable column class.
    """
    match = COLUMN_PATTERN.match(token.strip().lower())
    if not match:
        return None

    breakpoint = match.group("breakpoint") or XS
    numerator = int(match.group("numerator")) if match.group("numerator") else grid_columns

    if breakpoints is not None and breakpoint != XS and breakpoint not in breakpoints:
        return None
    if not 1 <= numerator <= grid_columns:
        return None

    return ColumnFraction(numerator=numerator, breakpoint=breakpoint)


def parse_columns(
    classes: Union[str, Iterable[str], None],
    grid_columns: int = 12,
    breakpoints: Optional[AbstractSet[str]] = None
) -> FrozenSet[ColumnFraction]:
    """
    Parse column classes into a set of fractions.

    Arbitrary CSS classes may be mixed in; anything that is not a column
    class is ignored. Duplicates collapse.

    Args:
        classes: "col-6 col-lg-4 text-center" or a list of tokens.
        grid_columns: Number of columns in the grid.
        breakpoints: Known breakpoint names.

    Returns:
        Frozen set of ColumnFraction (empty means full container width).
    """
    fractions = set()
    for token in tokenize(classes):
        fraction = parse_token(token, grid_columns, breakpoints)
        if fraction is not None:
            fractions.add(fraction)
    return frozenset(fractions)


def normalize_signature(fractions: Iterable[ColumnFraction]) -> str:
    """Stable, order independent signature for a set of fractions."""
    parts = sorted(f"col-{f.breakpoint}-{f.numerator}" for f in fractions)
    return " ".join(parts)
