"""
Grid resolution: column fractions + breakpoint table -> target widths per media query.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from responsive_images.models import (
    BreakpointTable,
    ColumnFraction,
    Grid,
    GridEntry,
)
from responsive_images.utils.engine_logger import get_logger


def _ceil_fraction(container_width: int, numerator: int, grid_columns: int) -> int:
    """ceil(container * numerator / columns) in integer arithmetic."""
    return -(-(container_width * numerator) // grid_columns)


class GridResolver:
    """Computes the Grid for a breakpoint table."""

    def __init__(
        self,
        table: BreakpointTable,
        grid_columns: int = 12,
        gutter_width: int = 0,
        container_max_height: Optional[int] = None
    ):
        """
        Initialize the resolver.

        Args:
            table: Breakpoint table, largest first.
            grid_columns: Number of columns in the grid.
            gutter_width: Padding subtracted on each side of a column.
            container_max_height: Optional fixed height for every entry.
        """
        self.table = table
        self.grid_columns = grid_columns
        self.gutter_width = gutter_width
        self.container_max_height = container_max_height

    def sort_fractions(self, fractions: Iterable[ColumnFraction]) -> List[ColumnFraction]:
        """
        Order fractions from the smallest breakpoint to the largest.

        Bigger column definitions are applied last so they win at their own
        breakpoint. Fractions for unknown breakpoints are dropped.
        """
        known = set(self.table.names())
        usable = [f for f in fractions if f.is_xs or f.breakpoint in known]
        return sorted(usable, key=lambda f: (self.table.container(f.breakpoint), f.numerator))

    def resolve(self, fractions: Iterable[ColumnFraction]) -> Grid:
        """
        Build the Grid for a set of column fractions.

        Args:
            fractions: Parsed column fractions; empty means full container width.

        Returns:
            Grid keyed by activation width, biggest media query first, always
            ending with activation width 0.
        """
        gutter = 2 * self.gutter_width
        ordered = self.sort_fractions(fractions)
        widths: Dict[int, int] = {}

        if not ordered:
            # no columns: the image fills each container
            for bp in self.table.breakpoints:
                widths[bp.activation_width] = bp.container_width - gutter
            widths[0] = self.table.smallest.container_width - gutter
        else:
            for bp in self.table.breakpoints:
                for fraction in ordered:
                    if fraction.is_xs or self.table.container(fraction.breakpoint) <= bp.container_width:
                        # one entry per media width; the sort order decides who wins
                        widths[bp.activation_width] = (
                            _ceil_fraction(bp.container_width, fraction.numerator, self.grid_columns) - gutter
                        )

        if 0 not in widths:
            smallest = self.table.smallest.container_width
            xs_fractions = [f for f in ordered if f.is_xs]
            if xs_fractions:
                widths[0] = _ceil_fraction(smallest, xs_fractions[-1].numerator, self.grid_columns) - gutter
            else:
                widths[0] = smallest - gutter

        degenerate = {activation: width for activation, width in widths.items() if width <= 0}
        if degenerate:
            get_logger().warning(
                f"Gutter leaves no room for the image at {sorted(degenerate)}",
                widths=degenerate,
                gutter_width=self.gutter_width,
            )

        return {
            activation: GridEntry(width=widths[activation], height=self.container_max_height)
            for activation in sorted(widths, reverse=True)
        }


class GridCache:
    """
    Memoizes Grids for repeated layouts within one render session.

    Owned by a single engine instance; never share one across requests.
    """

    def __init__(self):
        self._grids: Dict[Tuple, Grid] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(
        table: BreakpointTable,
        signature: str,
        grid_columns: int,
        gutter_width: int,
        container_max_height: Optional[int]
    ) -> Tuple:
        return (table, grid_columns, gutter_width, container_max_height, signature)

    def get(self, key: Tuple) -> Optional[Grid]:
        grid = self._grids.get(key)
        if grid is None:
            self.misses += 1
            return None
        self.hits += 1
        return dict(grid)

    def put(self, key: Tuple, grid: Grid):
        self._grids[key] = dict(grid)

    def clear(self):
        self._grids.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: Tuple) -> bool:
        return key in self._grids

    def __len__(self) -> int:
        return len(self._grids)
