"""Spans, positions and neighbour indexing for schematic grids.

This module centralizes all spatial indexing logic:
- Span: Half-open column interval [start, end) on one row
- Position: (row, span) key with lexicographic ordering
- Neighbor vectors: 8-connectivity offsets for the raster kernels
- Helper functions: Saturating row ranges around a token

8-Connectivity Layout (clockwise from East):
    Index:  5  6  7
            4  X  0
            3  2  1

    Direction 0: East  (+j)
    Direction 1: SE    (+i, +j)
    Direction 2: South (+i)
    Direction 3: SW    (+i, -j)
    Direction 4: West  (-j)
    Direction 5: NW    (-i, -j)
    Direction 6: North (-i)
    Direction 7: NE    (-i, +j)
"""

from dataclasses import dataclass

import taichi as ti

# Number of neighbors in 8-connectivity
NUM_NEIGHBORS: int = 8

# 8-connectivity neighbor offsets
# Row offset (i): positive = South (next row), negative = North
NEIGHBOR_DI = ti.Vector([0, 1, 1, 1, 0, -1, -1, -1])

# Column offset (j): positive = East, negative = West
NEIGHBOR_DJ = ti.Vector([1, 1, 0, -1, -1, -1, 0, 1])


@dataclass(frozen=True, order=True)
class Span:
    """Half-open column interval [start, end).

    Attributes:
        start: First column covered
        end: One past the last column covered

    Token spans always satisfy start < end. Empty spans (start == end) are
    only used as bounds for range lookups.
    """

    start: int
    end: int

    def __post_init__(self):
        """Validate interval bounds."""
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"end must be >= start, got [{self.start}, {self.end})")

    @property
    def width(self) -> int:
        """Number of columns covered."""
        return self.end - self.start

    def overlaps(self, other: "Span") -> bool:
        """Check whether two half-open intervals share at least one column."""
        return self.start < other.end and self.end > other.start

    def expanded(self, by: int = 1) -> "Span":
        """Grow the interval by `by` columns on each side.

        The start saturates at column 0. The end is left unbounded; callers
        compare it against stored spans, never index with it.
        """
        return Span(max(self.start - by, 0), self.end + by)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


@dataclass(frozen=True, order=True)
class Position:
    """Location of a token: a row and the span it covers on that row.

    Positions order by row, then span start, then span end, which is the
    key order of the schematic index.
    """

    row: int
    span: Span

    def __post_init__(self):
        """Validate row index."""
        if self.row < 0:
            raise ValueError(f"row must be >= 0, got {self.row}")

    @classmethod
    def at(cls, row: int, start: int, end: int) -> "Position":
        """Build a position from raw coordinates."""
        return cls(row, Span(start, end))

    @classmethod
    def row_start(cls, row: int) -> "Position":
        """Smallest possible key on `row` (lower bound for row lookups)."""
        return cls(row, Span(0, 0))

    def __str__(self) -> str:
        return f"row {self.row} cols {self.span}"


def adjacent_rows(row: int, max_row: int) -> range:
    """Rows row-1, row, row+1 clamped to [0, max_row].

    Args:
        row: Centre row
        max_row: Largest row index in the grid

    Returns:
        Range of row indices, never negative and never past max_row
    """
    return range(max(row - 1, 0), min(row + 1, max_row) + 1)
