"""
Dense raster view of a built schematic.

The index stores tokens sparsely by span. For the cross-check backend the
same tokens are painted onto numpy arrays of shape (max_row + 1, width):

- symbols: 1 on every symbol cell, 0 elsewhere
- labels: k + 1 on every cell of the k-th number token, 0 elsewhere

A number keeps a single label across all its digits, which is what lets the
raster side count each number once per gear.
"""

from dataclasses import dataclass, field

import numpy as np

from schematic.core.tokens import Number, Symbol
from schematic.index import Schematic


@dataclass
class Raster:
    """Dense arrays for one schematic.

    Attributes:
        symbols: int32 mask of symbol cells
        labels: int32 number labels (0 = no number)
        values: Number value for label k + 1 at index k
        gears: (row, col) of every gear cell, in read order
    """

    symbols: np.ndarray
    labels: np.ndarray
    values: list[int] = field(default_factory=list)
    gears: list[tuple[int, int]] = field(default_factory=list)

    @property
    def shape(self) -> tuple[int, int]:
        return self.symbols.shape

    @property
    def is_empty(self) -> bool:
        return self.symbols.size == 0

    def value_of(self, label: int) -> int:
        """Number value for a non-zero label."""
        return self.values[label - 1]


def rasterize(schematic: Schematic) -> Raster:
    """Paint the tokens of a built schematic onto dense arrays.

    Args:
        schematic: Built Schematic

    Returns:
        Raster with shape (max_row + 1, width); width is 0 for a grid with
        no tokens
    """
    if not schematic.is_built:
        raise RuntimeError("Schematic has not been built; use Schematic.build()")

    shape = (schematic.max_row + 1, schematic.width)
    symbols = np.zeros(shape, dtype=np.int32)
    labels = np.zeros(shape, dtype=np.int32)
    values: list[int] = []

    for position, token in schematic.items():
        row, span = position.row, position.span
        if isinstance(token, Number):
            values.append(token.value)
            labels[row, span.start:span.end] = len(values)
        elif isinstance(token, Symbol):
            symbols[row, span.start:span.end] = 1

    gears = [(p.row, p.span.start) for p in schematic.gear_positions]
    return Raster(symbols=symbols, labels=labels, values=values, gears=gears)
