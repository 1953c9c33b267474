"""Core infrastructure: spans, positions, tokens and raster types."""

from schematic.core.dtypes import MASK_DTYPE
from schematic.core.geometry import (
    NEIGHBOR_DI,
    NEIGHBOR_DJ,
    NUM_NEIGHBORS,
    Position,
    Span,
    adjacent_rows,
)
from schematic.core.tokens import Number, Symbol, SymbolKind, Token

__all__ = [
    "MASK_DTYPE",
    "NEIGHBOR_DI",
    "NEIGHBOR_DJ",
    "NUM_NEIGHBORS",
    "Number",
    "Position",
    "Span",
    "Symbol",
    "SymbolKind",
    "Token",
    "adjacent_rows",
]
