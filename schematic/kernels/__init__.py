"""
Solver backends for schematic answers.

Two variants compute the same answers:
- INDEX: bounded range lookups on the ordered schematic index (reference)
- RASTER: dense arrays and a Taichi dilation kernel (cross-check)

Usage:
    from schematic.kernels import SolverVariant, solve

    answers = solve(schematic, SolverVariant.RASTER)

The RASTER variant needs Taichi to be initialized first
(see schematic.config.init_taichi).
"""

from enum import Enum, auto

from schematic.diagnostics import Answers
from schematic.index import Schematic
from schematic.kernels.adjacency import (
    dilate_mask,
    near_symbols,
    raster_sum_eligible_numbers,
    raster_sum_gear_ratios,
)
from schematic.raster import rasterize


class SolverVariant(Enum):
    """Available solver implementations."""

    INDEX = auto()  # Reference implementation
    RASTER = auto()  # Dense raster with Taichi kernels


def solve(schematic: Schematic, variant: SolverVariant = SolverVariant.INDEX) -> Answers:
    """Compute both answers with the chosen backend.

    Args:
        schematic: Built Schematic
        variant: Implementation variant (default: INDEX)

    Returns:
        Answers for part 1 and part 2

    Raises:
        KeyError: If variant is not a known SolverVariant
    """
    if variant is SolverVariant.INDEX:
        return Answers(schematic.sum_eligible_numbers(), schematic.sum_gear_ratios())
    if variant is SolverVariant.RASTER:
        raster = rasterize(schematic)
        return Answers(raster_sum_eligible_numbers(raster), raster_sum_gear_ratios(raster))
    raise KeyError(
        f"No solver registered for variant {variant}. "
        f"Available: {list(SolverVariant)}"
    )


__all__ = [
    "SolverVariant",
    "solve",
    "dilate_mask",
    "near_symbols",
    "raster_sum_eligible_numbers",
    "raster_sum_gear_ratios",
]
