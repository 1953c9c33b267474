"""
Raster adjacency kernels.

Part 1 on the raster: dilate the symbol mask over 8-connectivity, then every
number label that appears under the dilated mask is eligible.

Part 2 on the raster: for each gear, the distinct labels inside its 3x3
window (clipped at the grid edge) are its adjacent numbers.
"""

import numpy as np
import taichi as ti

from schematic.core.dtypes import MASK_DTYPE
from schematic.core.geometry import NEIGHBOR_DI, NEIGHBOR_DJ, NUM_NEIGHBORS
from schematic.index import ratio_of
from schematic.raster import Raster


@ti.kernel
def dilate_mask(src: ti.template(), dst: ti.template()):
    """
    Mark every cell whose 3x3 neighbourhood contains a set cell.

    Neighbours outside the grid are skipped, so edge and corner cells only
    see the part of the window that exists.
    """
    nx = src.shape[0]
    ny = src.shape[1]
    for i, j in src:
        hit = src[i, j]
        for k in ti.static(range(NUM_NEIGHBORS)):
            ni = i + NEIGHBOR_DI[k]
            nj = j + NEIGHBOR_DJ[k]
            if 0 <= ni < nx and 0 <= nj < ny:
                if src[ni, nj] == 1:
                    hit = 1
        dst[i, j] = hit


def near_symbols(raster: Raster) -> np.ndarray:
    """Dilated symbol mask as a numpy array (1 = within one cell of a symbol)."""
    src = ti.field(dtype=MASK_DTYPE, shape=raster.shape)
    dst = ti.field(dtype=MASK_DTYPE, shape=raster.shape)
    src.from_numpy(raster.symbols)
    dilate_mask(src, dst)
    return dst.to_numpy()


def raster_sum_eligible_numbers(raster: Raster) -> int:
    """Part 1 computed on the raster."""
    if raster.is_empty:
        return 0
    near = near_symbols(raster)
    hit = np.unique(raster.labels[(near == 1) & (raster.labels > 0)])
    return sum(raster.value_of(int(label)) for label in hit)


def gear_labels(raster: Raster, row: int, col: int) -> list[int]:
    """Distinct number labels in the clipped 3x3 window around (row, col)."""
    window = raster.labels[max(row - 1, 0):row + 2, max(col - 1, 0):col + 2]
    return [int(label) for label in np.unique(window[window > 0])]


def raster_sum_gear_ratios(raster: Raster) -> int:
    """Part 2 computed on the raster."""
    total = 0
    for row, col in raster.gears:
        labels = gear_labels(raster, row, col)
        total += ratio_of([raster.value_of(label) for label in labels])
    return total
