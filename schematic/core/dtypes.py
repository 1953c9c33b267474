"""Type definitions for the raster kernels.

Raster fields hold 0/1 masks and number labels, so a 32-bit signed integer
is enough. Number values themselves never enter a Taichi field; they stay
Python ints so that products and sums cannot wrap.
"""

import taichi as ti

# Integer type for all raster fields
MASK_DTYPE = ti.i32
