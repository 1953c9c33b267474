"""
Scaling benchmark: index build and queries against the raster backend.

Usage:
    python -m benchmarks.scaling [--sizes 140 512 1024] [--backend cpu] [--profile]
"""

import argparse
import gc
import time
from dataclasses import dataclass

import numpy as np
import taichi as ti

from schematic.config import init_taichi
from schematic.diagnostics import check_agreement
from schematic.index import Schematic
from schematic.kernels import SolverVariant, solve

DEFAULT_SIZES = [140, 512, 1024, 2048]


@dataclass
class ScalingMetrics:
    grid_size: int
    n_tokens: int
    build_s: float
    index_s: float
    raster_s: float

    @property
    def n_cells(self) -> int:
        return self.grid_size * self.grid_size

    @property
    def megacells_per_second(self) -> float:
        return self.n_cells / (self.build_s + self.index_s) / 1e6


def random_grid(n: int, seed: int = 42) -> str:
    """Random n x n schematic: ~35% digits, ~8% symbols, half of them gears."""
    rng = np.random.default_rng(seed)
    u = rng.random((n, n))
    cells = np.full((n, n), ".", dtype="<U1")
    digits = u < 0.35
    cells[digits] = rng.integers(0, 10, size=int(digits.sum())).astype(str)
    symbols = (u >= 0.35) & (u < 0.43)
    cells[symbols] = np.where(rng.random(int(symbols.sum())) < 0.5, "*", "#")
    return "\n".join("".join(row) for row in cells) + "\n"


def run_single(n: int) -> ScalingMetrics:
    print(f"\nBenchmarking {n}x{n} ({n**2/1e6:.2f} M cells)...")

    gc.collect()
    text = random_grid(n)

    start_time = time.perf_counter()
    schematic = Schematic.build(text)
    build_s = time.perf_counter() - start_time

    start_time = time.perf_counter()
    reference = solve(schematic, SolverVariant.INDEX)
    index_s = time.perf_counter() - start_time

    # Warmup compiles the dilation kernel
    solve(Schematic.build(random_grid(8)), SolverVariant.RASTER)
    ti.sync()

    start_time = time.perf_counter()
    candidate = solve(schematic, SolverVariant.RASTER)
    ti.sync()
    raster_s = time.perf_counter() - start_time

    check_agreement(reference, candidate)

    return ScalingMetrics(
        grid_size=n,
        n_tokens=len(schematic),
        build_s=build_s,
        index_s=index_s,
        raster_s=raster_s,
    )


def print_report(results: list[ScalingMetrics]):
    print("\n" + "=" * 72)
    print(f"{'Grid':<10} {'Tokens':<12} {'Build (s)':<12} {'Index (s)':<12} {'Raster (s)':<12} {'Index MC/s':<12}")
    print("-" * 72)
    for r in results:
        print(
            f"{r.grid_size:<10} "
            f"{r.n_tokens:<12} "
            f"{r.build_s:>8.3f}    "
            f"{r.index_s:>8.3f}    "
            f"{r.raster_s:>8.3f}    "
            f"{r.megacells_per_second:>8.2f}"
        )
    print("=" * 72)


def main():
    parser = argparse.ArgumentParser(description="Schematic scaling benchmark")
    parser.add_argument("--sizes", type=int, nargs="+", default=DEFAULT_SIZES, help="Grid side lengths")
    parser.add_argument("--backend", choices=["auto", "cpu", "cuda", "vulkan"], default="auto")
    parser.add_argument("--profile", action="store_true", help="Enable Taichi kernel profiler")
    args = parser.parse_args()

    backend = init_taichi(backend=args.backend, debug=False, kernel_profiler=args.profile)
    print(f"Taichi backend: {backend}")

    results = [run_single(n) for n in args.sizes]
    print_report(results)

    if args.profile:
        ti.profiler.print_kernel_profiler_info()


if __name__ == "__main__":
    main()
