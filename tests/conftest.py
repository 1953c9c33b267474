"""Pytest fixtures and test utilities for the schematic solver."""


import numpy as np
import pytest

from schematic.config import init_taichi
from schematic.index import Schematic


EXAMPLE_GRID = """\
467..114..
...*......
..35..633.
......#...
617*......
.....+.58.
..592.....
......755.
...$.*....
.664.598..
"""


@pytest.fixture(scope="session", autouse=True)
def taichi_init():
    """Initialize Taichi once per test session with CPU backend."""
    init_taichi(backend="cpu", debug=True)
    yield


@pytest.fixture
def example_text():
    """The worked example grid."""
    return EXAMPLE_GRID


@pytest.fixture
def example():
    """Built schematic for the worked example grid."""
    return Schematic.build(EXAMPLE_GRID)


@pytest.fixture
def grid_factory():
    """Factory for random schematic grids."""
    return make_random_grid


@pytest.fixture
def brute_force():
    """Reference answers computed cell by cell on the raw text."""
    return brute_force_answers


def make_random_grid(
    rows: int,
    cols: int,
    seed: int = 0,
    p_digit: float = 0.35,
    p_symbol: float = 0.08,
    p_gear: float = 0.5,
) -> str:
    """Random grid of digits, gaps, gears and other symbols.

    Args:
        rows: Number of rows
        cols: Number of columns
        seed: RNG seed
        p_digit: Probability a cell is a digit
        p_symbol: Probability a cell is a symbol
        p_gear: Fraction of symbols that are gears
    """
    rng = np.random.default_rng(seed)
    others = list("#$%&+-/=@")
    lines = []
    for _ in range(rows):
        chars = []
        for u in rng.random(cols):
            if u < p_digit:
                chars.append(str(rng.integers(0, 10)))
            elif u < p_digit + p_symbol:
                chars.append("*" if rng.random() < p_gear else others[rng.integers(len(others))])
            else:
                chars.append(".")
        lines.append("".join(chars))
    return "\n".join(lines) + "\n"


def brute_force_answers(text: str) -> tuple[int, int]:
    """Answers by scanning every cell's neighbourhood directly on the text."""
    grid = [line for line in text.split("\n") if line != ""]
    rows = len(grid)

    def cell(r, c):
        if 0 <= r < rows and 0 <= c < len(grid[r]):
            return grid[r][c]
        return "."

    numbers = []  # (row, start, end, value)
    for r, line in enumerate(grid):
        c = 0
        while c < len(line):
            if line[c] in "0123456789":
                start = c
                while c < len(line) and line[c] in "0123456789":
                    c += 1
                numbers.append((r, start, c, int(line[start:c])))
            else:
                c += 1

    def is_symbol(ch):
        return ch not in "0123456789."

    part1 = 0
    for r, start, end, value in numbers:
        if any(
            is_symbol(cell(rr, cc))
            for rr in (r - 1, r, r + 1)
            for cc in range(start - 1, end + 1)
        ):
            part1 += value

    part2 = 0
    for r, line in enumerate(grid):
        for c, ch in enumerate(line):
            if ch != "*":
                continue
            adjacent = [
                value for nr, start, end, value in numbers
                if abs(nr - r) <= 1 and start - 1 <= c <= end
            ]
            if len(adjacent) == 2:
                part2 += adjacent[0] * adjacent[1]

    return part1, part2
