"""CLI entry point for the schematic solver.

Reads a schematic grid, builds the index once and prints both answers.
Optionally cross-checks them against the raster backend.
"""

import argparse
import sys
import time
from pathlib import Path

import yaml

from schematic.diagnostics import check_agreement
from schematic.index import Schematic
from schematic.kernels import SolverVariant, solve
from schematic.params import SolverConfig, ValidationError, resolve_config
from schematic.tokenizer import ParseError


def read_grid(path: str) -> str:
    """Read grid text from a file, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_text()


def verify_flags(args: argparse.Namespace) -> dict:
    """`verify` config fields set by --verify and --backend."""
    verify = {}
    if args.verify:
        verify["enabled"] = True
    if args.backend:
        verify["backend"] = args.backend
    return verify


def print_gears(schematic: Schematic):
    """Print one line per gear: position, adjacent numbers, ratio."""
    for gear in schematic.gears():
        numbers = ", ".join(str(n) for n in gear.numbers) or "-"
        print(f"gear at {gear.position}: numbers [{numbers}] ratio {gear.ratio}")


def run_verification(schematic: Schematic, config: SolverConfig, reference):
    """Initialize Taichi and compare the raster backend with the index."""
    # Imported here so plain runs never pay for Taichi initialization
    from schematic.config import init_taichi

    backend = init_taichi(backend=config.verify.backend)
    print(f"Verifying with raster backend ({backend})...")
    candidate = solve(schematic, SolverVariant.RASTER)
    check_agreement(reference, candidate)
    print("Raster backend agrees")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Engine schematic solver")
    parser.add_argument("input", type=str, help="Path to schematic grid ('-' for stdin)")
    parser.add_argument("--config", type=str, help="Path to YAML configuration file")
    parser.add_argument("--verify", action="store_true", help="Cross-check with the raster backend")
    parser.add_argument(
        "--backend",
        choices=["auto", "cpu", "cuda", "vulkan"],
        help="Taichi backend for --verify. Overrides config.",
    )
    parser.add_argument("--gears", action="store_true", help="Print every gear and its ratio")
    parser.add_argument("--timing", action="store_true", help="Print build and query timings")

    args = parser.parse_args(argv)

    try:
        config = resolve_config(args.config, verify_flags(args))
        text = read_grid(args.input)

        start_time = time.perf_counter()
        schematic = Schematic.build(text, config.tokenizer)
        build_time = time.perf_counter() - start_time

        start_time = time.perf_counter()
        answers = solve(schematic, SolverVariant.INDEX)
        query_time = time.perf_counter() - start_time

        if args.gears:
            print_gears(schematic)

        print(answers)

        if args.timing:
            print(f"Built {len(schematic)} tokens in {build_time * 1e3:.2f} ms")
            print(f"Answered in {query_time * 1e3:.2f} ms")

        if config.verify.enabled:
            run_verification(schematic, config, answers)

    except (FileNotFoundError, ParseError, ValidationError, yaml.YAMLError, AssertionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
