"""
Taichi runtime setup for the raster cross-check.

The index backend never touches Taichi. Only `--verify` and the benchmarks
need a runtime, and they get one through init_taichi().

Environment variables:
    SCHEMATIC_BACKEND: backend used when config asks for 'auto'
        ('cuda', 'vulkan', 'cpu' or 'auto', the default)
    SCHEMATIC_DEBUG: '1' turns on Taichi bounds checking
"""

import os
import shutil
import subprocess

import taichi as ti

from schematic.core.dtypes import MASK_DTYPE
from schematic.params.schema import BACKENDS, ValidationError

ARCHS = {"cuda": ti.cuda, "vulkan": ti.vulkan, "cpu": ti.cpu}


def has_cuda() -> bool:
    """True when nvidia-smi lists at least one GPU."""
    if shutil.which("nvidia-smi") is None:
        return False
    try:
        result = subprocess.run(
            ["nvidia-smi", "-L"], capture_output=True, text=True, timeout=5
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return result.returncode == 0 and "GPU" in result.stdout


def get_backend() -> str:
    """Backend named by SCHEMATIC_BACKEND; 'auto' picks cuda when present, else cpu.

    Raises:
        ValidationError: If SCHEMATIC_BACKEND is not one of BACKENDS
    """
    env = os.environ.get("SCHEMATIC_BACKEND", "auto").strip().lower()
    if env not in BACKENDS:
        raise ValidationError(
            f"SCHEMATIC_BACKEND must be one of {', '.join(BACKENDS)}, got {env!r}"
        )
    if env != "auto":
        return env
    return "cuda" if has_cuda() else "cpu"


def init_taichi(
    backend: str | None = None,
    debug: bool | None = None,
    kernel_profiler: bool = False,
) -> str:
    """Initialize Taichi for the raster kernels.

    Args:
        backend: 'cuda', 'vulkan', 'cpu'; 'auto' or None defers to get_backend()
        debug: Bounds-checked kernels; defaults to SCHEMATIC_DEBUG
        kernel_profiler: Enable the Taichi kernel profiler

    Returns:
        The backend that was initialized
    """
    if backend is None or backend == "auto":
        backend = get_backend()
    if backend not in ARCHS:
        raise ValidationError(f"Unknown backend: {backend}")
    if debug is None:
        debug = os.environ.get("SCHEMATIC_DEBUG", "0") == "1"

    # Masks and labels are integers; no float fields are created
    ti.init(
        arch=ARCHS[backend],
        default_ip=MASK_DTYPE,
        debug=debug,
        offline_cache=True,
        kernel_profiler=kernel_profiler,
    )
    return backend
