"""
Parameter management for the schematic solver.

This module provides:
- Validated, immutable parameter containers (schema.py)
- YAML loading utilities (loader.py)
"""

from schematic.params.schema import (
    TokenizerParams,
    VerifyParams,
    SolverConfig,
    ValidationError,
)
from schematic.params.loader import load_config, resolve_config, save_config

__all__ = [
    # Schema classes
    "TokenizerParams",
    "VerifyParams",
    "SolverConfig",
    "ValidationError",
    # Loader functions
    "load_config",
    "resolve_config",
    "save_config",
]
