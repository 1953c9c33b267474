"""
SolverConfig <-> YAML.

A config file holds up to two mappings, `tokenizer` and `verify`; anything
left out keeps its default. The CLI reads one file per run and then lays its
--verify/--backend flags over the `verify` group.
"""

from pathlib import Path
from typing import Any

import yaml

from schematic.params.schema import SolverConfig, ValidationError


def load_config(path: str | Path) -> SolverConfig:
    """
    Read a SolverConfig from YAML. An empty file gives the defaults.

    Raises:
        FileNotFoundError: If `path` does not exist
        ValidationError: If the document is not a mapping, or a value is invalid
        yaml.YAMLError: If the YAML is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"Configuration must be a dictionary, got {type(data)}")

    return SolverConfig.from_dict(data)


def save_config(config: SolverConfig, path: str | Path) -> None:
    """Write `config` as YAML, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False))


def resolve_config(
    path: str | Path | None = None,
    verify: dict[str, Any] | None = None,
) -> SolverConfig:
    """
    Config for one solver run.

    Args:
        path: YAML file to start from; None starts from the defaults
        verify: `verify` fields set on the command line, e.g.
            {"enabled": True, "backend": "cpu"}. They win over the file.
    """
    config = load_config(path) if path is not None else SolverConfig()
    if verify:
        config = config.with_updates(verify=verify)
    return config
