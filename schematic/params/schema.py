"""Parameter schema with validation. Characters, bit widths, backends."""

from dataclasses import dataclass, field, asdict
from typing import Any

DIGITS = "0123456789"

BACKENDS = ("auto", "cpu", "cuda", "vulkan")


class ValidationError(ValueError):
    """Parameter validation failed."""
    pass


def _single_char(value: str, name: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise ValidationError(f"{name} must be a single character, got {value!r}")
    if value in DIGITS:
        raise ValidationError(f"{name} must not be a digit, got {value!r}")


@dataclass(frozen=True)
class TokenizerParams:
    """Tokenizer: gear (gear symbol), gap (empty cell), max_bits (number width)."""
    gear: str = "*"
    gap: str = "."
    max_bits: int = 64

    def __post_init__(self) -> None:
        _single_char(self.gear, "gear")
        _single_char(self.gap, "gap")
        if self.gear == self.gap:
            raise ValidationError(f"gear and gap must differ, both are {self.gear!r}")
        if not 1 <= self.max_bits <= 1024:
            raise ValidationError(f"max_bits must be in [1, 1024], got {self.max_bits}")

    @property
    def max_value(self) -> int:
        """Largest number that fits in max_bits unsigned bits."""
        return (1 << self.max_bits) - 1


@dataclass(frozen=True)
class VerifyParams:
    """Verification: enabled (run raster cross-check), backend (Taichi arch)."""
    enabled: bool = False
    backend: str = "auto"

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValidationError(
                f"backend must be one of {', '.join(BACKENDS)}, got {self.backend!r}"
            )


@dataclass(frozen=True)
class SolverConfig:
    """Complete solver configuration."""

    tokenizer: TokenizerParams = field(default_factory=TokenizerParams)
    verify: VerifyParams = field(default_factory=VerifyParams)

    def to_dict(self) -> dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "tokenizer": asdict(self.tokenizer),
            "verify": asdict(self.verify),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SolverConfig":
        """Create from nested dictionary."""
        param_classes = {
            "tokenizer": TokenizerParams,
            "verify": VerifyParams,
        }
        unknown = set(data) - set(param_classes)
        if unknown:
            raise ValidationError(f"Unknown parameter group(s): {', '.join(sorted(unknown))}")
        kwargs = {}
        for key, value in data.items():
            if value is None:
                continue
            if not isinstance(value, dict):
                raise ValidationError(f"Parameter group '{key}' must be a mapping, got {type(value)}")
            try:
                kwargs[key] = param_classes[key](**value)
            except TypeError as e:
                raise ValidationError(f"Invalid parameters for '{key}': {e}") from e
        return cls(**kwargs)

    def with_updates(self, **kwargs: Any) -> "SolverConfig":
        """Create new config with updates."""
        current = self.to_dict()
        for key, value in kwargs.items():
            if key not in current:
                raise ValidationError(f"Unknown parameter group: {key}")
            if isinstance(value, dict):
                current[key].update(value)
            else:
                current[key] = asdict(value)
        return self.from_dict(current)

    # Convenience accessors
    @property
    def gear(self) -> str:
        return self.tokenizer.gear

    @property
    def max_value(self) -> int:
        return self.tokenizer.max_value
