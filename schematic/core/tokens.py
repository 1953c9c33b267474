"""Token types produced by the row tokenizer."""

from dataclasses import dataclass
from enum import Enum, auto


class SymbolKind(Enum):
    """Kinds of symbol tokens."""

    GEAR = auto()  # the gear character, '*' by default
    NON_GEAR = auto()  # any other non-digit, non-gap character


@dataclass(frozen=True)
class Number:
    """A run of digits, stored as its integer value."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"value must be non-negative, got {self.value}")


@dataclass(frozen=True)
class Symbol:
    """A single-column symbol."""

    kind: SymbolKind

    @property
    def is_gear(self) -> bool:
        return self.kind is SymbolKind.GEAR

    @classmethod
    def gear(cls) -> "Symbol":
        return cls(SymbolKind.GEAR)

    @classmethod
    def non_gear(cls) -> "Symbol":
        return cls(SymbolKind.NON_GEAR)


Token = Number | Symbol
