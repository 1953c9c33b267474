"""
Row tokenizer for schematic grids.

Scans one line left to right with a column cursor and yields
(Span, Token) pairs:

- a run of gap characters ('.') produces nothing and only moves the cursor
- a maximal run of ASCII digits produces one Number spanning every digit
- any other character produces a one-column Symbol (GEAR for the gear
  character, NON_GEAR otherwise)

Unicode digits and control characters are not digits here; they classify
as NON_GEAR symbols.
"""

from typing import Iterator

from schematic.core.geometry import Span
from schematic.core.tokens import Number, Symbol, Token
from schematic.params.schema import DIGITS, TokenizerParams


class ParseError(ValueError):
    """A digit run could not be converted to a number of the configured width."""

    def __init__(self, row: int, column: int, text: str, max_bits: int):
        self.row = row
        self.column = column
        self.text = text
        self.max_bits = max_bits
        super().__init__(
            f"Number {text!r} at row {row}, column {column} "
            f"does not fit in {max_bits} unsigned bits"
        )


def _run_length(line: str, cursor: int, chars: str) -> int:
    """Length of the run of characters from `chars` starting at cursor."""
    end = cursor
    while end < len(line) and line[end] in chars:
        end += 1
    return end - cursor


def tokenize_row(
    line: str,
    params: TokenizerParams | None = None,
    row: int = 0,
) -> Iterator[tuple[Span, Token]]:
    """Tokenize one row of a schematic.

    Args:
        line: Row text, without its line terminator
        params: Tokenizer parameters (gear/gap characters, number width)
        row: Row index, only used in error messages

    Yields:
        (Span, Token) pairs in left-to-right order

    Raises:
        ParseError: If a digit run exceeds params.max_bits
    """
    params = params or TokenizerParams()
    # One line terminator at most; any other trailing \r is a symbol
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    cursor = 0

    while cursor < len(line):
        # Gaps
        cursor += _run_length(line, cursor, params.gap)
        if cursor >= len(line):
            break

        # Numbers
        n_digits = _run_length(line, cursor, DIGITS)
        if n_digits:
            text = line[cursor:cursor + n_digits]
            # Convert only the significant digits so long runs, including
            # long zero padding, never hit the int/str conversion limit
            significant = text.lstrip("0")
            if len(significant) > len(str(params.max_value)):
                raise ParseError(row, cursor, text, params.max_bits)
            value = int(significant or "0")
            if value > params.max_value:
                raise ParseError(row, cursor, text, params.max_bits)
            yield Span(cursor, cursor + n_digits), Number(value)
            cursor += n_digits
            continue

        # Symbols
        if line[cursor] == params.gear:
            yield Span(cursor, cursor + 1), Symbol.gear()
        else:
            yield Span(cursor, cursor + 1), Symbol.non_gear()
        cursor += 1
