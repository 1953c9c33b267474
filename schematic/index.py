"""
Schematic index: ordered token storage and adjacency queries.

Tokens are stored under their Position, which orders by (row, start, end).
The store is a sorted list of positions searched with bisect plus a dict from
position to token, so every query is a bounded range lookup instead of a
scan over the grid:

- row_slice(row): keys between (row, [0, 0)) and (row + 1, [0, 0))
- overlapping spans on a row: bisect to the first key starting at or after
  the window end, then walk left while spans still end after the window
  start. Spans on a row are disjoint and sorted, so their ends are sorted
  too and the walk stops at the first miss.

Two adjacency predicates are built on top and kept separate:

- symbol near number: expand the NUMBER's span by one column and look for
  a symbol on the three surrounding rows (part 1)
- numbers near gear: expand the GEAR's span by one column and collect every
  number on the three surrounding rows (part 2)

Both reduce to "cell distance <= 1", but mixing the two windows up is an
easy off-by-one.
"""

from bisect import bisect_left, insort
from dataclasses import dataclass
from typing import Iterator, Sequence

from schematic.core.geometry import Position, Span, adjacent_rows
from schematic.core.tokens import Number, Symbol, Token
from schematic.params.schema import TokenizerParams
from schematic.tokenizer import tokenize_row


@dataclass(frozen=True)
class Gear:
    """A gear symbol with the numbers adjacent to it.

    Attributes:
        position: Gear location
        numbers: Adjacent number values in row, then column order
        ratio: Product of the two numbers, or 0 unless exactly two are adjacent
    """

    position: Position
    numbers: tuple[int, ...]
    ratio: int


def ratio_of(numbers: Sequence[int]) -> int:
    """Gear ratio for a gear's adjacent numbers: their product when there
    are exactly two, otherwise 0."""
    if len(numbers) != 2:
        return 0
    return numbers[0] * numbers[1]


def split_rows(grid_text: str) -> list[str]:
    """Split grid text into rows.

    Only '\\n' separates rows (a trailing '\\r' is stripped by the
    tokenizer). A final line terminator does not start an extra row.
    """
    rows = grid_text.split("\n")
    if rows and rows[-1] == "":
        rows.pop()
    return rows


class Schematic:
    """Ordered Position -> Token store with adjacency queries.

    Build with Schematic.build(text). A built schematic is read-only.
    Schematic() on its own is an empty, unbuilt store: rows may be added with
    insert_row(), but adjacency and aggregate queries raise RuntimeError
    until freeze() is called.

    Attributes:
        params: Tokenizer parameters used for every row
        max_row: Largest row index seen (0 for an empty grid)
    """

    def __init__(self, params: TokenizerParams | None = None):
        self.params = params or TokenizerParams()
        self.max_row = 0
        self._keys: list[Position] = []
        self._tokens: dict[Position, Token] = {}
        self._gears: list[Position] = []
        self._built = False

    @classmethod
    def build(cls, grid_text: str, params: TokenizerParams | None = None) -> "Schematic":
        """Tokenize every row of `grid_text` and freeze the result.

        Args:
            grid_text: Grid rows separated by newlines
            params: Tokenizer parameters

        Returns:
            Built, read-only Schematic

        Raises:
            ParseError: If a number does not fit in params.max_bits
        """
        schematic = cls(params)
        for row, line in enumerate(split_rows(grid_text)):
            schematic.insert_row(row, line)
        schematic.freeze()
        return schematic

    # Construction

    def insert_row(self, row: int, line: str) -> None:
        """Tokenize one line and store its tokens under `row`."""
        if self._built:
            raise RuntimeError("Schematic is built and read-only")

        self.max_row = max(self.max_row, row)

        for span, token in tokenize_row(line, self.params, row=row):
            position = Position(row, span)
            if isinstance(token, Symbol) and token.is_gear:
                self._gears.append(position)
            self._insert(position, token)

    def _insert(self, position: Position, token: Token) -> None:
        if position not in self._tokens:
            # Rows arrive in order during build, so this is almost always an append
            if not self._keys or self._keys[-1] < position:
                self._keys.append(position)
            else:
                insort(self._keys, position)
        self._tokens[position] = token

    def freeze(self) -> None:
        """Mark construction finished. Queries are allowed from here on."""
        self._built = True

    @property
    def is_built(self) -> bool:
        return self._built

    def _require_built(self) -> None:
        if not self._built:
            raise RuntimeError("Schematic has not been built; use Schematic.build()")

    # Storage access

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, position: Position) -> bool:
        return position in self._tokens

    def __repr__(self) -> str:
        return (
            f"Schematic(tokens={len(self)}, max_row={self.max_row}, "
            f"gears={len(self._gears)}, built={self._built})"
        )

    def get(self, position: Position) -> Token | None:
        """Token stored at exactly `position`, or None."""
        return self._tokens.get(position)

    def items(self) -> Iterator[tuple[Position, Token]]:
        """All entries in key order."""
        for position in self._keys:
            yield position, self._tokens[position]

    @property
    def gear_positions(self) -> tuple[Position, ...]:
        """Gear positions in the order they were read."""
        return tuple(self._gears)

    @property
    def width(self) -> int:
        """One past the right-most column covered by any token."""
        return max((p.span.end for p in self._keys), default=0)

    # Range lookups

    def row_slice(self, row: int) -> list[tuple[Position, Token]]:
        """Entries on `row`, in column order."""
        lo = bisect_left(self._keys, Position.row_start(row))
        hi = bisect_left(self._keys, Position.row_start(row + 1))
        return [(p, self._tokens[p]) for p in self._keys[lo:hi]]

    def _overlapping(self, row: int, window: Span) -> Iterator[tuple[Position, Token]]:
        """Entries on `row` whose span overlaps `window`, right to left."""
        lo = bisect_left(self._keys, Position.row_start(row))
        hi = bisect_left(self._keys, Position(row, Span(window.end, window.end)))
        for i in range(hi - 1, lo - 1, -1):
            position = self._keys[i]
            if position.span.end <= window.start:
                break
            yield position, self._tokens[position]

    def any_symbol_in_window(self, row: int, window: Span) -> bool:
        """Check whether a symbol on `row` overlaps `window`."""
        self._require_built()
        return any(isinstance(token, Symbol) for _, token in self._overlapping(row, window))

    # Part 1: numbers next to symbols

    def is_eligible(self, position: Position) -> bool:
        """Check whether the number at `position` touches any symbol.

        The number's own span is widened by one column each side and tested
        against the row above, the same row and the row below.
        """
        self._require_built()
        if not isinstance(self._tokens.get(position), Number):
            return False
        window = position.span.expanded(1)
        return any(
            self.any_symbol_in_window(row, window)
            for row in adjacent_rows(position.row, self.max_row)
        )

    def eligible_number(self, position: Position) -> int | None:
        """Value of the number at `position` if it is eligible, else None."""
        if self.is_eligible(position):
            return self._tokens[position].value
        return None

    def eligible_numbers_by_row(self, row: int) -> list[int]:
        """Eligible number values on one row, in column order."""
        self._require_built()
        values = []
        for position, _ in self.row_slice(row):
            value = self.eligible_number(position)
            if value is not None:
                values.append(value)
        return values

    def sum_eligible_numbers(self) -> int:
        """Sum of every number adjacent to at least one symbol."""
        self._require_built()
        total = 0
        for row in range(self.max_row + 1):
            total += sum(self.eligible_numbers_by_row(row))
        return total

    # Part 2: gears

    def _numbers_near_gear(self, position: Position) -> list[tuple[Position, int]]:
        window = position.span.expanded(1)
        found = []
        for row in adjacent_rows(position.row, self.max_row):
            on_row = [
                (p, token.value)
                for p, token in self._overlapping(row, window)
                if isinstance(token, Number)
            ]
            found.extend(reversed(on_row))
        return found

    def numbers_around(self, position: Position) -> list[int]:
        """Numbers within one cell of the box at `position`.

        The box is widened by one column each side and tested against the
        row above, the same row and the row below. Each number token is
        reported once, however many of its digits touch the box.

        Returns:
            Number values in row, then column order
        """
        self._require_built()
        return [value for _, value in self._numbers_near_gear(position)]

    def gear_ratio(self, position: Position) -> int:
        """Product of the two numbers adjacent to a gear, or 0.

        Anything other than exactly two adjacent numbers contributes 0.
        """
        return ratio_of(self.numbers_around(position))

    def gears(self) -> Iterator[Gear]:
        """Every gear with its adjacent numbers and ratio."""
        self._require_built()
        for position in self._gears:
            numbers = tuple(self.numbers_around(position))
            yield Gear(position, numbers, ratio_of(numbers))

    def sum_gear_ratios(self) -> int:
        """Sum of gear ratios over every gear."""
        self._require_built()
        return sum(self.gear_ratio(position) for position in self._gears)
