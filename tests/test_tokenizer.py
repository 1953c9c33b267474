"""Tests for the row tokenizer."""

import pytest

from schematic.core.geometry import Span
from schematic.core.tokens import Number, Symbol
from schematic.params.schema import TokenizerParams
from schematic.tokenizer import ParseError, tokenize_row


def tokens(line, **kwargs):
    return list(tokenize_row(line, **kwargs))


class TestTokenizeRow:
    """Tokenization of single rows."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("467..114..", [(Span(0, 3), Number(467)), (Span(5, 8), Number(114))]),
            ("...*......", [(Span(3, 4), Symbol.gear())]),
            ("..35..633.", [(Span(2, 4), Number(35)), (Span(6, 9), Number(633))]),
            ("......#...", [(Span(6, 7), Symbol.non_gear())]),
            ("617*......", [(Span(0, 3), Number(617)), (Span(3, 4), Symbol.gear())]),
            (".....+.58.", [(Span(5, 6), Symbol.non_gear()), (Span(7, 9), Number(58))]),
            ("...$.*....", [(Span(3, 4), Symbol.non_gear()), (Span(5, 6), Symbol.gear())]),
            (".664.598..", [(Span(1, 4), Number(664)), (Span(5, 8), Number(598))]),
        ],
    )
    def test_example_rows(self, line, expected):
        assert tokens(line) == expected

    def test_multi_digit_number_is_one_token(self):
        assert tokens("12345") == [(Span(0, 5), Number(12345))]

    def test_periods_produce_nothing(self):
        assert tokens("..........") == []

    def test_empty_line(self):
        assert tokens("") == []

    def test_adjacent_symbols_and_numbers(self):
        """No gap needed between tokens."""
        assert tokens("*12#3") == [
            (Span(0, 1), Symbol.gear()),
            (Span(1, 3), Number(12)),
            (Span(3, 4), Symbol.non_gear()),
            (Span(4, 5), Number(3)),
        ]

    def test_leading_zeros(self):
        assert tokens("007") == [(Span(0, 3), Number(7))]

    def test_line_terminator_stripped(self):
        assert tokens("1.*\r\n") == [(Span(0, 1), Number(1)), (Span(2, 3), Symbol.gear())]

    def test_only_one_carriage_return_stripped(self):
        """A second trailing \\r is a control character, so a symbol."""
        assert tokens("1\r\r") == [(Span(0, 1), Number(1)), (Span(1, 2), Symbol.non_gear())]

    def test_unicode_digit_is_symbol(self):
        """Only ASCII digits form numbers."""
        assert tokens("٣") == [(Span(0, 1), Symbol.non_gear())]

    def test_control_character_is_symbol(self):
        assert tokens("1\t2") == [
            (Span(0, 1), Number(1)),
            (Span(1, 2), Symbol.non_gear()),
            (Span(2, 3), Number(2)),
        ]

    def test_custom_gear_and_gap(self):
        params = TokenizerParams(gear="@", gap=" ")
        assert tokens("  @*1", params=params) == [
            (Span(2, 3), Symbol.gear()),
            (Span(3, 4), Symbol.non_gear()),
            (Span(4, 5), Number(1)),
        ]


class TestLosslessSpans:
    """Spans account for every non-gap character exactly once."""

    @pytest.mark.parametrize(
        "line",
        ["467..114..", "617*......", ".....+.58.", "*12#3", "9", "....", "1.2.3*45$$"],
    )
    def test_rebuild_row_from_spans(self, line):
        rebuilt = ["."] * len(line)
        for span, _ in tokenize_row(line):
            rebuilt[span.start:span.end] = line[span.start:span.end]
        assert "".join(rebuilt) == line

    def test_spans_disjoint_and_ordered(self):
        spans = [span for span, _ in tokenize_row("12*3..#45.6")]
        for left, right in zip(spans, spans[1:]):
            assert left.end <= right.start


class TestOverflow:
    """Numbers wider than max_bits fail instead of truncating."""

    def test_u64_max_fits(self):
        line = str(2**64 - 1)
        assert tokens(line) == [(Span(0, len(line)), Number(2**64 - 1))]

    def test_u64_overflow_raises(self):
        with pytest.raises(ParseError, match="does not fit in 64 unsigned bits"):
            tokens(str(2**64))

    def test_error_reports_location(self):
        params = TokenizerParams(max_bits=8)
        with pytest.raises(ParseError) as excinfo:
            tokens("..*256", params=params, row=7)
        assert excinfo.value.row == 7
        assert excinfo.value.column == 3
        assert excinfo.value.text == "256"

    def test_very_long_digit_run(self):
        with pytest.raises(ParseError):
            tokens("9" * 10_000)

    def test_long_leading_zeros_fit(self):
        """Zero padding longer than the int/str conversion limit still parses."""
        line = "0" * 5000 + "5"
        assert tokens(line) == [(Span(0, 5001), Number(5))]

    def test_all_zero_run(self):
        assert tokens("0" * 5000) == [(Span(0, 5000), Number(0))]

    def test_parse_error_is_value_error(self):
        assert issubclass(ParseError, ValueError)
