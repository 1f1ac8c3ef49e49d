"""Tests for tokens.py module."""

import pytest

from sendcheck.tokens import (
    FeeUnit,
    TokenParseError,
    div_trunc,
    format_amount,
    format_fil,
    format_unitless,
    parse_amount,
    parse_attofil,
    parse_fil,
)

ATTO = 10**18


class TestDivTrunc:
    """Tests for truncating integer division."""

    def test_positive(self):
        assert div_trunc(7, 2) == 3
        assert div_trunc(1155, 10) == 115

    def test_truncates_toward_zero(self):
        """Negative quotients round toward zero, not down."""
        assert div_trunc(-7, 2) == -3
        assert div_trunc(7, -2) == -3
        assert div_trunc(-7, -2) == 3

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            div_trunc(1, 0)


class TestParseFil:
    """Tests for parse_fil."""

    def test_whole_fil(self):
        assert parse_fil("1") == ATTO
        assert parse_fil("12") == 12 * ATTO

    def test_fractional_fil(self):
        assert parse_fil("0.5") == ATTO // 2
        assert parse_fil(".5") == ATTO // 2
        assert parse_fil("1.") == ATTO
        assert parse_fil("0.000000000000000001") == 1

    def test_suffixes(self):
        assert parse_fil("1.5 FIL") == 15 * ATTO // 10
        assert parse_fil("2fil") == 2 * ATTO
        assert parse_fil("100 attofil") == 100
        assert parse_fil("100aFIL") == 100

    def test_whitespace_ignored(self):
        assert parse_fil("  3  ") == 3 * ATTO

    def test_trailing_zeros_beyond_precision_allowed(self):
        assert parse_fil("0.1000000000000000000000") == ATTO // 10

    def test_too_precise(self):
        """More than 18 significant fractional digits is rejected."""
        with pytest.raises(TokenParseError):
            parse_fil("0.0000000000000000001")

    def test_fractional_attofil_rejected(self):
        with pytest.raises(TokenParseError):
            parse_fil("1.5 attofil")

    @pytest.mark.parametrize("text", ["", ".", "-", "abc", "1.2.3", "1e5", "12x", "١٠٠", "1.٥"])
    def test_invalid(self, text):
        with pytest.raises(TokenParseError):
            parse_fil(text)

    def test_too_long(self):
        with pytest.raises(TokenParseError, match="too large"):
            parse_fil("1" * 51)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_fil("nope")


class TestParseInUnit:
    """Tests for unit-aware parsing."""

    def test_parse_attofil_bare_number(self):
        assert parse_attofil("100") == 100

    def test_parse_attofil_keeps_explicit_unit(self):
        assert parse_attofil("1 fil") == ATTO

    def test_parse_amount(self):
        assert parse_amount("100", FeeUnit.ATTOFIL) == 100
        assert parse_amount("100", FeeUnit.FIL) == 100 * ATTO
        assert parse_amount("100", "attofil") == 100


class TestFormat:
    """Tests for amount formatting."""

    def test_zero(self):
        assert format_unitless(0) == "0"

    def test_whole(self):
        assert format_unitless(ATTO) == "1"

    def test_fraction_trims_zeros(self):
        assert format_unitless(15 * ATTO // 10) == "1.5"
        assert format_unitless(1) == "0.000000000000000001"

    def test_negative(self):
        assert format_unitless(-ATTO // 2) == "-0.5"

    def test_format_fil(self):
        assert format_fil(ATTO // 10) == "0.1 FIL"

    def test_format_amount(self):
        assert format_amount(100, FeeUnit.ATTOFIL) == "100"
        assert format_amount(100 * ATTO, FeeUnit.FIL) == "100"

    def test_parse_reads_formatted_text(self):
        amount = 123_456_789_000_000_001
        assert parse_fil(format_unitless(amount)) == amount
