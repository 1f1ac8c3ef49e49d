"""
Token amount helpers.

Amounts are plain ``int`` values in attoFIL, the smallest network unit.
All division truncates toward zero; the fee editor's bump operators depend
on that rounding, so never route these values through floats.
"""

from __future__ import annotations

import re
from enum import Enum

from sendcheck.config.defaults import ATTO_PER_FIL, FIL_DECIMALS, MAX_FIL_TEXT_LENGTH

_DECIMAL_RE = re.compile(r"([+-]?)([0-9]*)(?:\.([0-9]*))?")


class TokenParseError(ValueError):
    """Raised when text cannot be read as a token amount."""
    pass


class FeeUnit(str, Enum):
    """Unit the fee editor's price text is written in."""
    FIL = "fil"
    ATTOFIL = "attofil"


def div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    if b == 0:
        raise ZeroDivisionError("token amount division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def parse_fil(text: str) -> int:
    """
    Parse FIL text into attoFIL.

    Accepts an optional ``fil``, ``afil`` or ``attofil`` suffix. Without a
    suffix the value is read as FIL.

    Raises:
        TokenParseError: If the text is not a valid amount.
    """
    s = text.strip()
    norm = s.lower()
    atto = False
    if norm.endswith("attofil"):
        s, atto = s[:-len("attofil")], True
    elif norm.endswith("afil"):
        s, atto = s[:-len("afil")], True
    elif norm.endswith("fil"):
        s = s[:-len("fil")]
    s = s.strip()

    if len(s) > MAX_FIL_TEXT_LENGTH:
        raise TokenParseError("string length too large")

    value = _parse_decimal(s, text)
    if atto:
        whole, frac = divmod(value, ATTO_PER_FIL)
        if frac:
            raise TokenParseError(f"invalid attoFIL value: {text!r}")
        return whole
    return value


def parse_attofil(text: str) -> int:
    """Parse text as attoFIL; a bare number is read in attoFIL."""
    s = text.strip()
    if not s.lower().endswith("fil"):
        s = s + "attofil"
    return parse_fil(s)


def parse_amount(text: str, unit: FeeUnit = FeeUnit.FIL) -> int:
    """Parse text written in ``unit`` into attoFIL."""
    if FeeUnit(unit) is FeeUnit.ATTOFIL:
        return parse_attofil(text)
    return parse_fil(text)


def _parse_decimal(s: str, original: str) -> int:
    """Scale a decimal numeral by 10^18, rejecting sub-attoFIL precision."""
    match = _DECIMAL_RE.fullmatch(s)
    if not match or not (match.group(2) or match.group(3)):
        raise TokenParseError(f"failed to parse {original!r} as a decimal number")

    sign, whole, frac = match.group(1), match.group(2) or "0", match.group(3) or ""
    frac = frac.rstrip("0")
    if len(frac) > FIL_DECIMALS:
        raise TokenParseError(f"invalid FIL value: {original!r} is more precise than 1 attoFIL")

    value = int(whole) * ATTO_PER_FIL + int(frac.ljust(FIL_DECIMALS, "0") or "0")
    return -value if sign == "-" else value


def format_unitless(amount: int) -> str:
    """Render attoFIL as FIL text with trailing zeros trimmed."""
    if amount == 0:
        return "0"
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), ATTO_PER_FIL)
    frac_text = f"{frac:0{FIL_DECIMALS}d}".rstrip("0")
    if frac_text:
        return f"{sign}{whole}.{frac_text}"
    return f"{sign}{whole}"


def format_fil(amount: int) -> str:
    """Render attoFIL as ``<unitless> FIL``."""
    return f"{format_unitless(amount)} FIL"


def format_amount(amount: int, unit: FeeUnit = FeeUnit.FIL) -> str:
    """Render attoFIL as unit-less text in ``unit``."""
    if FeeUnit(unit) is FeeUnit.ATTOFIL:
        return str(amount)
    return format_unitless(amount)
