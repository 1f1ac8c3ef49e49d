#!/usr/bin/env python
"""
Fee editor state machine.

Provides:
- Editor events (key presses, field keys, commit, idle tick, abort)
- FeeEditor: the Editing -> Committed | Aborted machine
- FeeView: the display state derived from the price text on every redraw
- EditorResult: what the session hands back to its caller

The machine knows nothing about terminals; ``sendcheck.ui.terminal`` feeds it
events and draws its rows.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple, Union

from sendcheck.config.defaults import (
    EDITOR_FIELD_WIDTH,
    FEE_BUMP_DENOMINATOR,
    FEE_BUMP_NUMERATOR,
    OVER_MINIMUM_SCALE,
    SAFE_FEE_MULTIPLIER,
)
from sendcheck.tokens import (
    FeeUnit,
    TokenParseError,
    div_trunc,
    format_amount,
    format_fil,
    parse_amount,
)
from sendcheck.ui.field import DecimalField, FieldAction

logger = logging.getLogger(__name__)


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class KeyPress:
    """A printable character typed by the operator."""
    char: str


@dataclass(frozen=True)
class FieldKey:
    """A cursor or deletion key for the price field."""
    action: FieldAction


@dataclass(frozen=True)
class Commit:
    """The confirm key."""


@dataclass(frozen=True)
class Tick:
    """Idle redraw with no key."""


@dataclass(frozen=True)
class Abort:
    """The host tore the session down."""


EditorEvent = Union[KeyPress, FieldKey, Commit, Tick, Abort]


class EditorPhase(Enum):
    EDITING = auto()
    COMMITTED = auto()
    ABORTED = auto()


class FeeClass(Enum):
    """Classification of the price text, in precedence order."""
    INVALID = "invalid price"
    SAFE = "SAFE"
    LOW = "low"
    TOO_LOW = "too low"


# =============================================================================
# Derived values
# =============================================================================

def required_fee(base_fee: int, gas_limit: int) -> int:
    return base_fee * gas_limit


def safe_fee(required: int) -> int:
    return required * SAFE_FEE_MULTIPLIER


def bump_up(value: int) -> int:
    return div_trunc(value * FEE_BUMP_NUMERATOR, FEE_BUMP_DENOMINATOR)


def bump_down(value: int) -> int:
    return div_trunc(value * FEE_BUMP_DENOMINATOR, FEE_BUMP_NUMERATOR)


def classify_fee(max_fee: Optional[int], required: int, safe: int) -> Tuple[FeeClass, Optional[int]]:
    """
    Classify a maximum fee against the required and safe fees.

    Returns the class and, for LOW, the multiple of the required fee in
    hundredths (``max_fee * 100 // required``, truncated).
    """
    if max_fee is None:
        return FeeClass.INVALID, None
    if max_fee >= safe:
        return FeeClass.SAFE, None
    if max_fee >= required:
        return FeeClass.LOW, div_trunc(max_fee * OVER_MINIMUM_SCALE, required)
    return FeeClass.TOO_LOW, None


def format_over(over: int) -> str:
    """Render a hundredths multiple to one decimal place, e.g. 150 -> "1.5"."""
    return f"{over / OVER_MINIMUM_SCALE:.1f}"


@dataclass(frozen=True)
class FeeView:
    """Everything one redraw shows, recomputed from the price text."""
    price_text: str
    max_fee: Optional[int]
    fee_class: FeeClass
    over: Optional[int]
    fee_cap_preview: int

    @property
    def valid(self) -> bool:
        return self.max_fee is not None


@dataclass(frozen=True)
class EditorResult:
    """Returned when the session ends.

    ``final_amount`` is the maximum fee at the moment of commit (zero when the
    price text did not parse). It is meaningless unless ``committed``.
    """
    final_amount: int
    committed: bool

    def fee_cap(self, gas_limit: int) -> int:
        return div_trunc(self.final_amount, gas_limit)


# Rows of (style name, text) segments; style names map to terminal styles.
Row = List[Tuple[str, str]]


# =============================================================================
# State machine
# =============================================================================

@dataclass
class FeeEditorState:
    """Per-session amounts. Created fresh for each editing session."""
    base_fee: int
    gas_limit: int
    original_max_fee: int
    required_fee: int
    safe_fee: int

    @classmethod
    def create(cls, base_fee: int, gas_limit: int, max_fee: int) -> "FeeEditorState":
        if gas_limit <= 0:
            raise ValueError(f"gas limit must be positive (got {gas_limit})")
        required = required_fee(base_fee, gas_limit)
        return cls(
            base_fee=base_fee,
            gas_limit=gas_limit,
            original_max_fee=max_fee,
            required_fee=required,
            safe_fee=safe_fee(required),
        )


class FeeEditor:
    """
    Interactive maximum-fee editor.

    Starts in EDITING with the price text set to the message's current
    maximum fee. Each event is handled to completion:

    - ``s``/``S`` sets the price to the safe fee
    - ``+``/``-`` scale a parsable price by 11/10 and 10/11 (no-op otherwise)
    - other characters go to the decimal field
    - Commit moves to COMMITTED even when the price does not parse; the
      committed amount is then zero
    - Abort moves to ABORTED and leaves nothing to apply

    Events after a terminal phase are ignored.
    """

    def __init__(
        self,
        base_fee: int,
        gas_limit: int,
        max_fee: int,
        unit: FeeUnit = FeeUnit.FIL,
    ):
        self.state = FeeEditorState.create(base_fee, gas_limit, max_fee)
        self.unit = FeeUnit(unit)
        self.field = DecimalField(format_amount(max_fee, self.unit))
        self.phase = EditorPhase.EDITING
        self._final_amount = 0

    @property
    def price_text(self) -> str:
        return self.field.text

    @price_text.setter
    def price_text(self, value: str):
        self.field.text = value

    @property
    def done(self) -> bool:
        return self.phase is not EditorPhase.EDITING

    def parse_price(self) -> Optional[int]:
        """Current price in attoFIL, or None if the text does not parse."""
        try:
            return parse_amount(self.field.text, self.unit)
        except TokenParseError:
            return None

    def handle(self, event: EditorEvent) -> EditorPhase:
        if self.done:
            return self.phase

        if isinstance(event, KeyPress):
            self._on_key(event.char)
        elif isinstance(event, FieldKey):
            self.field.apply(event.action)
        elif isinstance(event, Commit):
            price = self.parse_price()
            if price is None:
                logger.warning("Committed unparsable price %r; using zero", self.price_text)
            self._final_amount = price if price is not None else 0
            self.phase = EditorPhase.COMMITTED
            logger.info("Fee editor committed maximum fee %s", format_fil(self._final_amount))
        elif isinstance(event, Abort):
            self.phase = EditorPhase.ABORTED
            logger.info("Fee editor aborted")
        return self.phase

    def _on_key(self, char: str):
        if char in ("s", "S"):
            self.field.text = format_amount(self.state.safe_fee, self.unit)
        elif char == "+":
            price = self.parse_price()
            if price is not None:
                self.field.text = format_amount(bump_up(price), self.unit)
        elif char == "-":
            price = self.parse_price()
            if price is not None:
                self.field.text = format_amount(bump_down(price), self.unit)
        else:
            self.field.insert(char)

    def view(self) -> FeeView:
        max_fee = self.parse_price()
        fee_class, over = classify_fee(max_fee, self.state.required_fee, self.state.safe_fee)
        return FeeView(
            price_text=self.field.text,
            max_fee=max_fee,
            fee_class=fee_class,
            over=over,
            fee_cap_preview=div_trunc(max_fee or 0, self.state.gas_limit),
        )

    def result(self) -> EditorResult:
        committed = self.phase is EditorPhase.COMMITTED
        return EditorResult(final_amount=self._final_amount if committed else 0, committed=committed)

    def rows(self, width: int = EDITOR_FIELD_WIDTH) -> List[Row]:
        """Lay out the editor screen as styled rows."""
        view = self.view()
        st = self.state
        unit_label = " FIL" if self.unit is FeeUnit.FIL else " attoFIL"

        window, cursor = self.field.visible(width)
        before, at, after = window[:cursor], window[cursor:cursor + 1] or " ", window[cursor + 1:]

        price_row: Row = [
            ("", "Current Maximum Fee: "),
            ("field", before),
            ("field.cursor", at),
            ("field", after),
            ("", unit_label),
        ]
        if view.fee_class is FeeClass.INVALID:
            price_row.append(("invalid", " invalid price"))
        elif view.fee_class is FeeClass.SAFE:
            price_row.append(("safe", " SAFE"))
        elif view.fee_class is FeeClass.LOW:
            price_row.append(("low", " low"))
            price_row.append(("", f" {format_over(view.over)}x over the minimum"))
        else:
            price_row.append(("too-low", " too low"))

        return [
            [("", "Fee of the message is too low.")],
            [("", f"Your configured maximum fee is: {format_fil(st.original_max_fee)}")],
            [("", f"Required maximum fee for the message: {format_fil(st.required_fee)}")],
            [
                ("", f"Safe maximum fee for the message: {format_fil(st.safe_fee)}"),
                ("", "   Press S to use it"),
            ],
            price_row,
            [],
            [("", f"Current Base Fee is: {format_fil(st.base_fee)}")],
            [("", f"Resulting FeeCap is: {format_fil(view.fee_cap_preview)}")],
            [("", "You can use '+' and '-' to adjust the fee.")],
        ]
