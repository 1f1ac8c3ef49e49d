"""Tests for ui/fee_editor.py module."""

import pytest

from sendcheck.tokens import FeeUnit
from sendcheck.ui.fee_editor import (
    Abort,
    Commit,
    EditorPhase,
    EditorResult,
    FeeClass,
    FeeEditor,
    FeeEditorState,
    FieldKey,
    KeyPress,
    Tick,
    bump_down,
    bump_up,
    classify_fee,
    format_over,
)
from sendcheck.ui.field import FieldAction

GAS_LIMIT = 1_000_000
BASE_FEE = 100
REQUIRED = 100_000_000
SAFE = 1_000_000_000


@pytest.fixture
def editor():
    """Editor in attoFIL units, starting from a 10 attoFIL/gas fee cap."""
    return FeeEditor(BASE_FEE, GAS_LIMIT, 10 * GAS_LIMIT, unit=FeeUnit.ATTOFIL)


def _type(editor, text):
    for ch in text:
        editor.handle(KeyPress(ch))


def _row_text(row):
    return "".join(text for _, text in row)


class TestFeeEditorState:
    """Tests for derived session amounts."""

    def test_required_and_safe(self):
        state = FeeEditorState.create(BASE_FEE, GAS_LIMIT, 0)
        assert state.required_fee == REQUIRED
        assert state.safe_fee == SAFE

    def test_zero_base_fee(self):
        state = FeeEditorState.create(0, GAS_LIMIT, 0)
        assert state.required_fee == 0
        assert state.safe_fee == 0

    @pytest.mark.parametrize("gas_limit", [0, -1])
    def test_gas_limit_must_be_positive(self, gas_limit):
        with pytest.raises(ValueError):
            FeeEditorState.create(BASE_FEE, gas_limit, 0)


class TestArithmetic:
    """Tests for bump operators and classification."""

    def test_bump_up_truncates(self):
        assert bump_up(100) == 110
        assert bump_up(105) == 115
        assert bump_up(9) == 9

    def test_bump_down_truncates(self):
        assert bump_down(110) == 100
        assert bump_down(100) == 90

    def test_classify_invalid(self):
        assert classify_fee(None, REQUIRED, SAFE) == (FeeClass.INVALID, None)

    def test_classify_safe_boundary(self):
        assert classify_fee(SAFE, REQUIRED, SAFE) == (FeeClass.SAFE, None)

    def test_classify_required_boundary(self):
        assert classify_fee(REQUIRED, REQUIRED, SAFE) == (FeeClass.LOW, 100)

    def test_classify_below_required(self):
        assert classify_fee(REQUIRED - 1, REQUIRED, SAFE) == (FeeClass.TOO_LOW, None)

    def test_over_truncates(self):
        _, over = classify_fee(REQUIRED + REQUIRED // 3, REQUIRED, SAFE)
        assert over == 133

    def test_format_over(self):
        assert format_over(100) == "1.0"
        assert format_over(150) == "1.5"
        assert format_over(999) == "10.0"


class TestFeeEditorKeys:
    """Tests for key handling in the EDITING phase."""

    def test_initial_price_is_configured_max_fee(self, editor):
        assert editor.price_text == "10000000"
        assert editor.phase is EditorPhase.EDITING

    def test_safe_shortcut(self, editor):
        editor.handle(KeyPress("s"))
        assert editor.price_text == str(SAFE)
        editor.price_text = "5"
        editor.handle(KeyPress("S"))
        assert editor.price_text == str(SAFE)

    def test_plus(self, editor):
        editor.price_text = "100"
        editor.handle(KeyPress("+"))
        assert editor.price_text == "110"

    def test_minus(self, editor):
        editor.price_text = "100"
        editor.handle(KeyPress("-"))
        assert editor.price_text == "90"

    @pytest.mark.parametrize("key", ["+", "-"])
    def test_bump_noop_when_unparsable(self, editor, key):
        editor.price_text = ""
        editor.handle(KeyPress(key))
        assert editor.price_text == ""
        editor.price_text = "."
        editor.handle(KeyPress(key))
        assert editor.price_text == "."

    def test_safe_replaces_unparsable_text(self, editor):
        editor.price_text = "."
        editor.handle(KeyPress("s"))
        assert editor.price_text == str(SAFE)

    def test_digits_go_to_field(self, editor):
        editor.price_text = ""
        _type(editor, "12a3")
        assert editor.price_text == "123"

    def test_field_keys(self, editor):
        editor.handle(FieldKey(FieldAction.BACKSPACE))
        assert editor.price_text == "1000000"

    def test_tick_changes_nothing(self, editor):
        before = editor.view()
        assert editor.handle(Tick()) is EditorPhase.EDITING
        assert editor.view() == before

    def test_bumps_in_fil_units(self):
        editor = FeeEditor(BASE_FEE, GAS_LIMIT, 10**18, unit=FeeUnit.FIL)
        assert editor.price_text == "1"
        editor.handle(KeyPress("+"))
        assert editor.price_text == "1.1"
        editor.handle(KeyPress("s"))
        assert editor.price_text == "0.000000001"


class TestFeeEditorView:
    """Tests for the per-redraw view."""

    def test_scenario_classifications(self, editor):
        editor.price_text = "50000000"
        assert editor.view().fee_class is FeeClass.TOO_LOW

        editor.price_text = "100000000"
        view = editor.view()
        assert view.fee_class is FeeClass.LOW
        assert format_over(view.over) == "1.0"

        editor.price_text = "1000000000"
        assert editor.view().fee_class is FeeClass.SAFE

    def test_invalid_view(self, editor):
        editor.price_text = ""
        view = editor.view()
        assert view.fee_class is FeeClass.INVALID
        assert view.max_fee is None
        assert not view.valid
        assert view.fee_cap_preview == 0

    def test_fee_cap_preview(self, editor):
        editor.price_text = "1000000999"
        assert editor.view().fee_cap_preview == 1000

    def test_view_follows_text(self, editor):
        editor.price_text = "100000000"
        assert editor.view().max_fee == REQUIRED
        editor.handle(KeyPress("s"))
        assert editor.view().max_fee == SAFE


class TestFeeEditorTermination:
    """Tests for commit and abort."""

    def test_commit(self, editor):
        editor.handle(KeyPress("s"))
        assert editor.handle(Commit()) is EditorPhase.COMMITTED
        result = editor.result()
        assert result == EditorResult(final_amount=SAFE, committed=True)
        assert result.fee_cap(GAS_LIMIT) == 1000

    def test_commit_unparsable_yields_zero(self, editor):
        editor.price_text = ""
        assert editor.handle(Commit()) is EditorPhase.COMMITTED
        result = editor.result()
        assert result.committed is True
        assert result.final_amount == 0
        assert result.fee_cap(GAS_LIMIT) == 0

    def test_abort(self, editor):
        editor.handle(KeyPress("s"))
        assert editor.handle(Abort()) is EditorPhase.ABORTED
        assert editor.result() == EditorResult(final_amount=0, committed=False)

    def test_events_after_commit_ignored(self, editor):
        editor.handle(Commit())
        editor.handle(KeyPress("s"))
        editor.handle(Abort())
        assert editor.phase is EditorPhase.COMMITTED
        assert editor.price_text == "10000000"
        assert editor.result().final_amount == 10_000_000

    def test_not_done_while_editing(self, editor):
        assert not editor.done
        assert editor.result().committed is False


class TestFeeEditorRows:
    """Tests for the screen layout."""

    def test_headline_and_amounts(self):
        editor = FeeEditor(BASE_FEE, GAS_LIMIT, 10 * GAS_LIMIT)
        lines = [_row_text(row) for row in editor.rows()]
        assert lines[0] == "Fee of the message is too low."
        assert lines[1] == "Your configured maximum fee is: 0.00000000001 FIL"
        assert lines[2] == "Required maximum fee for the message: 0.0000000001 FIL"
        assert lines[3] == "Safe maximum fee for the message: 0.000000001 FIL   Press S to use it"
        assert lines[6] == "Current Base Fee is: 0.0000000000000001 FIL"
        assert lines[7] == "Resulting FeeCap is: 0.00000000000000001 FIL"
        assert lines[8] == "You can use '+' and '-' to adjust the fee."

    def test_price_row_low(self, editor):
        editor.price_text = "150000000"
        row = editor.rows(width=14)[4]
        assert _row_text(row) == "Current Maximum Fee: 150000000      attoFIL low 1.5x over the minimum"
        assert ("low", " low") in row

    def test_price_row_labels(self, editor):
        editor.price_text = ""
        assert ("invalid", " invalid price") in editor.rows()[4]
        editor.price_text = "1"
        assert ("too-low", " too low") in editor.rows()[4]
        editor.handle(KeyPress("s"))
        assert ("safe", " SAFE") in editor.rows()[4]

    def test_cursor_segment(self, editor):
        editor.price_text = "12"
        editor.field.apply(FieldAction.HOME)
        row = editor.rows(width=4)[4]
        assert ("field.cursor", "1") in row
