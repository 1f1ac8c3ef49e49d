"""sendcheck UI layer - fee editor state machine, field widget and terminal host."""
from __future__ import annotations

from sendcheck.ui.config import EditorConfig, get_editor_config
from sendcheck.ui.fee_editor import (
    Abort,
    Commit,
    EditorPhase,
    EditorResult,
    FeeClass,
    FeeEditor,
    FeeEditorState,
    FeeView,
    FieldKey,
    KeyPress,
    Tick,
    classify_fee,
)
from sendcheck.ui.field import DecimalField, FieldAction
from sendcheck.ui.terminal import run_fee_editor

__all__ = [
    "Abort",
    "Commit",
    "DecimalField",
    "EditorConfig",
    "EditorPhase",
    "EditorResult",
    "FeeClass",
    "FeeEditor",
    "FeeEditorState",
    "FeeView",
    "FieldAction",
    "FieldKey",
    "KeyPress",
    "Tick",
    "classify_fee",
    "get_editor_config",
    "run_fee_editor",
]
