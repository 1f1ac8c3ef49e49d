#!/usr/bin/env python
"""
Terminal host for the fee editor.

Runs a prompt_toolkit application that translates key presses into editor
events and redraws the editor's rows on every event and idle refresh.
"""
from __future__ import annotations

import logging
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

from sendcheck.checks.models import MessagePrototype
from sendcheck.errors import EditorSessionError
from sendcheck.ui.config import EditorConfig, get_editor_config
from sendcheck.ui.fee_editor import (
    Abort,
    Commit,
    EditorResult,
    FeeEditor,
    FieldKey,
    KeyPress,
    Tick,
)
from sendcheck.ui.field import FieldAction

logger = logging.getLogger(__name__)

_FIELD_KEYS = {
    "backspace": FieldAction.BACKSPACE,
    "delete": FieldAction.DELETE,
    "left": FieldAction.LEFT,
    "right": FieldAction.RIGHT,
    "home": FieldAction.HOME,
    "end": FieldAction.END,
}


def render_fragments(editor: FeeEditor, width: int) -> StyleAndTextTuples:
    """Flatten the editor's rows into prompt_toolkit formatted text."""
    fragments: StyleAndTextTuples = []
    for row in editor.rows(width):
        for style, text in row:
            fragments.append((f"class:{style}" if style else "", text))
        fragments.append(("", "\n"))
    return fragments


def _create_key_bindings(editor: FeeEditor) -> KeyBindings:
    """Create key bindings that feed the editor."""
    kb = KeyBindings()

    @kb.add(Keys.Any)
    def printable(event):
        for key_press in event.key_sequence:
            data = key_press.data
            if len(data) == 1 and data.isprintable():
                editor.handle(KeyPress(data))

    @kb.add("enter")
    def commit(event):
        editor.handle(Commit())
        event.app.exit(result=editor.result())

    @kb.add("c-c")
    def abort(event):
        editor.handle(Abort())
        event.app.exit(result=editor.result())

    def field_handler(action: FieldAction):
        def handler(event):
            editor.handle(FieldKey(action))
        return handler

    for key, action in _FIELD_KEYS.items():
        kb.add(key)(field_handler(action))

    return kb


def build_application(
    editor: FeeEditor,
    config: EditorConfig,
    input=None,
    output=None,
) -> Application:
    """Build the prompt_toolkit application hosting ``editor``."""
    control = FormattedTextControl(
        lambda: render_fragments(editor, config.field_width),
        focusable=True,
        show_cursor=False,
    )
    return Application(
        layout=Layout(Window(content=control)),
        key_bindings=_create_key_bindings(editor),
        style=Style.from_dict(config.styles),
        full_screen=config.full_screen,
        refresh_interval=config.refresh_interval or None,
        before_render=lambda app: editor.handle(Tick()),
        input=input,
        output=output,
    )


def run_fee_editor(
    proto: MessagePrototype,
    base_fee: int,
    config: Optional[EditorConfig] = None,
    input=None,
    output=None,
) -> EditorResult:
    """
    Run an interactive fee editing session for ``proto``.

    The message is not modified; the caller applies the returned result.

    Args:
        proto: Message whose fee cap is being adjusted
        base_fee: Base fee hint in attoFIL
        config: Editor settings (defaults to the global editor config)
        input: prompt_toolkit input, for driving the session headlessly
        output: prompt_toolkit output

    Returns:
        EditorResult; ``committed`` is False if the session was torn down

    Raises:
        EditorSessionError: If the terminal application fails
    """
    config = config or get_editor_config()
    try:
        editor = FeeEditor(base_fee, proto.gas_limit, proto.max_fee, unit=config.fee_unit)
    except ValueError as e:
        raise EditorSessionError(f"cannot edit fee: {e}") from e

    logger.debug(
        "Starting fee editor (base fee %d, gas limit %d)", base_fee, proto.gas_limit
    )
    try:
        build_application(editor, config, input=input, output=output).run()
    except (KeyboardInterrupt, EOFError):
        editor.handle(Abort())
    except Exception as e:
        raise EditorSessionError(f"fee editor failed: {e}") from e

    if not editor.done:
        editor.handle(Abort())
    return editor.result()
