#!/usr/bin/env python
"""
Single-line text field that only admits decimal numerals.
"""
from __future__ import annotations

from enum import Enum, auto


class FieldAction(Enum):
    """Cursor and deletion keys understood by the field."""
    BACKSPACE = auto()
    DELETE = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()


class DecimalField:
    """
    Editable decimal text with a cursor.

    Digits are always admitted; a single decimal point is admitted while the
    text has none. Everything else is rejected.
    """

    def __init__(self, text: str = ""):
        self._text = text
        self._cursor = len(text)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str):
        self._text = value
        self._cursor = len(value)

    @property
    def cursor(self) -> int:
        return self._cursor

    def accepts(self, char: str) -> bool:
        if len(char) != 1:
            return False
        if char.isdigit() and char.isascii():
            return True
        return char == "." and "." not in self._text

    def insert(self, char: str) -> bool:
        """Insert ``char`` at the cursor. Returns False if it was rejected."""
        if not self.accepts(char):
            return False
        self._text = self._text[:self._cursor] + char + self._text[self._cursor:]
        self._cursor += 1
        return True

    def apply(self, action: FieldAction):
        if action is FieldAction.BACKSPACE:
            if self._cursor > 0:
                self._text = self._text[:self._cursor - 1] + self._text[self._cursor:]
                self._cursor -= 1
        elif action is FieldAction.DELETE:
            self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]
        elif action is FieldAction.LEFT:
            self._cursor = max(0, self._cursor - 1)
        elif action is FieldAction.RIGHT:
            self._cursor = min(len(self._text), self._cursor + 1)
        elif action is FieldAction.HOME:
            self._cursor = 0
        elif action is FieldAction.END:
            self._cursor = len(self._text)

    def visible(self, width: int) -> tuple[str, int]:
        """Window of the text ``width`` cells wide that keeps the cursor in view.

        Returns the padded window and the cursor's column inside it.
        """
        start = max(0, self._cursor - width + 1)
        window = self._text[start:start + width]
        return window.ljust(width), self._cursor - start
