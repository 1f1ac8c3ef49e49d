#!/usr/bin/env python
"""
Output formatting with Rich console.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme


# Custom theme for sendcheck CLI
custom_theme = Theme({
    "info": "cyan",
    "error": "red",
})


class ConsoleOutput:
    """Console output with Rich formatting.

    Also serves as the line-input source for yes/no prompts.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=custom_theme, highlight=False)

    def print_plain(self, text: str):
        """Print text verbatim, without markup interpretation."""
        self.console.print(escape(text), soft_wrap=True)

    def print_error(self, text: str):
        """Print error text."""
        self.console.print(f"[red]Error:[/red] {escape(text)}")

    def input(self, prompt: str) -> Optional[str]:
        """Show ``prompt`` and read one line; None at end of input."""
        try:
            return self.console.input(escape(prompt))
        except EOFError:
            return None
