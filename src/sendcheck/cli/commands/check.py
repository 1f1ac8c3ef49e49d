#!/usr/bin/env python
"""
Check command - validate a message prototype and resolve failed checks.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console

from sendcheck.checks.models import MessagePrototype
from sendcheck.checks.rpc import RpcCheckService
from sendcheck.cli.formatting.output import ConsoleOutput, custom_theme
from sendcheck.config import SendCheckConfig
from sendcheck.errors import AbortedByUserError, SendCheckError
from sendcheck.resolve import CheckResolver
from sendcheck.ui.config import EditorConfig
from sendcheck.ui.terminal import run_fee_editor

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ABORTED = 2


def load_message(source: str, stdin: Optional[TextIO] = None) -> MessagePrototype:
    """Read a message prototype from a JSON file, or stdin for ``-``."""
    if source == "-":
        text = (stdin or sys.stdin).read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("message JSON must be an object")
    return MessagePrototype.from_json(data)


def run(
    message: str,
    config: SendCheckConfig,
    service=None,
    console: Optional[ConsoleOutput] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Run the check command."""
    console = console or ConsoleOutput(Console(theme=custom_theme, stderr=True, highlight=False))
    stdout = stdout or sys.stdout

    try:
        proto = load_message(message)
    except (OSError, ValueError) as e:
        console.print_error(f"cannot read message {message}: {e}")
        return EXIT_FAILED

    editor_config = EditorConfig.from_config(config)
    owns_service = service is None
    if service is None:
        service = RpcCheckService(config.rpc_url, token=config.rpc_token, timeout=config.rpc_timeout)

    resolver = CheckResolver(
        service,
        output=console,
        edit_fee=lambda p, base_fee: run_fee_editor(p, base_fee, config=editor_config),
    )
    try:
        proto = resolver.resolve(proto, interactive=config.is_interactive())
    except AbortedByUserError as e:
        console.print_plain(str(e))
        return EXIT_ABORTED
    except SendCheckError as e:
        console.print_error(str(e))
        return EXIT_FAILED
    finally:
        if owns_service:
            service.close()

    json.dump(proto.to_json(), stdout, indent=2)
    stdout.write("\n")
    return EXIT_OK
