"""sendcheck - resolve failed pre-flight checks on outgoing messages."""
from __future__ import annotations

__version__ = "0.1.0"

from sendcheck.errors import (
    AbortedByUserError,
    CheckFailedError,
    EditorSessionError,
    SendCheckError,
    ValidationUnavailableError,
)

__all__ = [
    "AbortedByUserError",
    "CheckFailedError",
    "EditorSessionError",
    "SendCheckError",
    "ValidationUnavailableError",
    "__version__",
]
