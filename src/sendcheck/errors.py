"""
Error taxonomy for message check resolution.

Every failure ends the current resolution attempt. None of these are retried
automatically; the caller decides whether to start over.
"""

from __future__ import annotations

from typing import Optional, Sequence


class SendCheckError(Exception):
    """Base exception for check resolution."""
    pass


class AbortedByUserError(SendCheckError):
    """The operator declined a prompt or cancelled the fee editor.

    Not a system fault; callers should report it without a traceback.
    """

    def __init__(self, message: str = "aborted by user"):
        super().__init__(message)


class CheckFailedError(SendCheckError):
    """Checks still fail and cannot be resolved in this attempt."""

    def __init__(self, batches: Optional[Sequence] = None, message: str = "message checks failed"):
        self.batches = list(batches or [])
        super().__init__(message)


class ValidationUnavailableError(SendCheckError):
    """The validation service call itself failed."""
    pass


class EditorSessionError(SendCheckError):
    """The terminal fee editor could not be started or crashed while running."""
    pass
