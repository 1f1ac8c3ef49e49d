"""
Protocols for the collaborators check resolution depends on.
"""

from __future__ import annotations

from typing import List, Protocol

from sendcheck.checks.models import CheckBatch, MessagePrototype


class CheckService(Protocol):
    """Validation service that runs pre-flight checks for a message.

    Must be safe to call again after the message has been modified.
    """

    def run_checks(self, proto: MessagePrototype) -> List[CheckBatch]:
        """Run checks for ``proto``.

        Returns:
            Ordered check batches; the first is about ``proto`` itself.

        Raises:
            ValidationUnavailableError: If the service cannot be reached or
                its reply cannot be understood.
        """
        ...
