"""
Check resolution for outgoing messages.

Runs pre-flight checks, reports failures and, when interactive, offers the
fee editor for fee cap problems before asking whether to send anyway.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sendcheck.checks.fees import classify_fee_cap_failure
from sendcheck.checks.models import (
    CheckBatch,
    ContentId,
    MessagePrototype,
    all_ok,
    failed_outcomes,
    subject_id_of,
)
from sendcheck.checks.protocols import CheckService
from sendcheck.cli.formatting.output import ConsoleOutput
from sendcheck.errors import AbortedByUserError, CheckFailedError
from sendcheck.tokens import format_fil
from sendcheck.ui.fee_editor import EditorResult
from sendcheck.ui.terminal import run_fee_editor

logger = logging.getLogger(__name__)

FeeEditorRunner = Callable[[MessagePrototype, int], EditorResult]

ADJUST_PROMPT = "Do you wish to do that? [Yes/no]: "
SEND_PROMPT = "Do you wish to send this message? [yes/No]: "


def print_checks(output: ConsoleOutput, batches: List[CheckBatch], subject_id: ContentId):
    """Print every failing outcome, labelling the subject message "current"."""
    for outcome in failed_outcomes(batches):
        name = "current" if outcome.subject_id == subject_id else str(outcome.subject_id)
        output.print_plain(f"{name} message failed a check: {outcome.message}")


def ask_user(output: ConsoleOutput, question: str, default: bool) -> bool:
    """
    Ask a yes/no question.

    An empty answer or end of input picks ``default``; otherwise the answer is
    yes only if its first character is ``y`` (any case).
    """
    answer = output.input(question)
    if answer is None:
        return default
    answer = answer.strip().lower()
    if not answer:
        return default
    return answer[0] == "y"


class CheckResolver:
    """
    Drives one submission attempt through the check protocol.

    Args:
        service: Validation service, re-run after a fee adjustment
        output: Console for failure reports and prompts
        edit_fee: Fee editor runner; defaults to the terminal editor
    """

    def __init__(
        self,
        service: CheckService,
        output: Optional[ConsoleOutput] = None,
        edit_fee: Optional[FeeEditorRunner] = None,
    ):
        self.service = service
        self.output = output or ConsoleOutput()
        self.edit_fee = edit_fee or run_fee_editor

    def resolve(self, proto: MessagePrototype, interactive: bool) -> MessagePrototype:
        """
        Validate ``proto`` and resolve any failures.

        Returns:
            The message to submit, possibly with an adjusted fee cap

        Raises:
            CheckFailedError: Checks failed and interaction is disabled
            AbortedByUserError: The operator declined to send or cancelled
            ValidationUnavailableError: The validation service failed
            EditorSessionError: The fee editor could not run
        """
        batches = self.service.run_checks(proto)
        if all_ok(batches):
            logger.info("All checks passed for message %s", proto.cid)
            return proto
        return self.resolve_checks(proto, batches, interactive)

    def resolve_checks(
        self,
        proto: MessagePrototype,
        batches: List[CheckBatch],
        interactive: bool,
    ) -> MessagePrototype:
        """Resolve an already-fetched, failing set of check batches."""
        subject_id = subject_id_of(batches, proto.cid)
        self.output.print_plain("Following checks have failed:")
        print_checks(self.output, batches, subject_id)
        if not interactive:
            logger.info("Checks failed and session is not interactive")
            raise CheckFailedError(batches)

        fee_cap_bad, base_fee = classify_fee_cap_failure(batches, subject_id)
        if fee_cap_bad:
            self.output.print_plain("Fee of the message can be adjusted")
            if ask_user(self.output, ADJUST_PROMPT, True):
                proto = self._adjust_fee(proto, base_fee)

        if not ask_user(self.output, SEND_PROMPT, False):
            raise AbortedByUserError()
        return proto

    def _adjust_fee(self, proto: MessagePrototype, base_fee: int) -> MessagePrototype:
        result = self.edit_fee(proto, base_fee)
        if not result.committed:
            logger.info("Fee editor closed without committing")
            raise AbortedByUserError()

        old_fee_cap = proto.gas_fee_cap
        proto.gas_fee_cap = result.fee_cap(proto.gas_limit)
        logger.info(
            "Fee cap changed from %s to %s",
            format_fil(old_fee_cap), format_fil(proto.gas_fee_cap),
        )

        batches = self.service.run_checks(proto)
        self.output.print_plain("Following checks still failed:")
        print_checks(self.output, batches, subject_id_of(batches, proto.cid))
        return proto


def resolve_message(
    service: CheckService,
    proto: MessagePrototype,
    interactive: bool,
    output: Optional[ConsoleOutput] = None,
    edit_fee: Optional[FeeEditorRunner] = None,
) -> MessagePrototype:
    """Convenience wrapper around ``CheckResolver.resolve``."""
    return CheckResolver(service, output=output, edit_fee=edit_fee).resolve(proto, interactive)
