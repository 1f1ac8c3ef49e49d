"""
Fee derivation from check outcomes.

Decides whether a failed check batch is a fee cap problem the operator can
fix in the fee editor, and pulls the base fee hint the service attached.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from sendcheck.checks.models import CheckBatch, CheckCode, ContentId, failed_outcomes

logger = logging.getLogger(__name__)

BASE_FEE_HINT = "baseFee"

# Codes the fee editor can resolve by raising the fee cap.
FEE_CAP_CODES = frozenset({
    CheckCode.MESSAGE_BASE_FEE,
    CheckCode.MESSAGE_BASE_FEE_LOWER_BOUND,
    CheckCode.MESSAGE_BASE_FEE_UPPER_BOUND,
})

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class HintStatus(Enum):
    """Outcome of decoding a base fee hint."""
    OK = "ok"
    MISSING = "missing"
    WRONG_TYPE = "wrong_type"
    UNPARSABLE = "unparsable"


@dataclass(frozen=True)
class BaseFeeHint:
    status: HintStatus
    value: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.status is HintStatus.OK


def decode_base_fee(hints: Optional[Mapping[str, Any]]) -> BaseFeeHint:
    """
    Decode the ``baseFee`` hint.

    The hint must be a base-10 integer string of attoFIL. Missing, non-string
    and unparsable hints are reported with distinct statuses.
    """
    if not hints or BASE_FEE_HINT not in hints:
        return BaseFeeHint(HintStatus.MISSING)
    raw = hints[BASE_FEE_HINT]
    if not isinstance(raw, str):
        return BaseFeeHint(HintStatus.WRONG_TYPE)
    if not _INTEGER_RE.fullmatch(raw):
        return BaseFeeHint(HintStatus.UNPARSABLE)
    return BaseFeeHint(HintStatus.OK, int(raw))


def extract_base_fee(hints: Optional[Mapping[str, Any]]) -> int:
    """Base fee hint in attoFIL, or zero when it is absent or malformed."""
    hint = decode_base_fee(hints)
    if not hint.found:
        logger.debug("No usable base fee hint (%s)", hint.status.value)
        return 0
    return hint.value


def is_fee_cap_code(code: CheckCode) -> bool:
    return code in FEE_CAP_CODES


def classify_fee_cap_failure(
    batches: List[CheckBatch],
    subject_id: ContentId,
) -> Tuple[bool, int]:
    """
    Classify a failed check run.

    Returns ``(is_fee_cap_problem, base_fee)``. Only failures about the
    subject message itself count; failures about dependency messages are
    ignored here. The base fee comes from the first qualifying outcome whose
    hint is non-zero.
    """
    is_problem = False
    base_fee = 0
    for outcome in failed_outcomes(batches):
        if outcome.subject_id != subject_id or not is_fee_cap_code(outcome.code):
            continue
        is_problem = True
        if base_fee == 0:
            base_fee = extract_base_fee(outcome.hints)

    logger.debug("Fee cap problem: %s (base fee %d)", is_problem, base_fee)
    return is_problem, base_fee
