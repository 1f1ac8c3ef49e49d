"""Check model, fee derivation and the validation service client."""
from __future__ import annotations

from sendcheck.checks.models import (
    CheckBatch,
    CheckCode,
    CheckOutcome,
    ContentId,
    MessagePrototype,
    all_ok,
    batches_from_json,
    failed_outcomes,
    subject_id_of,
)
from sendcheck.checks.fees import (
    FEE_CAP_CODES,
    BaseFeeHint,
    HintStatus,
    classify_fee_cap_failure,
    decode_base_fee,
    extract_base_fee,
)
from sendcheck.checks.protocols import CheckService
from sendcheck.checks.rpc import RpcCheckService

__all__ = [
    "BaseFeeHint",
    "CheckBatch",
    "CheckCode",
    "CheckOutcome",
    "CheckService",
    "ContentId",
    "FEE_CAP_CODES",
    "HintStatus",
    "MessagePrototype",
    "RpcCheckService",
    "all_ok",
    "batches_from_json",
    "classify_fee_cap_failure",
    "decode_base_fee",
    "extract_base_fee",
    "failed_outcomes",
    "subject_id_of",
]
