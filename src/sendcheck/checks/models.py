"""
Value types for message validation.

Provides:
- CheckCode: wire codes reported by the validation service
- ContentId: content-derived message identity
- CheckOutcome / CheckBatch: one verdict and an ordered group of verdicts
- MessagePrototype: the draft message the checks are about
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, List, Mapping


class CheckCode(IntEnum):
    """Check kinds reported by the validation service."""
    UNKNOWN = 0
    MESSAGE_SERIALIZE = 1
    MESSAGE_SIZE = 2
    MESSAGE_VALIDITY = 3
    MESSAGE_MIN_GAS = 4
    MESSAGE_MIN_BASE_FEE = 5
    MESSAGE_BASE_FEE = 6
    MESSAGE_BASE_FEE_LOWER_BOUND = 7
    MESSAGE_BASE_FEE_UPPER_BOUND = 8
    MESSAGE_GET_STATE_NONCE = 9
    MESSAGE_NONCE = 10
    MESSAGE_GET_STATE_BALANCE = 11
    MESSAGE_BALANCE = 12

    @classmethod
    def decode(cls, raw: Any) -> "CheckCode":
        """Map a wire value to a code, falling back to UNKNOWN."""
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            return cls.UNKNOWN


@dataclass(frozen=True)
class ContentId:
    """Identifier of a message, derived from its content."""
    value: str

    @classmethod
    def of(cls, payload: Mapping[str, Any]) -> "ContentId":
        canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        return cls("sha256:" + hashlib.sha256(canonical.encode("utf-8")).hexdigest())

    @classmethod
    def from_json(cls, raw: Any) -> "ContentId":
        """Accept either ``{"/": "<id>"}`` or a bare string."""
        if isinstance(raw, Mapping):
            raw = raw.get("/")
        if not isinstance(raw, str) or not raw:
            raise ValueError(f"invalid content id: {raw!r}")
        return cls(raw)

    def to_json(self) -> dict:
        return {"/": self.value}

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CheckOutcome:
    """
    One validation verdict.

    Outcomes with ``ok=True`` carry nothing actionable: they are never shown
    to the operator and never considered when deriving fees.
    """
    ok: bool
    subject_id: ContentId
    code: CheckCode
    message: str = ""
    hints: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "CheckOutcome":
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a check outcome object, got {type(data).__name__}")
        hints = data.get("Hint") or {}
        if not isinstance(hints, Mapping):
            hints = {}
        return cls(
            ok=bool(data.get("OK", False)),
            subject_id=ContentId.from_json(data.get("Cid")),
            code=CheckCode.decode(data.get("Code")),
            message=str(data.get("Err") or ""),
            hints=dict(hints),
        )

    def to_json(self) -> dict:
        return {
            "Cid": self.subject_id.to_json(),
            "Code": int(self.code),
            "OK": self.ok,
            "Err": self.message,
            "Hint": dict(self.hints),
        }


# Insertion order is display order.
CheckBatch = List[CheckOutcome]


def failed_outcomes(batches: List[CheckBatch]):
    """Yield every failing outcome, in batch then insertion order."""
    for batch in batches:
        for outcome in batch:
            if not outcome.ok:
                yield outcome


def all_ok(batches: List[CheckBatch]) -> bool:
    return next(failed_outcomes(batches), None) is None


def subject_id_of(batches: List[CheckBatch], fallback: ContentId) -> ContentId:
    """
    Identity the service reported for the checked message itself.

    The first batch is about the submitted message, so the id on its first
    outcome names it in the service's own scheme (a node reports CBOR CIDs,
    not ``ContentId.of`` digests). ``fallback`` is used when that batch is
    empty.
    """
    if batches and batches[0]:
        return batches[0][0].subject_id
    return fallback


@dataclass
class MessagePrototype:
    """
    Draft message awaiting submission.

    The fee editor only ever rewrites ``gas_fee_cap``. Amounts are attoFIL.
    """
    to: str
    from_: str
    gas_limit: int
    gas_fee_cap: int
    gas_premium: int = 0
    value: int = 0
    nonce: int = 0
    method: int = 0
    params: str = ""
    valid_nonce: bool = False

    @property
    def cid(self) -> ContentId:
        return ContentId.of(self.message_json())

    @property
    def max_fee(self) -> int:
        """Fee cap times gas limit: the most this message may spend on gas."""
        return self.gas_fee_cap * self.gas_limit

    def message_json(self) -> dict:
        return {
            "To": self.to,
            "From": self.from_,
            "Nonce": self.nonce,
            "Value": str(self.value),
            "GasLimit": self.gas_limit,
            "GasFeeCap": str(self.gas_fee_cap),
            "GasPremium": str(self.gas_premium),
            "Method": self.method,
            "Params": self.params,
        }

    def to_json(self) -> dict:
        return {"Message": self.message_json(), "ValidNonce": self.valid_nonce}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "MessagePrototype":
        """
        Build a prototype from either the ``{"Message": ..., "ValidNonce": ...}``
        wrapper or a bare message object.

        Raises:
            ValueError: If a required field is missing or malformed.
        """
        valid_nonce = False
        if "Message" in data:
            valid_nonce = bool(data.get("ValidNonce", False))
            data = data["Message"]
        try:
            return cls(
                to=str(data["To"]),
                from_=str(data["From"]),
                gas_limit=int(data["GasLimit"]),
                gas_fee_cap=int(data["GasFeeCap"]),
                gas_premium=int(data.get("GasPremium", 0)),
                value=int(data.get("Value", 0)),
                nonce=int(data.get("Nonce", 0)),
                method=int(data.get("Method", 0)),
                params=str(data.get("Params") or ""),
                valid_nonce=valid_nonce,
            )
        except KeyError as e:
            raise ValueError(f"message is missing field {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"malformed message: {e}") from e


def batches_from_json(raw: Any) -> List[CheckBatch]:
    """Decode the ``[[outcome, ...], ...]`` shape returned by the service."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of check batches, got {type(raw).__name__}")
    batches: List[CheckBatch] = []
    for group in raw:
        if not isinstance(group, list):
            raise ValueError(f"expected a list of check outcomes, got {type(group).__name__}")
        batches.append([CheckOutcome.from_json(item) for item in group])
    return batches

