"""
JSON-RPC client for the message validation service.

Sends the message prototype to a node's mpool check endpoint and decodes the
returned check batches.
"""

from __future__ import annotations

import itertools
import logging
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

import httpx

from sendcheck.checks.models import CheckBatch, MessagePrototype, batches_from_json
from sendcheck.config.defaults import RPC_CHECK_METHOD, RPC_TIMEOUT_SECONDS
from sendcheck.errors import ValidationUnavailableError

logger = logging.getLogger(__name__)


class RpcCheckService:
    """Validation service reached over JSON-RPC 2.0.

    - Posts one request per ``run_checks`` call; nothing is retried.
    - Sends ``Authorization: Bearer <token>`` when a token is configured.
    - Turns every transport, HTTP and protocol failure into
      ``ValidationUnavailableError``.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: float = RPC_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._url = url
        self._token = token
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._ids = itertools.count(1)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def call(self, method: str, params: List[Any]) -> Any:
        """Invoke a JSON-RPC method and return its ``result`` member."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        try:
            resp = self._client.post(self._url, json=payload, headers=self._headers())
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise ValidationUnavailableError(f"{method} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ValidationUnavailableError(f"{method} returned a non-JSON response") from e

        if not isinstance(data, dict):
            raise ValidationUnavailableError(f"{method} returned an unexpected response")
        if data.get("error"):
            error = data["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise ValidationUnavailableError(f"{method} failed: {message}")
        return data.get("result")

    def run_checks(self, proto: MessagePrototype) -> List[CheckBatch]:
        logger.debug("Running checks for message %s", proto.cid)
        result = self.call(RPC_CHECK_METHOD, [[proto.to_json()]])
        try:
            batches = batches_from_json(result)
        except ValueError as e:
            raise ValidationUnavailableError(f"malformed check results: {e}") from e
        logger.info(
            "Validation returned %d batch(es), %d outcome(s)",
            len(batches), sum(len(b) for b in batches),
        )
        return batches

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "RpcCheckService":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()
