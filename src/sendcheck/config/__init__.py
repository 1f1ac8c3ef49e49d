"""Runtime configuration for sendcheck.

Values come from the environment (optionally populated from a .env file by
the CLI) and fall back to the constants in ``sendcheck.config.defaults``.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional

from sendcheck.config.defaults import (
    EDITOR_DEFAULT_FEE_UNIT,
    EDITOR_REFRESH_INTERVAL,
    RPC_DEFAULT_URL,
    RPC_TIMEOUT_SECONDS,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_FEE_UNITS = {"fil", "attofil"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


@dataclass
class SendCheckConfig:
    """Configuration for a check resolution run."""

    rpc_url: str = RPC_DEFAULT_URL
    rpc_token: Optional[str] = None
    rpc_timeout: float = RPC_TIMEOUT_SECONDS

    # None means "decide from whether stdin is a terminal"
    interactive: Optional[bool] = None

    fee_unit: str = EDITOR_DEFAULT_FEE_UNIT
    refresh_interval: float = EDITOR_REFRESH_INTERVAL

    def __post_init__(self):
        self.fee_unit = self.fee_unit.lower()
        if self.fee_unit not in _FEE_UNITS:
            raise ValueError(f"Unknown fee unit: {self.fee_unit!r} (expected one of {sorted(_FEE_UNITS)})")

    @classmethod
    def from_env(cls) -> "SendCheckConfig":
        """Create config from environment variables."""
        interactive_raw = os.environ.get("SENDCHECK_INTERACTIVE")
        return cls(
            rpc_url=os.environ.get("SENDCHECK_RPC_URL", RPC_DEFAULT_URL),
            rpc_token=os.environ.get("SENDCHECK_RPC_TOKEN") or None,
            rpc_timeout=float(os.environ.get("SENDCHECK_RPC_TIMEOUT", str(RPC_TIMEOUT_SECONDS))),
            interactive=(
                _parse_bool("SENDCHECK_INTERACTIVE", interactive_raw)
                if interactive_raw is not None else None
            ),
            fee_unit=os.environ.get("SENDCHECK_FEE_UNIT", EDITOR_DEFAULT_FEE_UNIT),
            refresh_interval=float(
                os.environ.get("SENDCHECK_REFRESH_INTERVAL", str(EDITOR_REFRESH_INTERVAL))
            ),
        )

    def is_interactive(self) -> bool:
        """Resolve the interactive flag, defaulting to whether stdin is a TTY."""
        if self.interactive is not None:
            return self.interactive
        return sys.stdin is not None and sys.stdin.isatty()


# Global config instance
_config: Optional[SendCheckConfig] = None


def get_config() -> SendCheckConfig:
    """Get global sendcheck config."""
    global _config
    if _config is None:
        _config = SendCheckConfig.from_env()
    return _config


def set_config(config: Optional[SendCheckConfig]) -> None:
    """Set (or with None, reset) the global sendcheck config."""
    global _config
    _config = config
