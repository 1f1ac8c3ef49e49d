"""Default configuration values for sendcheck.

Fixed domain constants live here so the fee arithmetic, the editor and the
RPC client agree on them.

Usage:
    from sendcheck.config.defaults import (
        SAFE_FEE_MULTIPLIER,
        FEE_BUMP_NUMERATOR,
        FEE_BUMP_DENOMINATOR,
    )
"""

from __future__ import annotations

# =============================================================================
# Token Amounts
# =============================================================================

ATTO_PER_FIL = 10**18
FIL_DECIMALS = 18
MAX_FIL_TEXT_LENGTH = 50


# =============================================================================
# Fee Editor Arithmetic
# =============================================================================

# Safe maximum fee = required maximum fee * SAFE_FEE_MULTIPLIER
SAFE_FEE_MULTIPLIER = 10

# '+' multiplies by NUMERATOR/DENOMINATOR, '-' by the inverse
FEE_BUMP_NUMERATOR = 11
FEE_BUMP_DENOMINATOR = 10

# "x over the minimum" is computed in hundredths
OVER_MINIMUM_SCALE = 100


# =============================================================================
# Fee Editor Display
# =============================================================================

EDITOR_FIELD_WIDTH = 14
EDITOR_REFRESH_INTERVAL = 0.5  # seconds between idle redraws
EDITOR_DEFAULT_FEE_UNIT = "fil"


# =============================================================================
# Validation Service
# =============================================================================

RPC_DEFAULT_URL = "http://127.0.0.1:1234/rpc/v1"
RPC_TIMEOUT_SECONDS = 30.0
RPC_CHECK_METHOD = "Filecoin.MpoolCheckMessages"
