"""Exchange error classes.

Every rejected operation raises exactly one of these. Errors are terminal:
nothing is retried, and the pool state is unchanged when one escapes.
Each class carries a stable ``code`` that the HTTP layer reports.
"""

from typing import ClassVar


class ExchangeError(Exception):
    """Base error for pool and registry operations."""

    code: ClassVar[str] = "exchange_error"


class Expired(ExchangeError):
    """Current time is past the caller's deadline."""

    code = "expired"


class BelowMinimumLiquidity(ExchangeError):
    """Initial deposit too small to safely bootstrap a pool."""

    code = "below_minimum_liquidity"


class InsufficientTokenAmount(ExchangeError):
    """Proportional token deposit exceeds the caller's ceiling."""

    code = "insufficient_token_amount"


class InsufficientShareBalance(ExchangeError):
    """Caller does not hold enough shares to burn or transfer."""

    code = "insufficient_share_balance"


class InsufficientOutputAmount(ExchangeError):
    """Computed output is below the caller's floor (slippage protection)."""

    code = "insufficient_output_amount"


class InvalidTokenIdentity(ExchangeError):
    """Null/zero token address supplied to pool creation."""

    code = "invalid_token_identity"


class PoolAlreadyExists(ExchangeError):
    """A pool for this token is already registered."""

    code = "pool_already_exists"


class NoSuchPool(ExchangeError):
    """No pool is registered for the requested token."""

    code = "no_such_pool"


class TransferFailed(ExchangeError):
    """The asset ledger rejected a transfer."""

    code = "transfer_failed"


class InvalidAmount(ExchangeError):
    """Amount is negative, not an integer, or zero where forbidden."""

    code = "invalid_amount"


class EmptyReserves(ExchangeError):
    """Swap priced against a pool that holds no liquidity."""

    code = "empty_reserves"
