"""Exception types for the AMM core.

Every domain error derives from ``AmmError``, which is itself a ``ValueError``
so callers written against the plain ``ValueError`` convention keep working.
Each class carries a stable ``code`` used by the request/response layer.
"""

from __future__ import annotations


class AmmError(ValueError):
    """Base class for all recoverable AMM failures."""

    code = "amm_error"


class ArithmeticOverflow(AmmError):
    """Raised when a result exceeds the fixed-width integer range."""

    code = "arithmetic_overflow"


class ArithmeticUnderflow(AmmError):
    """Raised when a subtraction would go below zero."""

    code = "arithmetic_underflow"


class ZeroAmount(AmmError):
    """Raised when an input or computed output amount is zero."""

    code = "zero_amount"


class ZeroShareMint(AmmError):
    """Raised when a deposit would mint zero LP shares."""

    code = "zero_share_mint"


class InsufficientShares(AmmError):
    """Raised when a withdrawal asks for more shares than exist or are held."""

    code = "insufficient_shares"


class InsufficientLiquidity(AmmError):
    """Raised when the pool cannot pay the requested output."""

    code = "insufficient_liquidity"


class StaleQuote(AmmError):
    """Raised when a caller-supplied quote no longer matches the reserves."""

    code = "stale_quote"

    def __init__(self, field: str, expected: int, actual: int) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"stale quote: {field} expected {expected}, reserves give {actual}")


class SlippageExceeded(AmmError):
    """Raised when a recomputed amount falls below the caller's minimum."""

    code = "slippage_exceeded"

    def __init__(self, field: str, minimum: int, actual: int) -> None:
        self.field = field
        self.minimum = minimum
        self.actual = actual
        super().__init__(f"{field} ({actual}) < minimum ({minimum})")


class InsufficientBalance(AmmError):
    """Raised when a holder cannot fund the assets an operation pulls in."""

    code = "insufficient_balance"


class ExecutionFailed(AmmError):
    """Raised when the transfer executor rejects an effect batch."""

    code = "execution_failed"


class InvalidSide(AmmError, TypeError):
    """Raised when a side argument is not a ``Side`` member."""

    code = "invalid_side"


class SessionError(AmmError):
    """Raised by the session gate before any pool operation is attempted."""

    code = "session_error"


class WalletNotConnected(SessionError):
    code = "wallet_not_connected"


class WrongNetwork(SessionError):
    code = "wrong_network"

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"wrong network: expected chain id {expected}, got {actual}")
