"""
Core AMM algorithms
"""

from .errors import (
    AmmError,
    ArithmeticOverflow,
    ArithmeticUnderflow,
    ExecutionFailed,
    InsufficientBalance,
    InsufficientLiquidity,
    InsufficientShares,
    InvalidSide,
    SessionError,
    SlippageExceeded,
    StaleQuote,
    WalletNotConnected,
    WrongNetwork,
    ZeroAmount,
    ZeroShareMint,
)
from .fixed_point import UINT256_MAX, Amount
from .pricing import (
    BOOTSTRAP_SHARES_PER_BASE,
    Quote,
    quote_add,
    quote_add_shares,
    quote_proportional_add,
    quote_remove,
    quote_remove_record,
    quote_spot_price,
    quote_swap,
    quote_swap_output,
)
from .interfaces import BalanceOracle, Effect, EffectKind, TransferExecutor
from .pool import AddLiquidityResult, Pool, RemoveLiquidityResult, SwapResult

__all__ = [
    "AmmError",
    "ArithmeticOverflow",
    "ArithmeticUnderflow",
    "ExecutionFailed",
    "InsufficientBalance",
    "InsufficientLiquidity",
    "InsufficientShares",
    "InvalidSide",
    "SessionError",
    "SlippageExceeded",
    "StaleQuote",
    "WalletNotConnected",
    "WrongNetwork",
    "ZeroAmount",
    "ZeroShareMint",
    "UINT256_MAX",
    "Amount",
    "BOOTSTRAP_SHARES_PER_BASE",
    "Quote",
    "quote_add",
    "quote_add_shares",
    "quote_proportional_add",
    "quote_remove",
    "quote_remove_record",
    "quote_spot_price",
    "quote_swap",
    "quote_swap_output",
    "BalanceOracle",
    "Effect",
    "EffectKind",
    "TransferExecutor",
    "AddLiquidityResult",
    "Pool",
    "RemoveLiquidityResult",
    "SwapResult",
]
