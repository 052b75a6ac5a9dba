"""
Pool and holder state.
"""

from .reserves import ReservePair, Side, require_side
from .balances import BalanceTable, Holder
from .lp import LPTable

__all__ = [
    "ReservePair",
    "Side",
    "require_side",
    "BalanceTable",
    "Holder",
    "LPTable",
]
