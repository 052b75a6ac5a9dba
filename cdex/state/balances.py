"""
Holder balance tracking for the two pool assets.

Implements BalanceTable[Holder, Side] -> Amount
"""

from typing import Dict, Tuple

from ..core.fixed_point import Amount, checked_add, require_uint
from .reserves import Side

# Type alias
Holder = str  # wallet address as hex string


class BalanceTable:
    """
    Balance table mapping (holder, side) -> amount.

    Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: Dict[Tuple[Holder, Side], Amount] = {}

    def get(self, holder: Holder, side: Side) -> Amount:
        """Get balance for (holder, side). Returns 0 if not found."""
        return self._balances.get((holder, side), 0)

    def set(self, holder: Holder, side: Side, amount: Amount) -> None:
        """
        Set balance for (holder, side).

        Raises:
            ArithmeticUnderflow: If amount is negative
            ArithmeticOverflow: If amount does not fit the word size
        """
        require_uint("amount", amount)
        if amount == 0:
            self._balances.pop((holder, side), None)
        else:
            self._balances[(holder, side)] = amount

    def credit(self, holder: Holder, side: Side, amount: Amount) -> None:
        self.set(holder, side, checked_add(self.get(holder, side), amount))

    def debit(self, holder: Holder, side: Side, amount: Amount) -> None:
        current = self.get(holder, side)
        require_uint("amount", amount)
        if amount > current:
            raise ValueError(f"Insufficient balance: {current} < {amount}")
        self.set(holder, side, current - amount)

    def get_all_balances(self) -> Dict[Tuple[Holder, Side], Amount]:
        """Return all balances."""
        return dict(self._balances)

    def copy(self) -> "BalanceTable":
        out = BalanceTable()
        out._balances = dict(self._balances)
        return out

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
