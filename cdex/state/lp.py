"""
LP share balance tracking for a pool.

LP shares are tracked separately from asset balances. The table owns the
holder ledger; the pool only tells it how many shares to mint or burn.
"""

from __future__ import annotations

from typing import Dict

from ..core.fixed_point import Amount, checked_add, require_uint
from .balances import Holder


class LPTable:
    """
    LP balance table mapping holder -> shares, plus the running total.

    Notes:
    - LP balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: Dict[Holder, Amount] = {}
        self._total: Amount = 0

    def get(self, holder: Holder) -> Amount:
        """Get LP balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    @property
    def total_supply(self) -> Amount:
        return self._total

    def mint(self, holder: Holder, amount: Amount) -> None:
        require_uint("amount", amount)
        self._balances[holder] = checked_add(self.get(holder), amount)
        self._total = checked_add(self._total, amount)
        if self._balances[holder] == 0:
            del self._balances[holder]

    def burn(self, holder: Holder, amount: Amount) -> None:
        """Burn ``amount`` shares from ``holder``."""
        require_uint("amount", amount)
        current = self.get(holder)
        if amount > current:
            raise ValueError(f"Insufficient LP balance: {current} < {amount}")
        remaining = current - amount
        if remaining == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = remaining
        self._total -= amount

    def get_all_balances(self) -> Dict[Holder, Amount]:
        """Return all LP balances."""
        return dict(self._balances)

    def verify_total(self) -> bool:
        """Verify the running total equals the sum of holder balances."""
        return sum(self._balances.values()) == self._total

    def copy(self) -> "LPTable":
        out = LPTable()
        out._balances = dict(self._balances)
        out._total = self._total
        return out

    def __repr__(self) -> str:
        return f"LPTable({len(self._balances)} entries, total={self._total})"
