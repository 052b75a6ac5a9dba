"""
In-memory balance oracle + transfer executor.

Backs the pool with the ``BalanceTable``/``LPTable`` state tables. Used by the
demo wiring and the test harness in place of the on-chain token contracts.

``execute`` applies a batch to copies of the tables and swaps them in only
when every effect succeeded, so a rejected batch changes nothing.
"""

from __future__ import annotations

import logging
import threading
from typing import Sequence

from ..core.fixed_point import Amount
from ..core.interfaces import BalanceOracle, Effect, EffectKind, TransferExecutor
from ..state.balances import BalanceTable, Holder
from ..state.lp import LPTable
from ..state.reserves import Side

logger = logging.getLogger(__name__)


class InMemoryLedger(BalanceOracle, TransferExecutor):
    """Holder balances, LP shares and the pool's custody account in one place."""

    def __init__(self, pool_account: Holder = "pool") -> None:
        self.pool_account = pool_account
        self._balances = BalanceTable()
        self._lp = LPTable()
        self._lock = threading.RLock()

    # -- Setup ---------------------------------------------------------------

    def fund(self, holder: Holder, *, base: Amount = 0, token: Amount = 0) -> None:
        """Credit a holder with base/token outside of any pool operation."""
        with self._lock:
            if base:
                self._balances.credit(holder, Side.BASE, base)
            if token:
                self._balances.credit(holder, Side.TOKEN, token)

    # -- BalanceOracle -------------------------------------------------------

    def balance_of(self, holder: Holder, side: Side) -> Amount:
        with self._lock:
            return self._balances.get(holder, side)

    def share_balance(self, holder: Holder) -> Amount:
        with self._lock:
            return self._lp.get(holder)

    def total_shares(self) -> Amount:
        with self._lock:
            return self._lp.total_supply

    # -- TransferExecutor ----------------------------------------------------

    def execute(self, holder: Holder, effects: Sequence[Effect]) -> bool:
        with self._lock:
            balances = self._balances.copy()
            lp = self._lp.copy()
            try:
                for effect in effects:
                    self._apply(balances, lp, holder, effect)
            except ValueError as exc:
                logger.warning(
                    "effect batch rejected for %s: %s",
                    holder,
                    exc,
                    extra={"event": "ledger.rejected", "effects": len(effects)},
                )
                return False
            self._balances = balances
            self._lp = lp
        logger.debug("applied %d effects for %s", len(effects), holder)
        return True

    def _apply(self, balances: BalanceTable, lp: LPTable, holder: Holder, effect: Effect) -> None:
        kind = effect.kind
        if kind is EffectKind.TRANSFER_IN:
            balances.debit(holder, effect.side, effect.amount)
            balances.credit(self.pool_account, effect.side, effect.amount)
        elif kind is EffectKind.TRANSFER_OUT:
            balances.debit(self.pool_account, effect.side, effect.amount)
            balances.credit(holder, effect.side, effect.amount)
        elif kind is EffectKind.MINT_SHARES:
            lp.mint(holder, effect.amount)
        elif kind is EffectKind.BURN_SHARES:
            lp.burn(holder, effect.amount)
        else:
            raise ValueError(f"unknown effect kind: {kind!r}")

    def verify_custody(self, base_reserve: Amount, token_reserve: Amount, lp_supply: Amount) -> bool:
        """Check the pool account and share total match a reserves snapshot."""
        with self._lock:
            return (
                self._balances.get(self.pool_account, Side.BASE) == base_reserve
                and self._balances.get(self.pool_account, Side.TOKEN) == token_reserve
                and self._lp.total_supply == lp_supply
                and self._lp.verify_total()
            )

    def __repr__(self) -> str:
        return f"InMemoryLedger({self._balances!r}, {self._lp!r})"
