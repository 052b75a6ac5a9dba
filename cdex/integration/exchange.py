"""
Request/response layer between a stateless UI and the pool.

Every call checks the session gate, then calls the core. Failures come back
as ``ExchangeResult(ok=False, error_code=...)`` built from the typed error;
nothing is swallowed. The UI is expected to:

1. ask for a quote and show it,
2. send the confirmed amounts back together with that quote, which the pool
   compares against its own re-derived quote at execution time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..core.errors import AmmError
from ..core.fixed_point import Amount
from ..core.pool import Pool
from ..core.pricing import Quote, quote_add, quote_remove_record, quote_spot_price, quote_swap
from ..state.reserves import Side
from .config import ExchangeConfig
from .ledger import InMemoryLedger
from .session import SessionGate
from .units import format_units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None


@dataclass(frozen=True)
class Amounts:
    """Balances the dApp shows: the holder's, and the pool's reserves."""

    base_balance: Amount
    token_balance: Amount
    share_balance: Amount
    base_reserve: Amount
    token_reserve: Amount
    lp_supply: Amount


class Exchange:
    def __init__(self, pool: Pool, gate: SessionGate, config: Optional[ExchangeConfig] = None) -> None:
        self.pool = pool
        self.gate = gate
        self.config = config if config is not None else ExchangeConfig(
            fee_numerator=pool.fee_numerator,
            fee_denominator=pool.fee_denominator,
            chain_id=gate.expected_chain_id,
        )

    @classmethod
    def from_config(cls, config: ExchangeConfig, ledger: Optional[InMemoryLedger] = None) -> "Exchange":
        """Wire an empty pool over an in-memory ledger."""
        ledger = ledger if ledger is not None else InMemoryLedger()
        pool = Pool(
            ledger,
            ledger,
            fee_numerator=config.fee_numerator,
            fee_denominator=config.fee_denominator,
        )
        return cls(pool, SessionGate(expected_chain_id=config.chain_id), config)

    def _call(self, op: str, fn: Callable[[str], Any]) -> ExchangeResult:
        try:
            holder = self.gate.require()
            value = fn(holder)
        except AmmError as exc:
            logger.warning("%s failed: %s", op, exc, extra={"event": f"exchange.{op}", "code": exc.code})
            return ExchangeResult(ok=False, error=str(exc), error_code=exc.code)
        return ExchangeResult(ok=True, value=value)

    # -- Reads ---------------------------------------------------------------

    def get_amounts(self) -> ExchangeResult:
        def run(holder: str) -> Amounts:
            oracle = self.pool.oracle
            reserves = self.pool.snapshot()
            return Amounts(
                base_balance=oracle.balance_of(holder, Side.BASE),
                token_balance=oracle.balance_of(holder, Side.TOKEN),
                share_balance=oracle.share_balance(holder),
                base_reserve=reserves.base_reserve,
                token_reserve=reserves.token_reserve,
                lp_supply=reserves.lp_supply,
            )

        return self._call("get_amounts", run)

    def spot_price(self, side: Side = Side.BASE) -> ExchangeResult:
        return self._call("spot_price", lambda _holder: quote_spot_price(self.pool.snapshot(), side))

    def quote_add(self, base: Amount, token: Amount = 0) -> ExchangeResult:
        return self._call("quote_add", lambda _holder: quote_add(base, token, self.pool.snapshot()))

    def quote_remove(self, share_amount: Amount) -> ExchangeResult:
        return self._call("quote_remove", lambda _holder: quote_remove_record(share_amount, self.pool.snapshot()))

    def quote_swap(self, input_amount: Amount, input_side: Side) -> ExchangeResult:
        def run(_holder: str) -> Quote:
            quote = quote_swap(
                input_amount,
                input_side,
                self.pool.snapshot(),
                self.pool.fee_numerator,
                self.pool.fee_denominator,
            )
            logger.debug("swap quote %s -> %d", input_side.value, quote.output_amount)
            return quote

        return self._call("quote_swap", run)

    # -- Writes --------------------------------------------------------------

    def add_liquidity(
        self,
        base: Amount,
        token: Amount,
        *,
        quote: Optional[Quote] = None,
        min_shares: Amount = 0,
    ) -> ExchangeResult:
        return self._call(
            "add_liquidity",
            lambda holder: self.pool.add_liquidity(holder, base, token, min_shares=min_shares, expected=quote),
        )

    def remove_liquidity(
        self,
        share_amount: Amount,
        *,
        quote: Optional[Quote] = None,
        min_base: Amount = 0,
        min_token: Amount = 0,
    ) -> ExchangeResult:
        return self._call(
            "remove_liquidity",
            lambda holder: self.pool.remove_liquidity(
                holder, share_amount, min_base=min_base, min_token=min_token, expected=quote
            ),
        )

    def swap(
        self,
        input_amount: Amount,
        input_side: Side,
        *,
        min_output: Amount = 0,
        quote: Optional[Quote] = None,
    ) -> ExchangeResult:
        """Swap ``input_amount``; pass the displayed output as ``min_output`` to bound slippage."""
        return self._call(
            "swap",
            lambda holder: self.pool.swap(holder, input_amount, input_side, min_output=min_output, expected=quote),
        )

    # -- Display -------------------------------------------------------------

    def describe(self, amounts: Amounts) -> str:
        cfg = self.config
        return (
            f"{format_units(amounts.token_balance, cfg.token_decimals)} {cfg.token_symbol}, "
            f"{format_units(amounts.base_balance, cfg.base_decimals)} {cfg.base_symbol}, "
            f"{format_units(amounts.share_balance, cfg.base_decimals)} LP"
        )
