"""
Pool operations: add liquidity, remove liquidity, swap.

Each entry point is an all-or-nothing state transition:
- Re-derive the quote from the current reserves (a caller's quote is only
  compared against it, never trusted)
- Validate everything, including holder balances, before touching state
- Hand the side effects to the executor as one batch
- Commit the new ``ReservePair`` only after the executor succeeds

Operations on one pool are serialized by a single lock; all three reserve
fields are read together for every quote, so they are never locked apart.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

from ..state.reserves import ReservePair, Side, require_side
from .errors import (
    AmmError,
    ExecutionFailed,
    InsufficientBalance,
    InsufficientShares,
    SlippageExceeded,
    StaleQuote,
)
from .fixed_point import Amount, require_uint
from .interfaces import BalanceOracle, Effect, EffectKind, TransferExecutor
from .pricing import (
    DEFAULT_FEE_DENOMINATOR,
    DEFAULT_FEE_NUMERATOR,
    Quote,
    quote_add_shares,
    quote_proportional_add,
    quote_remove,
    quote_swap,
    validate_fee,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddLiquidityResult:
    base_used: Amount
    token_used: Amount
    shares_minted: Amount
    before: ReservePair
    after: ReservePair


@dataclass(frozen=True)
class RemoveLiquidityResult:
    shares_burned: Amount
    base_out: Amount
    token_out: Amount
    before: ReservePair
    after: ReservePair


@dataclass(frozen=True)
class SwapResult:
    input_side: Side
    input_amount: Amount
    output_amount: Amount
    before: ReservePair
    after: ReservePair


def _check_expected(expected: Optional[Quote], actual: Quote) -> None:
    if expected is None:
        return
    for field in ("output_amount", "counterpart_amount", "share_delta"):
        want = getattr(expected, field)
        got = getattr(actual, field)
        if want != got:
            raise StaleQuote(field, want, got)


def _check_minimum(field: str, minimum: Amount, actual: Amount) -> None:
    require_uint(f"min_{field}", minimum)
    if actual < minimum:
        raise SlippageExceeded(field, minimum, actual)


class Pool:
    """
    One base/token constant-product pool.

    The pool holds a single ``ReservePair``; holder balances live behind the
    ``oracle``/``executor`` pair (often the same in-memory ledger object).
    """

    def __init__(
        self,
        oracle: BalanceOracle,
        executor: TransferExecutor,
        *,
        fee_numerator: int = DEFAULT_FEE_NUMERATOR,
        fee_denominator: int = DEFAULT_FEE_DENOMINATOR,
        reserves: Optional[ReservePair] = None,
    ) -> None:
        validate_fee(fee_numerator, fee_denominator)
        self._oracle = oracle
        self._executor = executor
        self._fee_numerator = fee_numerator
        self._fee_denominator = fee_denominator
        self._reserves = reserves if reserves is not None else ReservePair.empty()
        self._lock = threading.Lock()

    @property
    def fee_numerator(self) -> int:
        return self._fee_numerator

    @property
    def fee_denominator(self) -> int:
        return self._fee_denominator

    @property
    def oracle(self) -> BalanceOracle:
        return self._oracle

    def snapshot(self) -> ReservePair:
        """Current reserves. The snapshot is immutable and safe to quote against."""
        with self._lock:
            return self._reserves

    # -- Liquidity -----------------------------------------------------------

    def add_liquidity(
        self,
        holder: str,
        base: Amount,
        token: Amount,
        *,
        min_shares: Amount = 0,
        expected: Optional[Quote] = None,
    ) -> AddLiquidityResult:
        """
        Deposit ``base`` plus the proportional token amount and mint shares.

        For a non-empty pool only ``quote_proportional_add(base)`` tokens are
        pulled in; ``token`` must be at least that amount. For an empty pool
        both amounts are taken as given and set the initial price.

        Raises:
            ZeroAmount, ZeroShareMint: deposit too small
            StaleQuote: ``token`` below the required amount, or ``expected`` mismatch
            SlippageExceeded: fewer than ``min_shares`` would be minted
            InsufficientBalance: holder cannot fund the deposit
            ExecutionFailed: the executor rejected the batch
        """
        with self._lock:
            before = self._reserves
            try:
                required_token = quote_proportional_add(base, before, desired_token=token)
                if token < required_token:
                    raise StaleQuote("token", token, required_token)
                shares = quote_add_shares(base, required_token, before)
                _check_expected(
                    expected,
                    Quote(output_amount=0, counterpart_amount=required_token, share_delta=shares),
                )
                _check_minimum("shares", min_shares, shares)
                self._require_balance(holder, Side.BASE, base)
                self._require_balance(holder, Side.TOKEN, required_token)

                after = before.with_deltas(base_in=base, token_in=required_token, shares_minted=shares)
                effects = [
                    Effect(EffectKind.TRANSFER_IN, base, Side.BASE),
                    Effect(EffectKind.TRANSFER_IN, required_token, Side.TOKEN),
                    Effect(EffectKind.MINT_SHARES, shares),
                ]
                self._commit("add_liquidity", holder, effects, after)
            except AmmError as exc:
                self._log_rejection("add_liquidity", holder, exc)
                raise

        return AddLiquidityResult(
            base_used=base,
            token_used=required_token,
            shares_minted=shares,
            before=before,
            after=after,
        )

    def remove_liquidity(
        self,
        holder: str,
        share_amount: Amount,
        *,
        min_base: Amount = 0,
        min_token: Amount = 0,
        expected: Optional[Quote] = None,
    ) -> RemoveLiquidityResult:
        """
        Burn ``share_amount`` of the holder's shares for a pro-rata slice of reserves.

        Withdrawing the whole supply drains the pool back to the empty state,
        from which a new deposit can bootstrap it again.
        """
        with self._lock:
            before = self._reserves
            try:
                base_out, token_out = quote_remove(share_amount, before)
                held = self._oracle.share_balance(holder)
                if held < share_amount:
                    raise InsufficientShares(f"holder has {held} shares, asked to burn {share_amount}")
                _check_expected(
                    expected,
                    Quote(output_amount=base_out, counterpart_amount=token_out, share_delta=-share_amount),
                )
                _check_minimum("base", min_base, base_out)
                _check_minimum("token", min_token, token_out)

                after = before.with_deltas(base_out=base_out, token_out=token_out, shares_burned=share_amount)
                effects = [
                    Effect(EffectKind.BURN_SHARES, share_amount),
                    Effect(EffectKind.TRANSFER_OUT, base_out, Side.BASE),
                    Effect(EffectKind.TRANSFER_OUT, token_out, Side.TOKEN),
                ]
                self._commit("remove_liquidity", holder, effects, after)
            except AmmError as exc:
                self._log_rejection("remove_liquidity", holder, exc)
                raise

        return RemoveLiquidityResult(
            shares_burned=share_amount,
            base_out=base_out,
            token_out=token_out,
            before=before,
            after=after,
        )

    # -- Swap ----------------------------------------------------------------

    def swap(
        self,
        holder: str,
        input_amount: Amount,
        input_side: Side,
        *,
        min_output: Amount = 0,
        expected: Optional[Quote] = None,
    ) -> SwapResult:
        """
        Exact-in swap: ``input_amount`` enters on ``input_side``, the output
        leaves from the other side. The output is priced on the pre-trade
        reserves only; ``lp_supply`` is unchanged.
        """
        input_side = require_side(input_side)

        with self._lock:
            before = self._reserves
            try:
                quote = quote_swap(
                    input_amount,
                    input_side,
                    before,
                    self._fee_numerator,
                    self._fee_denominator,
                )
                _check_expected(expected, quote)
                _check_minimum("output", min_output, quote.output_amount)
                self._require_balance(holder, input_side, input_amount)

                if input_side is Side.BASE:
                    after = before.with_deltas(base_in=input_amount, token_out=quote.output_amount)
                else:
                    after = before.with_deltas(token_in=input_amount, base_out=quote.output_amount)
                if after.constant_product() < before.constant_product():
                    raise AmmError(
                        f"Invariant violation: new_k ({after.constant_product()}) "
                        f"< old_k ({before.constant_product()})"
                    )

                effects = [
                    Effect(EffectKind.TRANSFER_IN, input_amount, input_side),
                    Effect(EffectKind.TRANSFER_OUT, quote.output_amount, input_side.other),
                ]
                self._commit("swap", holder, effects, after)
            except AmmError as exc:
                self._log_rejection("swap", holder, exc)
                raise

        return SwapResult(
            input_side=input_side,
            input_amount=input_amount,
            output_amount=quote.output_amount,
            before=before,
            after=after,
        )

    # -- Internals (caller holds the lock) -----------------------------------

    def _require_balance(self, holder: str, side: Side, amount: Amount) -> None:
        available = self._oracle.balance_of(holder, side)
        if available < amount:
            raise InsufficientBalance(
                f"holder {holder} has {available} {side.value}, operation needs {amount}"
            )

    def _commit(self, op: str, holder: str, effects: Sequence[Effect], after: ReservePair) -> None:
        if not self._executor.execute(holder, list(effects)):
            raise ExecutionFailed(f"{op}: executor rejected {len(effects)} effects for {holder}")
        self._reserves = after
        logger.info(
            "%s committed for %s: %r",
            op,
            holder,
            after,
            extra={"event": f"pool.{op}", "holder": holder},
        )

    @staticmethod
    def _log_rejection(op: str, holder: str, exc: AmmError) -> None:
        logger.warning(
            "%s rejected for %s: %s",
            op,
            holder,
            exc,
            extra={"event": f"pool.{op}.rejected", "code": exc.code},
        )

    def __repr__(self) -> str:
        return f"Pool({self._reserves!r}, fee={self._fee_numerator}/{self._fee_denominator})"
