"""Property tests for the pool: k growth on swaps, share conservation, atomicity.

Uses Hypothesis to fuzz reserves and operation sequences.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from cdex.core.errors import AmmError
from cdex.core.pool import Pool
from cdex.core.pricing import quote_add, quote_remove, quote_swap, quote_swap_output
from cdex.integration.ledger import InMemoryLedger
from cdex.state.reserves import ReservePair, Side

amounts = st.integers(min_value=1, max_value=10**24)
fees = st.tuples(st.integers(min_value=0, max_value=99), st.just(1000))
sides = st.sampled_from([Side.BASE, Side.TOKEN])

HOLDER = "0x" + "cc" * 20
OTHER = "0x" + "dd" * 20
TRADER = "0x" + "ee" * 20


def _pool_with(base: int, token: int, fee=(3, 1000)):
    ledger = InMemoryLedger()
    ledger.fund(HOLDER, base=base, token=token)
    pool = Pool(ledger, ledger, fee_numerator=fee[0], fee_denominator=fee[1])
    pool.add_liquidity(HOLDER, base, token)
    return pool, ledger


@settings(max_examples=300, deadline=None)
@given(x=amounts, y=amounts, dx=amounts, fee=fees)
def test_swap_output_keeps_k(x: int, y: int, dx: int, fee) -> None:
    try:
        dy = quote_swap_output(dx, x, y, fee[0], fee[1])
    except AmmError:
        return
    assert 0 < dy < y
    assert (x + dx) * (y - dy) >= x * y


@settings(max_examples=200, deadline=None)
@given(base=amounts, token=amounts, dx=amounts, side=sides)
def test_swap_never_decreases_k(base: int, token: int, dx: int, side: Side) -> None:
    pool, ledger = _pool_with(base, token)
    ledger.fund(OTHER, base=dx, token=dx)
    before = pool.snapshot()
    try:
        res = pool.swap(OTHER, dx, side)
    except AmmError:
        assert pool.snapshot() == before
        return
    after = pool.snapshot()
    assert after.constant_product() >= before.constant_product()
    assert after.lp_supply == before.lp_supply
    assert res.after == after


@settings(max_examples=200, deadline=None)
@given(
    base=amounts,
    token=amounts,
    add_base=amounts,
    extra_token=st.integers(min_value=0, max_value=10**6),
    trade=st.integers(min_value=0, max_value=10**24),
    trade_side=sides,
)
def test_add_then_remove_never_pays_out_more(
    base: int, token: int, add_base: int, extra_token: int, trade: int, trade_side: Side
) -> None:
    pool, ledger = _pool_with(base, token)
    if trade:
        # A trade first moves the pool off one share per base unit.
        ledger.fund(TRADER, base=trade, token=trade)
        try:
            pool.swap(TRADER, trade, trade_side)
        except AmmError:
            pass
    try:
        q = quote_add(add_base, 0, pool.snapshot())
    except AmmError:
        return
    offered = q.counterpart_amount + extra_token
    ledger.fund(OTHER, base=add_base, token=offered)

    try:
        added = pool.add_liquidity(OTHER, add_base, offered)
    except AmmError:
        return
    try:
        removed = pool.remove_liquidity(OTHER, added.shares_minted)
    except AmmError:
        return
    assert removed.base_out <= add_base
    assert removed.token_out <= added.token_used <= offered


@settings(max_examples=200, deadline=None)
@given(base=amounts, token=amounts, n=amounts, side=sides)
def test_quotes_are_pure(base: int, token: int, n: int, side: Side) -> None:
    reserves = ReservePair(base_reserve=base, token_reserve=token, lp_supply=base)
    for fn in (
        lambda: quote_swap(n, side, reserves),
        lambda: quote_add(n, n, reserves),
        lambda: quote_remove(min(n, base), reserves),
    ):
        try:
            first = fn()
        except AmmError as exc:
            with pytest.raises(type(exc)):
                fn()
            continue
        assert fn() == first


ops = st.lists(
    st.tuples(st.sampled_from(["add", "remove", "swap"]), amounts, sides),
    min_size=1,
    max_size=20,
)


@settings(max_examples=100, deadline=None)
@given(seed_base=amounts, seed_token=amounts, sequence=ops)
def test_failed_operations_leave_no_trace(seed_base: int, seed_token: int, sequence) -> None:
    pool, ledger = _pool_with(seed_base, seed_token)
    ledger.fund(OTHER, base=10**25, token=10**25)

    for op, amount, side in sequence:
        before = pool.snapshot()
        held = ledger.share_balance(OTHER)
        try:
            if op == "add":
                pool.add_liquidity(OTHER, amount, 10**25)
            elif op == "remove":
                pool.remove_liquidity(OTHER, min(amount, held) or amount)
            else:
                pool.swap(OTHER, amount, side)
        except AmmError:
            assert pool.snapshot() == before
            assert ledger.share_balance(OTHER) == held
        after = pool.snapshot()
        assert ledger.verify_custody(after.base_reserve, after.token_reserve, after.lp_supply)
