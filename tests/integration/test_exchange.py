"""Tests for the request/response facade: session gate, typed results, quote round trips."""

from __future__ import annotations

from fractions import Fraction

import pytest

from cdex.core.pool import AddLiquidityResult, SwapResult
from cdex.core.pricing import Quote
from cdex.integration.config import ExchangeConfig
from cdex.integration.exchange import Amounts, Exchange
from cdex.integration.ledger import InMemoryLedger
from cdex.integration.session import HARDHAT_CHAIN_ID, SEPOLIA_CHAIN_ID
from cdex.state.reserves import ReservePair, Side

USER = "0x" + "ab" * 20
E18 = 10**18


@pytest.fixture
def exchange() -> Exchange:
    ledger = InMemoryLedger()
    ledger.fund(USER, base=100 * E18, token=100 * E18)
    ex = Exchange.from_config(ExchangeConfig(), ledger)
    ex.gate.connect(USER, SEPOLIA_CHAIN_ID)
    return ex


def test_operations_require_a_connected_wallet() -> None:
    ex = Exchange.from_config(ExchangeConfig())
    res = ex.get_amounts()
    assert not res.ok
    assert res.error_code == "wallet_not_connected"


def test_operations_require_the_expected_network(exchange: Exchange) -> None:
    exchange.gate.switch_chain(HARDHAT_CHAIN_ID)
    res = exchange.add_liquidity(E18, E18)
    assert not res.ok
    assert res.error_code == "wrong_network"
    assert exchange.pool.snapshot() == ReservePair.empty()

    exchange.gate.switch_chain(SEPOLIA_CHAIN_ID)
    assert exchange.add_liquidity(E18, E18).ok


def test_disconnect(exchange: Exchange) -> None:
    exchange.gate.disconnect()
    assert exchange.quote_swap(1, Side.BASE).error_code == "wallet_not_connected"


def test_get_amounts(exchange: Exchange) -> None:
    assert exchange.add_liquidity(10 * E18, 20 * E18).ok

    res = exchange.get_amounts()

    assert res.ok
    assert res.value == Amounts(
        base_balance=90 * E18,
        token_balance=80 * E18,
        share_balance=10 * E18,
        base_reserve=10 * E18,
        token_reserve=20 * E18,
        lp_supply=10 * E18,
    )
    assert exchange.describe(res.value) == "80.0 CD, 90.0 ETH, 10.0 LP"


def test_quote_then_execute_swap(exchange: Exchange) -> None:
    exchange.add_liquidity(10 * E18, 10 * E18)

    quoted = exchange.quote_swap(E18, Side.BASE)
    assert quoted.ok
    res = exchange.swap(E18, Side.BASE, min_output=quoted.value.output_amount, quote=quoted.value)

    assert res.ok
    assert isinstance(res.value, SwapResult)
    assert res.value.output_amount == quoted.value.output_amount


def test_stale_quote_comes_back_as_a_typed_failure(exchange: Exchange) -> None:
    exchange.add_liquidity(10 * E18, 10 * E18)
    quoted = exchange.quote_swap(E18, Side.BASE).value
    assert exchange.swap(E18, Side.BASE).ok

    res = exchange.swap(E18, Side.BASE, quote=quoted)

    assert not res.ok
    assert res.error_code == "stale_quote"
    assert "output_amount" in res.error


def test_add_quote_round_trip(exchange: Exchange) -> None:
    exchange.add_liquidity(10 * E18, 30 * E18)

    quoted = exchange.quote_add(E18)
    assert quoted.value == Quote(output_amount=0, counterpart_amount=3 * E18, share_delta=E18)
    res = exchange.add_liquidity(E18, quoted.value.counterpart_amount, quote=quoted.value)

    assert res.ok
    assert isinstance(res.value, AddLiquidityResult)
    assert res.value.shares_minted == E18


def test_remove_quote_round_trip(exchange: Exchange) -> None:
    exchange.add_liquidity(10 * E18, 30 * E18)

    quoted = exchange.quote_remove(5 * E18)
    assert quoted.value == Quote(output_amount=5 * E18, counterpart_amount=15 * E18, share_delta=-5 * E18)
    res = exchange.remove_liquidity(5 * E18, quote=quoted.value)

    assert res.ok
    assert (res.value.base_out, res.value.token_out) == (5 * E18, 15 * E18)


def test_failures_map_to_error_codes(exchange: Exchange) -> None:
    assert exchange.swap(E18, Side.BASE).error_code == "insufficient_liquidity"
    assert exchange.quote_remove(1).error_code == "insufficient_shares"
    assert exchange.add_liquidity(0, E18).error_code == "zero_amount"
    assert exchange.add_liquidity(1000 * E18, 1000 * E18).error_code == "insufficient_balance"
    assert exchange.spot_price().error_code == "insufficient_liquidity"


def test_non_side_arguments_come_back_as_failures(exchange: Exchange) -> None:
    exchange.add_liquidity(10 * E18, 40 * E18)
    for res in (
        exchange.quote_swap(5, "base"),
        exchange.spot_price("token"),
        exchange.swap(5, "base"),
    ):
        assert not res.ok
        assert res.error_code == "invalid_side"


def test_spot_price(exchange: Exchange) -> None:
    exchange.add_liquidity(10 * E18, 40 * E18)
    assert exchange.spot_price(Side.BASE).value == Fraction(4)
    assert exchange.spot_price(Side.TOKEN).value == Fraction(1, 4)


def test_config_fee_reaches_the_pool() -> None:
    ex = Exchange.from_config(ExchangeConfig(fee_numerator=0, fee_denominator=1, chain_id=HARDHAT_CHAIN_ID))
    assert ex.pool.fee_numerator == 0
    assert ex.gate.expected_chain_id == HARDHAT_CHAIN_ID
