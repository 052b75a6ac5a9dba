#!/usr/bin/env python3
"""Offline walk-through: bootstrap a pool, swap, withdraw. Prints each step."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .integration import Exchange, ExchangeConfig, InMemoryLedger, load_config, parse_units
from .state.reserves import Side


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--config", help="YAML config file (defaults are used when omitted)")
    p.add_argument("--base", default="10", help="initial base deposit, decimal")
    p.add_argument("--token", default="10", help="initial token deposit, decimal")
    p.add_argument("--swap", default="1", help="base amount to swap for tokens, decimal")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = load_config(args.config) if args.config else ExchangeConfig()
    config = ExchangeConfig.from_env(config)
    try:
        base = parse_units(args.base, config.base_decimals)
        token = parse_units(args.token, config.token_decimals)
        swap_in = parse_units(args.swap, config.base_decimals)
    except ValueError as exc:
        print(f"[pool-demo] FAIL (bad amount): {exc}")
        return 1

    user = "0x" + "11" * 20
    ledger = InMemoryLedger()
    ledger.fund(user, base=base + swap_in, token=token)
    exchange = Exchange.from_config(config, ledger)
    exchange.gate.connect(user, config.chain_id)

    added = exchange.add_liquidity(base, token)
    if not added.ok:
        print(f"[pool-demo] FAIL (add liquidity): {added.error}")
        return 1
    print(f"[pool-demo] minted {added.value.shares_minted} shares; reserves {added.value.after!r}")

    quote = exchange.quote_swap(swap_in, Side.BASE)
    if not quote.ok:
        print(f"[pool-demo] FAIL (quote swap): {quote.error}")
        return 1
    swapped = exchange.swap(swap_in, Side.BASE, min_output=quote.value.output_amount, quote=quote.value)
    if not swapped.ok:
        print(f"[pool-demo] FAIL (swap): {swapped.error}")
        return 1
    print(f"[pool-demo] swapped {swap_in} base for {swapped.value.output_amount} token; reserves {swapped.value.after!r}")

    removed = exchange.remove_liquidity(added.value.shares_minted)
    if not removed.ok:
        print(f"[pool-demo] FAIL (remove liquidity): {removed.error}")
        return 1
    print(f"[pool-demo] withdrew base={removed.value.base_out} token={removed.value.token_out}")

    amounts = exchange.get_amounts()
    print(f"[pool-demo] you have: {exchange.describe(amounts.value)}")
    print("[pool-demo] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
