"""
Constant-product pricing (pure quote functions).

Every function here is stateless: it reads an immutable ``ReservePair``
snapshot (or plain reserve integers) and returns amounts. Nothing is mutated,
so quotes are safe to call concurrently and are idempotent.

Rounding rules:
- Amounts the pool pays out or shares it mints are floored.
- A result that truncates to zero is an error, never a silent no-op.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Invariant: after a swap, x' * y' >= x * y (fee stays in the pool)
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Tuple

from ..state.reserves import ReservePair, Side, require_side
from .errors import InsufficientLiquidity, InsufficientShares, ZeroAmount, ZeroShareMint
from .fixed_point import Amount, checked_add, checked_mul, checked_mul_div, checked_sub, require_uint

DEFAULT_FEE_NUMERATOR = 3
DEFAULT_FEE_DENOMINATOR = 1000

# First deposit mints one share per base unit deposited.
BOOTSTRAP_SHARES_PER_BASE = 1


@dataclass(frozen=True)
class Quote:
    """
    Read-only preview of an operation.

    - swap:   output_amount = amount paid out, counterpart_amount = amount paid in
    - add:    counterpart_amount = token pulled in, share_delta = shares minted
    - remove: output_amount = base paid out, counterpart_amount = token paid out,
              share_delta = -shares burned
    """

    output_amount: Amount = 0
    counterpart_amount: Amount = 0
    share_delta: int = 0


def validate_fee(fee_numerator: int, fee_denominator: int) -> None:
    """Check ``0 <= fee_numerator < fee_denominator``."""
    for name, v in (("fee_numerator", fee_numerator), ("fee_denominator", fee_denominator)):
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{name} must be an int")
    if fee_denominator <= 0:
        raise ValueError(f"fee_denominator must be positive: {fee_denominator}")
    if not (0 <= fee_numerator < fee_denominator):
        raise ValueError(f"fee_numerator must be in [0, {fee_denominator}): {fee_numerator}")


def quote_spot_price(reserves: ReservePair, side: Side) -> Fraction:
    """
    Marginal price of one unit of ``side`` expressed in the other asset.

    Returned as an exact ``Fraction``; converting it to a display string is the
    caller's concern.
    """
    side = require_side(side)
    if reserves.is_empty:
        raise InsufficientLiquidity("pool is empty: no spot price")
    return Fraction(reserves.reserve_for(side.other), reserves.reserve_for(side))


def quote_proportional_add(
    desired_base: Amount,
    reserves: ReservePair,
    *,
    desired_token: Amount = 0,
) -> Amount:
    """
    Token amount that must accompany ``desired_base`` to keep the pool ratio.

        required_token = floor(desired_base * token_reserve / base_reserve)

    For an empty pool the first deposit sets the price, so ``desired_token`` is
    accepted as given.
    """
    require_uint("desired_base", desired_base)
    require_uint("desired_token", desired_token)
    if desired_base == 0:
        raise ZeroAmount("desired_base must be positive")

    if reserves.is_empty:
        if desired_token == 0:
            raise ZeroAmount("first deposit must include a positive token amount")
        return desired_token

    required = checked_mul_div(desired_base, reserves.token_reserve, reserves.base_reserve)
    if required == 0:
        raise ZeroAmount(f"deposit too small: {desired_base} base requires zero token")
    return required


def quote_add_shares(desired_base: Amount, desired_token: Amount, reserves: ReservePair) -> Amount:
    """
    LP shares minted for a deposit.

    Empty pool:
        shares = desired_base * BOOTSTRAP_SHARES_PER_BASE
    Otherwise:
        shares = floor(desired_base * lp_supply / base_reserve)

    Raises ``ZeroShareMint`` when the deposit would mint nothing.
    """
    require_uint("desired_base", desired_base)
    require_uint("desired_token", desired_token)
    if desired_base == 0:
        raise ZeroAmount("desired_base must be positive")

    if reserves.is_empty:
        if desired_token == 0:
            raise ZeroAmount("first deposit must include a positive token amount")
        shares = checked_mul(desired_base, BOOTSTRAP_SHARES_PER_BASE)
    else:
        shares = checked_mul_div(desired_base, reserves.lp_supply, reserves.base_reserve)

    if shares == 0:
        raise ZeroShareMint(f"deposit of {desired_base} base mints zero shares")
    return shares


def quote_add(desired_base: Amount, desired_token: Amount, reserves: ReservePair) -> Quote:
    """Full add-liquidity quote: required token and shares minted."""
    required_token = quote_proportional_add(desired_base, reserves, desired_token=desired_token)
    shares = quote_add_shares(desired_base, required_token, reserves)
    return Quote(output_amount=0, counterpart_amount=required_token, share_delta=shares)


def quote_remove(share_amount: Amount, reserves: ReservePair) -> Tuple[Amount, Amount]:
    """
    Assets returned for burning ``share_amount`` LP shares.

        base_out  = floor(share_amount * base_reserve  / lp_supply)
        token_out = floor(share_amount * token_reserve / lp_supply)
    """
    require_uint("share_amount", share_amount)
    if share_amount == 0:
        raise ZeroAmount("share_amount must be positive")
    if reserves.lp_supply == 0:
        raise InsufficientShares("pool has no outstanding shares")
    if share_amount > reserves.lp_supply:
        raise InsufficientShares(
            f"cannot burn more shares than supply: {share_amount} > {reserves.lp_supply}"
        )

    base_out = checked_mul_div(share_amount, reserves.base_reserve, reserves.lp_supply)
    token_out = checked_mul_div(share_amount, reserves.token_reserve, reserves.lp_supply)
    if base_out == 0 or token_out == 0:
        raise ZeroAmount(f"burning {share_amount} shares returns ({base_out}, {token_out})")
    return base_out, token_out


def quote_remove_record(share_amount: Amount, reserves: ReservePair) -> Quote:
    base_out, token_out = quote_remove(share_amount, reserves)
    return Quote(output_amount=base_out, counterpart_amount=token_out, share_delta=-share_amount)


def quote_swap_output(
    input_amount: Amount,
    input_reserve: Amount,
    output_reserve: Amount,
    fee_numerator: int = DEFAULT_FEE_NUMERATOR,
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR,
) -> Amount:
    """
    Constant-product output for an exact input, fee taken from the input.

        effective_input = input_amount * (fee_denominator - fee_numerator)
        output = floor(effective_input * output_reserve /
                       (input_reserve * fee_denominator + effective_input))

    Invariant: (input_reserve + input_amount) * (output_reserve - output)
               >= input_reserve * output_reserve
    """
    require_uint("input_amount", input_amount)
    require_uint("input_reserve", input_reserve)
    require_uint("output_reserve", output_reserve)
    validate_fee(fee_numerator, fee_denominator)

    if input_amount == 0:
        raise ZeroAmount("input_amount must be positive")
    if output_reserve == 0 or input_reserve == 0:
        raise InsufficientLiquidity("cannot swap against an empty reserve")

    effective_input = checked_mul(input_amount, checked_sub(fee_denominator, fee_numerator))
    numerator = checked_mul(effective_input, output_reserve)
    denominator = checked_add(checked_mul(input_reserve, fee_denominator), effective_input)
    output = numerator // denominator

    if output >= output_reserve:
        raise InsufficientLiquidity(f"output {output} would drain reserve {output_reserve}")
    if output == 0:
        raise ZeroAmount(f"swap of {input_amount} pays zero (trade too small)")
    return output


def quote_swap(
    input_amount: Amount,
    input_side: Side,
    reserves: ReservePair,
    fee_numerator: int = DEFAULT_FEE_NUMERATOR,
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR,
) -> Quote:
    """Swap quote against a reserves snapshot; ``input_side`` receives the input."""
    input_side = require_side(input_side)
    output = quote_swap_output(
        input_amount,
        reserves.reserve_for(input_side),
        reserves.reserve_for(input_side.other),
        fee_numerator,
        fee_denominator,
    )
    return Quote(output_amount=output, counterpart_amount=input_amount, share_delta=0)
