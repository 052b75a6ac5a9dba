"""
Display conversion between decimal strings and smallest-unit integers.

Presentation only: nothing in the pricing path takes a decimal. Conversion
goes through ``decimal.Decimal``; floats are rejected outright.
"""

from __future__ import annotations

from decimal import Decimal, Inexact, InvalidOperation, localcontext

from ..core.errors import ArithmeticOverflow
from ..core.fixed_point import Amount, require_uint

DEFAULT_DECIMALS = 18

# uint256 has 78 decimal digits.
_MAX_ADJUSTED_EXPONENT = 77


def parse_units(value: str, decimals: int = DEFAULT_DECIMALS) -> Amount:
    """
    Parse a human-readable amount ("1.5") into smallest units.

    An empty string parses as zero, like an empty form field.
    """
    if isinstance(value, float):
        raise TypeError("floats are not accepted; pass a decimal string")
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative: {decimals}")
    text = str(value).strip()
    if not text:
        return 0
    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    if amount < 0:
        raise ValueError(f"amount must be non-negative: {value!r}")
    if amount and amount.adjusted() + decimals > _MAX_ADJUSTED_EXPONENT:
        raise ArithmeticOverflow(f"amount exceeds uint256: {value!r}")

    with localcontext() as ctx:
        ctx.prec = _MAX_ADJUSTED_EXPONENT + 3 + decimals
        ctx.traps[Inexact] = True
        try:
            scaled = amount.scaleb(decimals)
        except Inexact as exc:
            raise ValueError(f"{value!r} has more than {decimals} fractional digits") from exc
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{value!r} has more than {decimals} fractional digits")
    return require_uint("amount", int(scaled))


def format_units(amount: Amount, decimals: int = DEFAULT_DECIMALS) -> str:
    """Format smallest units as a decimal string, trimming trailing zeros ("1.5", "2.0")."""
    require_uint("amount", amount)
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative: {decimals}")
    whole, frac = divmod(amount, 10 ** decimals)
    if decimals == 0:
        return str(whole)
    frac_text = str(frac).rjust(decimals, "0").rstrip("0") or "0"
    return f"{whole}.{frac_text}"
