"""
Overflow-checked unsigned integer arithmetic for token amounts.

Amounts are plain Python ints in the smallest indivisible unit. Python ints
never wrap, so the fixed width of the host ledger (an unsigned 256-bit word)
is enforced explicitly: every result is range-checked and an out-of-range
value raises instead of being truncated.

Division truncates toward zero (all operands are non-negative, so this is
also floor). Rounding direction is the caller's decision.
"""

from __future__ import annotations

from .errors import ArithmeticOverflow, ArithmeticUnderflow

UINT256_MAX = (1 << 256) - 1

# Type alias
Amount = int


def require_uint(name: str, value: int) -> int:
    """Check that ``value`` is a non-bool int inside ``[0, UINT256_MAX]``."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ArithmeticUnderflow(f"{name} must be non-negative: {value}")
    if value > UINT256_MAX:
        raise ArithmeticOverflow(f"{name} exceeds uint256: {value}")
    return value


def _check_result(op: str, value: int) -> int:
    if value > UINT256_MAX:
        raise ArithmeticOverflow(f"{op} overflows uint256")
    return value


def checked_add(a: Amount, b: Amount) -> Amount:
    require_uint("a", a)
    require_uint("b", b)
    return _check_result("add", a + b)


def checked_sub(a: Amount, b: Amount) -> Amount:
    require_uint("a", a)
    require_uint("b", b)
    if b > a:
        raise ArithmeticUnderflow(f"sub underflows: {a} - {b}")
    return a - b


def checked_mul(a: Amount, b: Amount) -> Amount:
    require_uint("a", a)
    require_uint("b", b)
    return _check_result("mul", a * b)


def checked_div(a: Amount, b: Amount) -> Amount:
    """``floor(a / b)``. Raises ``ZeroDivisionError`` when ``b == 0``."""
    require_uint("a", a)
    require_uint("b", b)
    if b == 0:
        raise ZeroDivisionError("division by zero")
    return a // b


def ceil_div(a: Amount, b: Amount) -> Amount:
    require_uint("a", a)
    require_uint("b", b)
    if b == 0:
        raise ZeroDivisionError("division by zero")
    if a == 0:
        return 0
    return (a - 1) // b + 1


def checked_mul_div(a: Amount, b: Amount, d: Amount) -> Amount:
    """
    Compute ``floor(a * b / d)``.

    The intermediate product is overflow-checked, matching a ledger that has
    no wider scratch type than its word size.
    """
    return checked_div(checked_mul(a, b), d)
