"""
Reserve state for a single base/token liquidity pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique

from ..core.errors import ArithmeticUnderflow, InvalidSide
from ..core.fixed_point import Amount, checked_add, checked_sub, require_uint


@unique
class Side(Enum):
    """Which reserve an amount belongs to."""

    BASE = "base"
    TOKEN = "token"

    @property
    def other(self) -> "Side":
        return Side.TOKEN if self is Side.BASE else Side.BASE


def require_side(side: object) -> Side:
    if not isinstance(side, Side):
        raise InvalidSide(f"side must be a Side, got {side!r}")
    return side


@dataclass(frozen=True)
class ReservePair:
    """
    Immutable snapshot of one pool's reserves and outstanding LP supply.

    Attributes:
        base_reserve: Amount of the base asset (e.g. native coin) held by the pool
        token_reserve: Amount of the fungible token held by the pool
        lp_supply: Total outstanding LP shares

    The pool is either fully empty (all three zero) or has positive reserves on
    both sides and a positive share supply. A drained pool is a valid empty pool.
    """

    base_reserve: Amount = 0
    token_reserve: Amount = 0
    lp_supply: Amount = 0

    def __post_init__(self) -> None:
        for name, v in (
            ("base_reserve", self.base_reserve),
            ("token_reserve", self.token_reserve),
            ("lp_supply", self.lp_supply),
        ):
            require_uint(name, v)

        zeros = (self.base_reserve == 0, self.token_reserve == 0, self.lp_supply == 0)
        if any(zeros) and not all(zeros):
            raise ValueError(
                "reserves must be all zero or all positive: "
                f"({self.base_reserve}, {self.token_reserve}, lp={self.lp_supply})"
            )

    @classmethod
    def empty(cls) -> "ReservePair":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.lp_supply == 0

    def reserve_for(self, side: Side) -> Amount:
        """Get the reserve held on ``side``."""
        if require_side(side) is Side.BASE:
            return self.base_reserve
        return self.token_reserve

    def constant_product(self) -> int:
        """
        Compute k = base_reserve * token_reserve.

        Not range-checked: k is only compared, never stored on the ledger.
        """
        return self.base_reserve * self.token_reserve

    def with_deltas(
        self,
        *,
        base_in: Amount = 0,
        base_out: Amount = 0,
        token_in: Amount = 0,
        token_out: Amount = 0,
        shares_minted: Amount = 0,
        shares_burned: Amount = 0,
    ) -> "ReservePair":
        """
        Return a new snapshot with the given credits/debits applied.

        Raises ``ArithmeticOverflow``/``ArithmeticUnderflow`` on range errors and
        ``ArithmeticUnderflow`` if the result would break the emptiness invariant.
        """
        base = checked_sub(checked_add(self.base_reserve, base_in), base_out)
        token = checked_sub(checked_add(self.token_reserve, token_in), token_out)
        supply = checked_sub(checked_add(self.lp_supply, shares_minted), shares_burned)
        try:
            return ReservePair(base_reserve=base, token_reserve=token, lp_supply=supply)
        except ArithmeticUnderflow:
            raise
        except ValueError as exc:
            raise ArithmeticUnderflow(str(exc)) from exc

    def __repr__(self) -> str:
        return (
            f"ReservePair(base={self.base_reserve}, token={self.token_reserve}, "
            f"lp_supply={self.lp_supply})"
        )
