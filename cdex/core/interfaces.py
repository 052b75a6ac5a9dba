"""Interfaces of the external collaborators the pool talks to.

The pool never owns holder balances. It reads them through a
``BalanceOracle`` and requests asset movement and share mint/burn through a
``TransferExecutor`` as a batch of ``Effect`` records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Sequence

from ..state.reserves import Side
from .fixed_point import Amount


@unique
class EffectKind(Enum):
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    MINT_SHARES = "mint_shares"
    BURN_SHARES = "burn_shares"


@dataclass(frozen=True)
class Effect:
    """One side effect requested by a pool operation.

    ``side`` is set for transfers and ``None`` for share mint/burn.
    """

    kind: EffectKind
    amount: Amount
    side: Optional[Side] = None


class BalanceOracle(ABC):
    """Read-only view of holder balances."""

    @abstractmethod
    def balance_of(self, holder: str, side: Side) -> Amount:
        """Return ``holder``'s balance of the asset on ``side``."""

    @abstractmethod
    def share_balance(self, holder: str) -> Amount:
        """Return ``holder``'s LP share balance."""

    @abstractmethod
    def total_shares(self) -> Amount:
        """Return the total LP shares tracked by the share ledger."""


class TransferExecutor(ABC):
    """Performs the asset movement and share-ledger updates of an operation."""

    @abstractmethod
    def execute(self, holder: str, effects: Sequence[Effect]) -> bool:
        """Apply all ``effects`` for ``holder`` or none of them.

        Returns True on success and False if the batch was rejected.
        """
