"""
Network/session gate.

The UI layer checks this before any pool operation is attempted: a wallet must
be connected and it must be on the expected chain. The pool itself never
performs this check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.errors import WalletNotConnected, WrongNetwork

SEPOLIA_CHAIN_ID = 11155111
HARDHAT_CHAIN_ID = 31337


@dataclass
class Session:
    address: Optional[str] = None
    chain_id: Optional[int] = None

    @property
    def connected(self) -> bool:
        return self.address is not None


class SessionGate:
    """Holds the connected wallet and the chain id it is on."""

    def __init__(self, expected_chain_id: int = SEPOLIA_CHAIN_ID) -> None:
        self.expected_chain_id = expected_chain_id
        self._session = Session()

    def connect(self, address: str, chain_id: int) -> Session:
        if not isinstance(address, str) or not address.strip():
            raise ValueError("address must be a non-empty string")
        self._session = Session(address=address.strip(), chain_id=int(chain_id))
        return self._session

    def disconnect(self) -> None:
        self._session = Session()

    def switch_chain(self, chain_id: int) -> None:
        self._session.chain_id = int(chain_id)

    def require(self) -> str:
        """Return the connected address or raise the reason it is unusable."""
        session = self._session
        if not session.connected:
            raise WalletNotConnected("connect your wallet")
        if session.chain_id != self.expected_chain_id:
            raise WrongNetwork(self.expected_chain_id, session.chain_id if session.chain_id is not None else -1)
        return session.address
