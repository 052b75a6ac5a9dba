"""
Integration layer: ledger adapter, session gate, configuration and the
request/response facade used by a UI.
"""

from .config import ExchangeConfig, load_config
from .exchange import Amounts, Exchange, ExchangeResult
from .ledger import InMemoryLedger
from .session import SEPOLIA_CHAIN_ID, SessionGate
from .units import format_units, parse_units

__all__ = [
    "ExchangeConfig",
    "load_config",
    "Amounts",
    "Exchange",
    "ExchangeResult",
    "InMemoryLedger",
    "SEPOLIA_CHAIN_ID",
    "SessionGate",
    "format_units",
    "parse_units",
]
