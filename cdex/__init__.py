"""
Constant-product exchange core for a base-asset / token liquidity pool.
"""

# Import order matters: `state` imports from `core.errors`/`core.fixed_point`.
from .core import Pool, Quote
from .state import ReservePair, Side

__version__ = "0.1.0"

__all__ = ["Pool", "Quote", "ReservePair", "Side", "__version__"]
