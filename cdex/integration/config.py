"""
Exchange configuration.

Sources, in the order callers usually layer them:
- ``ExchangeConfig()`` defaults
- ``load_config(path)``: a YAML file with the same keys as the dataclass
- ``ExchangeConfig.from_env()``: ``CDEX_*`` environment variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from ..core.pricing import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR, validate_fee
from .session import SEPOLIA_CHAIN_ID
from .units import DEFAULT_DECIMALS

ENV_PREFIX = "CDEX_"


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if v < lo or v > hi:
        raise ValueError(f"{name} must be in [{lo}, {hi}], got {v}")
    return v


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


@dataclass(frozen=True)
class ExchangeConfig:
    """Runtime config for one pool and its session gate."""

    fee_numerator: int = DEFAULT_FEE_NUMERATOR
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR
    chain_id: int = SEPOLIA_CHAIN_ID
    base_decimals: int = DEFAULT_DECIMALS
    token_decimals: int = DEFAULT_DECIMALS
    base_symbol: str = "ETH"
    token_symbol: str = "CD"

    def __post_init__(self) -> None:
        validate_fee(self.fee_numerator, self.fee_denominator)
        for name in ("chain_id", "base_decimals", "token_decimals"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.chain_id <= 0:
            raise ValueError(f"chain_id must be positive: {self.chain_id}")
        for name in ("base_decimals", "token_decimals"):
            v = getattr(self, name)
            if not (0 <= v <= 77):
                raise ValueError(f"{name} must be in [0, 77]: {v}")
        for name in ("base_symbol", "token_symbol"):
            v = getattr(self, name)
            if not isinstance(v, str) or not v.strip():
                raise ValueError(f"{name} must be a non-empty string")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExchangeConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_env(cls, base: Optional["ExchangeConfig"] = None) -> "ExchangeConfig":
        """Override ``base`` (or the defaults) with ``CDEX_*`` environment variables."""
        cfg = base if base is not None else cls()
        return replace(
            cfg,
            fee_numerator=_env_int(f"{ENV_PREFIX}FEE_NUMERATOR", cfg.fee_numerator, lo=0, hi=10**18),
            fee_denominator=_env_int(f"{ENV_PREFIX}FEE_DENOMINATOR", cfg.fee_denominator, lo=1, hi=10**18),
            chain_id=_env_int(f"{ENV_PREFIX}CHAIN_ID", cfg.chain_id, lo=1, hi=2**63 - 1),
            base_decimals=_env_int(f"{ENV_PREFIX}BASE_DECIMALS", cfg.base_decimals, lo=0, hi=77),
            token_decimals=_env_int(f"{ENV_PREFIX}TOKEN_DECIMALS", cfg.token_decimals, lo=0, hi=77),
            base_symbol=_env_str(f"{ENV_PREFIX}BASE_SYMBOL", cfg.base_symbol),
            token_symbol=_env_str(f"{ENV_PREFIX}TOKEN_SYMBOL", cfg.token_symbol),
        )


def load_config(path: Union[str, Path]) -> ExchangeConfig:
    """Load an ``ExchangeConfig`` from a YAML mapping. An empty file gives the defaults."""
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if data is None:
        return ExchangeConfig()
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a YAML mapping")
    return ExchangeConfig.from_mapping(data)
