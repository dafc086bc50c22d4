"""Swap curve variants.

The curve is a closed sum type: ``CurveType = ConstantProduct | StableSwap``.
Operations dispatch on it with ``match`` and ``assert_never`` so that adding a
variant fails type checking everywhere it is not handled.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TypeAlias


class TradeDirection(str, Enum):
    """Which reserve is the source of a trade."""

    A_TO_B = "aToB"
    B_TO_A = "bToA"

    @property
    def opposite(self) -> TradeDirection:
        return TradeDirection.B_TO_A if self is TradeDirection.A_TO_B else TradeDirection.A_TO_B


class DepegSource(str, Enum):
    """Which side of a stable pool is a staked-asset wrapper priced by an oracle."""

    NONE = "none"
    ORACLE_A = "oracleA"
    ORACLE_B = "oracleB"


@dataclass(frozen=True)
class DepegConfig:
    """Depeg adjustment of a stable pool.

    Attributes:
        source: Side priced by the oracle, or NONE
        base_virtual_price: Oracle exchange rate (precision 10^6), resolved from
            the oracle state before any curve math. None until resolved.
    """

    source: DepegSource = DepegSource.NONE
    base_virtual_price: int | None = None

    @property
    def is_active(self) -> bool:
        return self.source is not DepegSource.NONE


@dataclass(frozen=True)
class TokenMultiplier:
    """Scales both reserves to a common precision before curve math.

    Attributes:
        token_a_multiplier: Multiplier applied to token A amounts
        token_b_multiplier: Multiplier applied to token B amounts
        precision_factor: Decimals of the common precision
    """

    token_a_multiplier: int = 1
    token_b_multiplier: int = 1
    precision_factor: int = 0

    def __post_init__(self) -> None:
        if self.token_a_multiplier <= 0 or self.token_b_multiplier <= 0:
            raise ValueError("Token multipliers must be positive")


@dataclass(frozen=True)
class ConstantProduct:
    """x * y = k curve."""


@dataclass(frozen=True)
class StableSwap:
    """StableSwap invariant for two assets.

    Attributes:
        amp: Amplification coefficient A (>= 1)
        token_multiplier: Precision normalization of both sides
        depeg: Depeg adjustment for staked-asset wrappers
    """

    amp: int
    token_multiplier: TokenMultiplier = field(default_factory=TokenMultiplier)
    depeg: DepegConfig = field(default_factory=DepegConfig)

    def __post_init__(self) -> None:
        if self.amp < 1:
            raise ValueError(f"Amplification coefficient must be >= 1, got {self.amp}")

    def with_base_virtual_price(self, base_virtual_price: int) -> StableSwap:
        return replace(self, depeg=replace(self.depeg, base_virtual_price=base_virtual_price))


CurveType: TypeAlias = ConstantProduct | StableSwap
