"""Depeg oracles for staked-asset stable pools.

A stable pool pairing an asset with its staked wrapper prices the wrapper
side through an exchange-rate oracle. The oracle is read on every quote, the
same way the remote program refreshes the base virtual price on every swap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, assert_never

import structlog

from amm_quote.constants import DEPEG_PRECISION
from amm_quote.curve.types import ConstantProduct, CurveType, StableSwap
from amm_quote.errors import EmptyPool, MissingDepegAccount
from amm_quote.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class ExchangeRateOracle:
    """Oracle exposing an already-scaled exchange rate (precision 10^6)."""

    virtual_price: int

    def __post_init__(self) -> None:
        if self.virtual_price <= 0:
            raise ValueError(f"Exchange rate must be positive, got {self.virtual_price}")

    def get_virtual_price(self) -> int:
        return self.virtual_price


@dataclass(frozen=True)
class SplStakeOracle:
    """Stake pool state: lamports backing the pool token and its withdrawal fee.

    Attributes:
        total_lamports: Lamports held by the stake pool
        pool_token_supply: Supply of the stake pool token
        withdrawal_fee_numerator: SOL withdrawal fee numerator
        withdrawal_fee_denominator: SOL withdrawal fee denominator
    """

    total_lamports: int
    pool_token_supply: int
    withdrawal_fee_numerator: int = 0
    withdrawal_fee_denominator: int = 0

    def get_virtual_price(self) -> int:
        """Exchange rate of the pool token, weighting deposit price 3:1 over withdraw price.

        Raises:
            EmptyPool: If the stake pool has no token supply
        """
        if self.pool_token_supply == 0:
            raise EmptyPool("Stake pool has no token supply")

        deposit_price = S(self.total_lamports) * DEPEG_PRECISION // self.pool_token_supply

        numerator = self.withdrawal_fee_numerator
        denominator = self.withdrawal_fee_denominator
        # Withdrawal fees of 10% or more are ignored
        if denominator <= numerator * 10:
            return deposit_price.value

        withdraw_price = (
            S(self.total_lamports) * (S(denominator) - numerator) * DEPEG_PRECISION
            // denominator
            // self.pool_token_supply
        )
        return ((deposit_price * 3 + withdraw_price) // 4).value


DepegOracle: TypeAlias = ExchangeRateOracle | SplStakeOracle


def resolve_depeg(curve: CurveType, oracle: DepegOracle | None) -> CurveType:
    """Return the curve with its base virtual price read from ``oracle``.

    Raises:
        MissingDepegAccount: If the curve needs an oracle and none is supplied
    """
    match curve:
        case ConstantProduct():
            return curve
        case StableSwap():
            if not curve.depeg.is_active:
                return curve
            if oracle is None:
                raise MissingDepegAccount(
                    f"Depeg source {curve.depeg.source.value} requires oracle state"
                )
            base_virtual_price = oracle.get_virtual_price()
            logger.debug(
                "depeg_base_virtual_price_resolved",
                source=curve.depeg.source.value,
                base_virtual_price=base_virtual_price,
            )
            return curve.with_base_virtual_price(base_virtual_price)
        case _:
            assert_never(curve)
