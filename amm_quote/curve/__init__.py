"""Swap curves: constant product and StableSwap.

The public functions here dispatch on the closed ``CurveType`` union. Trade
direction is always supplied by the caller; it is never inferred from mints
inside the curve.
"""

from __future__ import annotations

from typing import assert_never

from amm_quote.curve import constant_product, stable_swap
from amm_quote.curve.depeg import DepegOracle, ExchangeRateOracle, SplStakeOracle, resolve_depeg
from amm_quote.curve.types import (
    ConstantProduct,
    CurveType,
    DepegConfig,
    DepegSource,
    StableSwap,
    TokenMultiplier,
    TradeDirection,
)
from amm_quote.fees.pool_fees import PoolFees


def compute_out_amount(
    curve: CurveType,
    source_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    direction: TradeDirection,
) -> int:
    """Destination amount for a fee-reduced source amount."""
    match curve:
        case ConstantProduct():
            return constant_product.compute_out_amount(
                source_amount, swap_source_amount, swap_destination_amount
            )
        case StableSwap():
            return stable_swap.compute_out_amount(
                curve, source_amount, swap_source_amount, swap_destination_amount, direction
            )
        case _:
            assert_never(curve)


def compute_in_amount(
    curve: CurveType,
    destination_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    direction: TradeDirection,
) -> int:
    """Source amount needed for a destination amount (capacity estimation only)."""
    match curve:
        case ConstantProduct():
            return constant_product.compute_in_amount(
                destination_amount, swap_source_amount, swap_destination_amount
            )
        case StableSwap():
            return stable_swap.compute_in_amount(
                curve, destination_amount, swap_source_amount, swap_destination_amount, direction
            )
        case _:
            assert_never(curve)


def compute_d(curve: CurveType, reserve_a: int, reserve_b: int) -> int:
    """Pool invariant ("total value") for the given reserves."""
    match curve:
        case ConstantProduct():
            return constant_product.compute_d(reserve_a, reserve_b)
        case StableSwap():
            return stable_swap.compute_d(curve, reserve_a, reserve_b)
        case _:
            assert_never(curve)


def compute_imbalance_deposit(
    curve: CurveType,
    deposit_a: int,
    deposit_b: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
    fees: PoolFees,
) -> int:
    """Pool shares minted for a two-sided deposit."""
    match curve:
        case ConstantProduct():
            return constant_product.compute_imbalance_deposit(
                deposit_a, deposit_b, reserve_a, reserve_b, lp_supply
            )
        case StableSwap():
            return stable_swap.compute_imbalance_deposit(
                curve, deposit_a, deposit_b, reserve_a, reserve_b, lp_supply, fees
            )
        case _:
            assert_never(curve)


def compute_withdraw_one(
    curve: CurveType,
    pool_token_amount: int,
    lp_supply: int,
    reserve_a: int,
    reserve_b: int,
    fees: PoolFees,
    direction: TradeDirection,
) -> int:
    """Single-sided withdraw amount (B for ``A_TO_B``, A for ``B_TO_A``)."""
    match curve:
        case ConstantProduct():
            return constant_product.compute_withdraw_one(
                pool_token_amount, lp_supply, reserve_a, reserve_b, fees, direction
            )
        case StableSwap():
            return stable_swap.compute_withdraw_one(
                curve, pool_token_amount, lp_supply, reserve_a, reserve_b, fees, direction
            )
        case _:
            assert_never(curve)


def supports_imbalanced_liquidity(curve: CurveType) -> bool:
    """Whether the curve prices imbalanced deposits and single-sided withdraws."""
    match curve:
        case ConstantProduct():
            return False
        case StableSwap():
            return True
        case _:
            assert_never(curve)


__all__ = [
    # Curve variants
    "ConstantProduct",
    "StableSwap",
    "CurveType",
    "TokenMultiplier",
    "DepegConfig",
    "DepegSource",
    "TradeDirection",
    # Depeg oracles
    "DepegOracle",
    "ExchangeRateOracle",
    "SplStakeOracle",
    "resolve_depeg",
    # Curve operations
    "compute_out_amount",
    "compute_in_amount",
    "compute_d",
    "compute_imbalance_deposit",
    "compute_withdraw_one",
    "supports_imbalanced_liquidity",
]
