"""StableSwap curve operations in token units.

Wraps ``stable_math`` with the two scaling steps applied before any curve
math and undone after it:
- token multipliers bring both sides to a common precision
- when a depeg source is set, the oracle side is multiplied by the base
  virtual price and the other side by the depeg precision, so the curve
  works in units of the peg asset
"""

from __future__ import annotations

from amm_quote.constants import DEPEG_PRECISION
from amm_quote.curve import stable_math
from amm_quote.curve.types import DepegSource, StableSwap, TradeDirection
from amm_quote.errors import MissingDepegAccount
from amm_quote.fees.pool_fees import PoolFees


def _depeg_factor(curve: StableSwap, oracle_side: DepegSource) -> int:
    depeg = curve.depeg
    if not depeg.is_active:
        return 1
    if depeg.source is not oracle_side:
        return DEPEG_PRECISION
    if not depeg.base_virtual_price:
        raise MissingDepegAccount(
            f"Depeg source {depeg.source.value} requires a resolved base virtual price"
        )
    return depeg.base_virtual_price


def _factor_a(curve: StableSwap) -> int:
    return curve.token_multiplier.token_a_multiplier * _depeg_factor(curve, DepegSource.ORACLE_A)


def _factor_b(curve: StableSwap) -> int:
    return curve.token_multiplier.token_b_multiplier * _depeg_factor(curve, DepegSource.ORACLE_B)


def upscale_a(curve: StableSwap, amount: int) -> int:
    return amount * _factor_a(curve)


def upscale_b(curve: StableSwap, amount: int) -> int:
    return amount * _factor_b(curve)


def downscale_a(curve: StableSwap, amount: int) -> int:
    # Sequential floors, multiplier first, mirror the on-chain downscale
    return amount // curve.token_multiplier.token_a_multiplier // _depeg_factor(curve, DepegSource.ORACLE_A)


def downscale_b(curve: StableSwap, amount: int) -> int:
    return amount // curve.token_multiplier.token_b_multiplier // _depeg_factor(curve, DepegSource.ORACLE_B)


def _upscale_pair(curve: StableSwap, direction: TradeDirection, source: int, destination: int) -> tuple[int, int]:
    if direction is TradeDirection.A_TO_B:
        return upscale_a(curve, source), upscale_b(curve, destination)
    return upscale_b(curve, source), upscale_a(curve, destination)


def compute_out_amount(
    curve: StableSwap,
    source_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    direction: TradeDirection,
) -> int:
    """Destination amount for a fee-reduced source amount."""
    source_scale = upscale_a if direction is TradeDirection.A_TO_B else upscale_b
    downscale_destination = downscale_b if direction is TradeDirection.A_TO_B else downscale_a
    upscaled_source, upscaled_destination = _upscale_pair(
        curve, direction, swap_source_amount, swap_destination_amount
    )
    out_amount = stable_math.swap_to(
        curve.amp, source_scale(curve, source_amount), upscaled_source, upscaled_destination
    )
    return downscale_destination(curve, out_amount)


def compute_in_amount(
    curve: StableSwap,
    destination_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    direction: TradeDirection,
) -> int:
    """Source amount needed for ``destination_amount`` (capacity estimate only)."""
    destination_scale = upscale_b if direction is TradeDirection.A_TO_B else upscale_a
    downscale_source = downscale_a if direction is TradeDirection.A_TO_B else downscale_b
    upscaled_source, upscaled_destination = _upscale_pair(
        curve, direction, swap_source_amount, swap_destination_amount
    )
    in_amount = stable_math.swap_from(
        curve.amp, destination_scale(curve, destination_amount), upscaled_source, upscaled_destination
    )
    return downscale_source(curve, in_amount)


def compute_d(curve: StableSwap, reserve_a: int, reserve_b: int) -> int:
    """Invariant in common precision, expressed in peg units when depegged."""
    d = stable_math.compute_d(curve.amp, upscale_a(curve, reserve_a), upscale_b(curve, reserve_b))
    if curve.depeg.is_active:
        return d // DEPEG_PRECISION
    return d


def compute_imbalance_deposit(
    curve: StableSwap,
    deposit_a: int,
    deposit_b: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
    fees: PoolFees,
) -> int:
    """Pool shares minted for a deposit of any ratio."""
    return stable_math.compute_mint_amount_for_deposit(
        curve.amp,
        upscale_a(curve, deposit_a),
        upscale_b(curve, deposit_b),
        upscale_a(curve, reserve_a),
        upscale_b(curve, reserve_b),
        lp_supply,
        fees,
    )


def compute_withdraw_one(
    curve: StableSwap,
    pool_token_amount: int,
    lp_supply: int,
    reserve_a: int,
    reserve_b: int,
    fees: PoolFees,
    direction: TradeDirection,
) -> int:
    """Single-sided withdraw amount.

    ``A_TO_B`` withdraws token B; ``B_TO_A`` withdraws token A.
    """
    upscaled_a = upscale_a(curve, reserve_a)
    upscaled_b = upscale_b(curve, reserve_b)
    if direction is TradeDirection.A_TO_B:
        amount, _fee = stable_math.compute_withdraw_one(
            curve.amp, pool_token_amount, lp_supply, upscaled_b, upscaled_a, fees
        )
        return downscale_b(curve, amount)
    amount, _fee = stable_math.compute_withdraw_one(
        curve.amp, pool_token_amount, lp_supply, upscaled_a, upscaled_b, fees
    )
    return downscale_a(curve, amount)
