"""Constant product curve: x * y = k.

Swap outputs truncate toward zero so the pool never over-pays, which keeps
``(x + dx) * (y - dy) >= x * y``. The pool only accepts proportional
deposits and has no single-sided withdraw.
"""

from amm_quote.curve.types import TradeDirection
from amm_quote.errors import (
    CapabilityUnsupported,
    EmptyPool,
    ImbalancedDepositUnsupported,
    InsufficientReserve,
)
from amm_quote.fees.pool_fees import PoolFees
from amm_quote.safe_int import S


def compute_d(reserve_a: int, reserve_b: int) -> int:
    """Invariant k = reserve_a * reserve_b."""
    return (S(reserve_a) * reserve_b).value


def compute_out_amount(source_amount: int, swap_source_amount: int, swap_destination_amount: int) -> int:
    """Destination amount for ``source_amount`` (fee already deducted).

    Formula: dy = y * dx / (x + dx), truncated.

    Raises:
        EmptyPool: If both the source reserve and the input are zero
    """
    new_source = S(swap_source_amount) + source_amount
    if new_source == 0:
        raise EmptyPool("Constant product swap against an empty source reserve")
    return (S(swap_destination_amount) * source_amount // new_source).value


def compute_in_amount(destination_amount: int, swap_source_amount: int, swap_destination_amount: int) -> int:
    """Source amount needed to take ``destination_amount`` out (before fees).

    Formula: dx = ceil(x * y / (y - dy)) - x.

    Raises:
        InsufficientReserve: If destination_amount would drain the reserve
    """
    if destination_amount >= swap_destination_amount:
        raise InsufficientReserve(
            f"Cannot take {destination_amount} out of a reserve of {swap_destination_amount}"
        )
    invariant = S(swap_source_amount) * swap_destination_amount
    new_destination = S(swap_destination_amount) - destination_amount
    new_source = invariant.ceiling_div(new_destination)
    return new_source.saturating_sub(swap_source_amount).value


def compute_imbalance_deposit(
    deposit_a: int,
    deposit_b: int,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
) -> int:
    """Shares minted for a deposit, which must match the pool ratio.

    Raises:
        ImbalancedDepositUnsupported: If the deposit is not proportional
        EmptyPool: If the pool holds no token A
    """
    if deposit_a == 0 and deposit_b == 0:
        return 0
    if deposit_a * reserve_b != deposit_b * reserve_a:
        raise ImbalancedDepositUnsupported(
            f"Constant product pools only accept proportional deposits "
            f"(got {deposit_a}:{deposit_b} against reserves {reserve_a}:{reserve_b})"
        )
    if reserve_a == 0:
        raise EmptyPool("Cannot price a deposit into an empty pool")
    return (S(deposit_a) * lp_supply // reserve_a).value


def compute_withdraw_one(
    pool_token_amount: int,
    lp_supply: int,
    reserve_a: int,
    reserve_b: int,
    fees: PoolFees,
    direction: TradeDirection,
) -> int:
    """Single-sided withdraw is not available on constant product pools."""
    raise CapabilityUnsupported("Constant product pools only support balanced withdraws")
