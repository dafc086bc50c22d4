"""Conversion between liquidity shares and underlying amounts.

Rounding direction is part of the contract, not a detail. Shares minted to a
party and amounts paid out by the pool round down; amounts the pool asks a
party to supply round up. That way the pool is never shorted by rounding.
"""

from __future__ import annotations

from enum import Enum

from amm_quote.errors import EmptyPool
from amm_quote.safe_int import S


class Rounding(str, Enum):
    """Rounding direction for a ratio conversion."""

    DOWN = "down"
    UP = "up"


def _mul_div(value: int, numerator: int, denominator: int, rounding: Rounding) -> int:
    if denominator == 0:
        raise EmptyPool(f"Cannot convert {value} against an empty total")
    product = S(value) * numerator
    if rounding is Rounding.UP:
        return product.ceiling_div(denominator).value
    return (product // denominator).value


def share_from_amount(amount: int, total_amount: int, total_shares: int, rounding: Rounding) -> int:
    """Shares corresponding to ``amount`` of an underlying total.

    Computes ``amount * total_shares / total_amount``.

    Raises:
        EmptyPool: If total_amount is zero
    """
    return _mul_div(amount, total_shares, total_amount, rounding)


def amount_from_share(shares: int, total_amount: int, total_shares: int, rounding: Rounding) -> int:
    """Underlying amount corresponding to ``shares`` of a share supply.

    Computes ``shares * total_amount / total_shares``.

    Raises:
        EmptyPool: If total_shares is zero
    """
    return _mul_div(shares, total_amount, total_shares, rounding)


def unmint_amount(amount: int, withdrawable_amount: int, vault_lp_supply: int) -> int:
    """Vault shares that ``amount`` tokens are worth (rounded down)."""
    return share_from_amount(amount, withdrawable_amount, vault_lp_supply, Rounding.DOWN)


def actual_deposit_amount(
    deposit_amount: int,
    before_amount: int,
    pool_lp_amount: int,
    vault_lp_supply: int,
    withdrawable_amount: int,
) -> int:
    """Tokens actually credited to the pool when depositing through a vault.

    The deposit mints vault shares (rounded down), after which the pool's
    holding is re-read against the grown vault. The difference from the
    pool's previous amount is what the curve will see.

    Args:
        deposit_amount: Tokens sent to the vault
        before_amount: Pool's token amount prior to the deposit
        pool_lp_amount: Vault shares held by the pool
        vault_lp_supply: Vault share supply
        withdrawable_amount: Vault's withdrawable token amount

    Returns:
        The token amount the pool gains, never negative
    """
    if deposit_amount == 0:
        return 0
    minted = unmint_amount(deposit_amount, withdrawable_amount, vault_lp_supply)
    after_amount = amount_from_share(
        pool_lp_amount + minted,
        withdrawable_amount + deposit_amount,
        vault_lp_supply + minted,
        Rounding.DOWN,
    )
    return S(after_amount).saturating_sub(before_amount).value
