"""Yield-bearing vault snapshot.

Each side of the pool is held in a vault that issues its own shares. The pool
owns vault shares, and its logical reserve is the value of those shares
against the vault's withdrawable amount. Freshly reported strategy profit is
locked and released linearly over time, so the withdrawable amount grows
between reports without any state change.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from amm_quote.constants import LOCKED_PROFIT_DEGRADATION_DENOMINATOR
from amm_quote.math.shares import Rounding, amount_from_share


@dataclass(frozen=True)
class LockedProfitTracker:
    """Linear release schedule of the last reported profit.

    Attributes:
        last_updated_locked_profit: Profit locked at the last report
        last_report: Timestamp of the last report
        locked_profit_degradation: Release rate per second, against 10^12
    """

    last_updated_locked_profit: int = 0
    last_report: int = 0
    locked_profit_degradation: int = 0

    def __post_init__(self) -> None:
        for name in ("last_updated_locked_profit", "last_report", "locked_profit_degradation"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    def locked_profit(self, current_time: int) -> int:
        """Profit still locked at ``current_time``."""
        duration = max(current_time - self.last_report, 0)
        locked_fund_ratio = duration * self.locked_profit_degradation
        if locked_fund_ratio > LOCKED_PROFIT_DEGRADATION_DENOMINATOR:
            return 0
        return (
            self.last_updated_locked_profit
            * (LOCKED_PROFIT_DEGRADATION_DENOMINATOR - locked_fund_ratio)
            // LOCKED_PROFIT_DEGRADATION_DENOMINATOR
        )


@dataclass(frozen=True)
class VaultSnapshot:
    """State of one vault at a point in time.

    Attributes:
        total_amount: Tokens accounted by the vault (idle and in strategies)
        lp_supply: Vault share supply
        reserve_balance: Tokens physically held in the vault's token account
        pool_lp_amount: Vault shares held by the pool
        locked_profit_tracker: Locked profit release schedule
    """

    total_amount: int
    lp_supply: int
    reserve_balance: int
    pool_lp_amount: int
    locked_profit_tracker: LockedProfitTracker = field(default_factory=LockedProfitTracker)

    def __post_init__(self) -> None:
        for name in ("total_amount", "lp_supply", "reserve_balance", "pool_lp_amount"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.pool_lp_amount > self.lp_supply:
            raise ValueError("pool_lp_amount cannot exceed the vault lp_supply")

    def withdrawable_amount(self, current_time: int) -> int:
        """Tokens redeemable at ``current_time`` (total minus locked profit)."""
        locked = self.locked_profit_tracker.locked_profit(current_time)
        return max(self.total_amount - locked, 0)

    def pool_token_amount(self, current_time: int) -> int:
        """Pool's logical reserve backed by this vault (0 for a vault with no shares)."""
        if self.lp_supply == 0:
            return 0
        return amount_from_share(
            self.pool_lp_amount,
            self.withdrawable_amount(current_time),
            self.lp_supply,
            Rounding.DOWN,
        )


def compute_pool_token_amounts(
    vault_a: VaultSnapshot, vault_b: VaultSnapshot, current_time: int
) -> tuple[int, int]:
    """Logical token A and token B reserves of the pool from its vault holdings."""
    return vault_a.pool_token_amount(current_time), vault_b.pool_token_amount(current_time)
