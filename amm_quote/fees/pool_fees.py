"""Pool trade and owner fee computation.

Both fees truncate toward zero: rounding never favours the trader.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from amm_quote.constants import BPS_DENOMINATOR, N_COINS
from amm_quote.errors import ConfigurationError
from amm_quote.safe_int import S


def _fee(amount: int, numerator: int, denominator: int) -> int:
    # 0/0 is how the remote program encodes "no fee"
    if numerator == 0:
        return 0
    return (S(amount) * numerator // denominator).value


@dataclass(frozen=True)
class PoolFees:
    """Fee parameters of a pool.

    Attributes:
        trade_fee_numerator: Trade fee numerator (kept by liquidity providers)
        trade_fee_denominator: Trade fee denominator
        owner_trade_fee_numerator: Owner (protocol) fee numerator
        owner_trade_fee_denominator: Owner (protocol) fee denominator
    """

    trade_fee_numerator: int
    trade_fee_denominator: int
    owner_trade_fee_numerator: int = 0
    owner_trade_fee_denominator: int = 0

    def __post_init__(self) -> None:
        pairs = (
            ("trade", self.trade_fee_numerator, self.trade_fee_denominator),
            ("owner_trade", self.owner_trade_fee_numerator, self.owner_trade_fee_denominator),
        )
        for name, numerator, denominator in pairs:
            if numerator < 0 or denominator < 0:
                raise ValueError(f"{name} fee must be non-negative")
            if numerator > denominator:
                raise ValueError(
                    f"{name} fee numerator {numerator} exceeds denominator {denominator}"
                )

    def trading_fee(self, amount: int) -> int:
        """floor(amount * trade_fee_numerator / trade_fee_denominator)."""
        return _fee(amount, self.trade_fee_numerator, self.trade_fee_denominator)

    def owner_trading_fee(self, amount: int) -> int:
        """floor(amount * owner_trade_fee_numerator / owner_trade_fee_denominator)."""
        return _fee(amount, self.owner_trade_fee_numerator, self.owner_trade_fee_denominator)

    def normalized_trade_fee(self, amount: int, n_coins: int = N_COINS) -> int:
        """Trade fee charged on the imbalanced part of a stable deposit/withdraw.

        The numerator is first adjusted by ``n / (4 * (n - 1))`` (one half for
        two assets) and truncated, then applied to ``amount``.
        """
        adjusted_numerator = self.trade_fee_numerator * n_coins // (4 * (n_coins - 1))
        return _fee(amount, adjusted_numerator, self.trade_fee_denominator)

    def with_trade_fee_bps(self, fee_bps: int) -> PoolFees:
        """Same fees with the trade fee rewritten as ``fee_bps`` basis points.

        Raises:
            ConfigurationError: If the trade fee denominator is zero
        """
        if self.trade_fee_denominator == 0:
            raise ConfigurationError(f"Cannot express {fee_bps} bps over a zero trade fee denominator")
        numerator = fee_bps * self.trade_fee_denominator // BPS_DENOMINATOR
        return replace(self, trade_fee_numerator=numerator)
