"""Fee computation for pool swaps and liquidity operations.

Usage:
    from amm_quote.fees import PoolFees, FeeSchedule, FeeSchedulePoint

    fees = PoolFees(trade_fee_numerator=25, trade_fee_denominator=10_000)
    fee = fees.trading_fee(1_000_000)  # 2500
"""

from amm_quote.fees.pool_fees import PoolFees
from amm_quote.fees.schedule import FeeCurveType, FeeSchedule, FeeSchedulePoint

__all__ = [
    "PoolFees",
    "FeeSchedule",
    "FeeSchedulePoint",
    "FeeCurveType",
]
