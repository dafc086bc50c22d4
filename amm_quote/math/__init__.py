"""Integer share accounting and slippage helpers.

All conversions use exact integer arithmetic with an explicit rounding
direction; nothing here goes through floating point.
"""

from amm_quote.math.shares import (
    Rounding,
    actual_deposit_amount,
    amount_from_share,
    share_from_amount,
    unmint_amount,
)
from amm_quote.math.slippage import max_amount_with_slippage, min_amount_with_slippage

__all__ = [
    "Rounding",
    "share_from_amount",
    "amount_from_share",
    "unmint_amount",
    "actual_deposit_amount",
    "min_amount_with_slippage",
    "max_amount_with_slippage",
]
