"""Quote result types.

All amounts are integers in the base units of the input reserves.
"""

from __future__ import annotations

from dataclasses import dataclass

from amm_quote.curve.types import TradeDirection


@dataclass(frozen=True)
class SwapQuote:
    """Result of a swap quote.

    Attributes:
        amount_in: Raw input amount, fees included
        amount_out: Destination amount the swap settles to
        min_amount_out: amount_out reduced by the slippage tolerance
        trade_fee: Trade fee charged on the input (kept by liquidity providers)
        owner_fee: Owner fee charged on the input
        trade_direction: Which reserve is the source
    """

    amount_in: int
    amount_out: int
    min_amount_out: int
    trade_fee: int
    owner_fee: int
    trade_direction: TradeDirection


@dataclass(frozen=True)
class DepositQuote:
    """Result of a deposit quote.

    ``token_a_in_amount`` and ``token_b_in_amount`` are the most the depositor
    should be asked to supply; ``min_pool_token_amount_out`` is the fewest
    shares they accept.
    """

    pool_token_amount_out: int
    min_pool_token_amount_out: int
    token_a_in_amount: int
    token_b_in_amount: int


@dataclass(frozen=True)
class WithdrawQuote:
    """Result of a withdraw quote."""

    pool_token_amount_in: int
    token_a_out_amount: int
    token_b_out_amount: int
    min_token_a_out_amount: int
    min_token_b_out_amount: int


@dataclass(frozen=True)
class PoolInformation:
    """Pool read-out: vault-backed reserves, virtual price and trailing APY.

    Attributes:
        token_a_amount: Token A backed by the pool's vault A shares
        token_b_amount: Token B backed by the pool's vault B shares
        virtual_price: Invariant per share, precision 10^8
        apy: Trailing annualized yield as a fraction, None when undefined
        first_virtual_price: Oldest recorded sample price, None if the buffer is empty
        first_timestamp: Timestamp of the oldest recorded sample
        current_timestamp: Snapshot time
    """

    token_a_amount: int
    token_b_amount: int
    virtual_price: int
    apy: float | None
    first_virtual_price: int | None
    first_timestamp: int | None
    current_timestamp: int
