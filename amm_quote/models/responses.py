"""Pydantic models for quote responses.

Amounts are serialized as decimal strings so that u64 values survive JSON
consumers limited to 53-bit integers.
"""

from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

from amm_quote.curve.types import TradeDirection
from amm_quote.quote.types import DepositQuote, PoolInformation, SwapQuote, WithdrawQuote

# Integer amount, serialized as a decimal string
Amount = Annotated[int, PlainSerializer(str, return_type=str)]


class SwapQuoteResponse(BaseModel):
    amount_in: Amount = Field(alias="amountIn")
    amount_out: Amount = Field(alias="amountOut")
    min_amount_out: Amount = Field(alias="minAmountOut")
    trade_fee: Amount = Field(alias="tradeFee")
    owner_fee: Amount = Field(alias="ownerFee")
    trade_direction: TradeDirection = Field(alias="tradeDirection")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: SwapQuote) -> "SwapQuoteResponse":
        return cls(
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            min_amount_out=quote.min_amount_out,
            trade_fee=quote.trade_fee,
            owner_fee=quote.owner_fee,
            trade_direction=quote.trade_direction,
        )


class MaxSwapResponse(BaseModel):
    """Estimated capacity for swaps paying in the requested mint."""

    max_in_amount: Amount = Field(alias="maxInAmount")
    max_out_amount: Amount = Field(alias="maxOutAmount")

    model_config = {"populate_by_name": True}


class DepositQuoteResponse(BaseModel):
    pool_token_amount_out: Amount = Field(alias="poolTokenAmountOut")
    min_pool_token_amount_out: Amount = Field(alias="minPoolTokenAmountOut")
    token_a_in_amount: Amount = Field(alias="tokenAInAmount")
    token_b_in_amount: Amount = Field(alias="tokenBInAmount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: DepositQuote) -> "DepositQuoteResponse":
        return cls(
            pool_token_amount_out=quote.pool_token_amount_out,
            min_pool_token_amount_out=quote.min_pool_token_amount_out,
            token_a_in_amount=quote.token_a_in_amount,
            token_b_in_amount=quote.token_b_in_amount,
        )


class WithdrawQuoteResponse(BaseModel):
    pool_token_amount_in: Amount = Field(alias="poolTokenAmountIn")
    token_a_out_amount: Amount = Field(alias="tokenAOutAmount")
    token_b_out_amount: Amount = Field(alias="tokenBOutAmount")
    min_token_a_out_amount: Amount = Field(alias="minTokenAOutAmount")
    min_token_b_out_amount: Amount = Field(alias="minTokenBOutAmount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: WithdrawQuote) -> "WithdrawQuoteResponse":
        return cls(
            pool_token_amount_in=quote.pool_token_amount_in,
            token_a_out_amount=quote.token_a_out_amount,
            token_b_out_amount=quote.token_b_out_amount,
            min_token_a_out_amount=quote.min_token_a_out_amount,
            min_token_b_out_amount=quote.min_token_b_out_amount,
        )


class PoolInfoResponse(BaseModel):
    """Pool read-out. ``apy`` is null when the price history cannot define it."""

    token_a_amount: Amount = Field(alias="tokenAAmount")
    token_b_amount: Amount = Field(alias="tokenBAmount")
    virtual_price: Amount = Field(alias="virtualPrice")
    apy: float | None = None
    first_virtual_price: Amount | None = Field(default=None, alias="firstVirtualPrice")
    first_timestamp: int | None = Field(default=None, alias="firstTimestamp")
    current_timestamp: int = Field(alias="currentTimestamp")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_info(cls, info: PoolInformation) -> "PoolInfoResponse":
        return cls(
            token_a_amount=info.token_a_amount,
            token_b_amount=info.token_b_amount,
            virtual_price=info.virtual_price,
            apy=info.apy,
            first_virtual_price=info.first_virtual_price,
            first_timestamp=info.first_timestamp,
            current_timestamp=info.current_timestamp,
        )


class ErrorResponse(BaseModel):
    """Typed quote failure: ``error`` is the error class name."""

    error: str
    detail: str
