"""Pydantic models for quote requests."""

from pydantic import BaseModel, Field

from amm_quote.models.snapshot import PoolQuoteStateModel
from amm_quote.models.types import U64, Pubkey, SlippageBps


class SwapQuoteRequest(BaseModel):
    """Quote swapping ``inAmount`` of ``inTokenMint``."""

    state: PoolQuoteStateModel
    in_token_mint: Pubkey = Field(alias="inTokenMint")
    in_amount: U64 = Field(alias="inAmount")
    slippage_bps: SlippageBps | None = Field(default=None, alias="slippageBps")

    model_config = {"populate_by_name": True}


class MaxSwapRequest(BaseModel):
    """Capacity of the pool for swaps paying in ``inTokenMint``."""

    state: PoolQuoteStateModel
    in_token_mint: Pubkey = Field(alias="inTokenMint")

    model_config = {"populate_by_name": True}


class DepositQuoteRequest(BaseModel):
    """Quote a deposit. Set ``balanced`` with one side zero for a balanced deposit."""

    state: PoolQuoteStateModel
    token_a_in_amount: U64 = Field(default=0, alias="tokenAInAmount")
    token_b_in_amount: U64 = Field(default=0, alias="tokenBInAmount")
    balanced: bool = True
    slippage_bps: SlippageBps | None = Field(default=None, alias="slippageBps")

    model_config = {"populate_by_name": True}


class WithdrawQuoteRequest(BaseModel):
    """Quote a withdraw. Omit ``tokenMint`` for a balanced withdraw."""

    state: PoolQuoteStateModel
    pool_token_amount: U64 = Field(alias="poolTokenAmount")
    token_mint: Pubkey | None = Field(default=None, alias="tokenMint")
    slippage_bps: SlippageBps | None = Field(default=None, alias="slippageBps")

    model_config = {"populate_by_name": True}


class PoolInfoRequest(BaseModel):
    state: PoolQuoteStateModel
