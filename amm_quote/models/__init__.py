"""Pydantic models for the quote service wire format."""

from amm_quote.models.requests import (
    DepositQuoteRequest,
    MaxSwapRequest,
    PoolInfoRequest,
    SwapQuoteRequest,
    WithdrawQuoteRequest,
)
from amm_quote.models.responses import (
    DepositQuoteResponse,
    ErrorResponse,
    MaxSwapResponse,
    PoolInfoResponse,
    SwapQuoteResponse,
    WithdrawQuoteResponse,
)
from amm_quote.models.snapshot import (
    PoolQuoteStateModel,
    PoolSnapshotModel,
    VaultSnapshotModel,
    VirtualPriceSnapshotModel,
)
from amm_quote.models.types import U64, U128, Pubkey

__all__ = [
    # Types
    "U64",
    "U128",
    "Pubkey",
    # Snapshot
    "PoolQuoteStateModel",
    "PoolSnapshotModel",
    "VaultSnapshotModel",
    "VirtualPriceSnapshotModel",
    # Requests
    "SwapQuoteRequest",
    "MaxSwapRequest",
    "DepositQuoteRequest",
    "WithdrawQuoteRequest",
    "PoolInfoRequest",
    # Responses
    "SwapQuoteResponse",
    "MaxSwapResponse",
    "DepositQuoteResponse",
    "WithdrawQuoteResponse",
    "PoolInfoResponse",
    "ErrorResponse",
]
