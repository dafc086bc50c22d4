"""API endpoints for the quote service.

Each request carries its own decoded snapshot; nothing is cached between
requests. Quote failures propagate as ``QuoteError`` and are mapped to HTTP 400
by the handler in ``amm_quote.api.main``.
"""

from dataclasses import replace

import structlog
from fastapi import APIRouter, Depends

from amm_quote.config import DEFAULT_CONFIG, QuoteConfig
from amm_quote.models.requests import (
    DepositQuoteRequest,
    MaxSwapRequest,
    PoolInfoRequest,
    SwapQuoteRequest,
    WithdrawQuoteRequest,
)
from amm_quote.models.responses import (
    DepositQuoteResponse,
    MaxSwapResponse,
    PoolInfoResponse,
    SwapQuoteResponse,
    WithdrawQuoteResponse,
)
from amm_quote.models.snapshot import PoolQuoteStateModel
from amm_quote.quote.engine import QuoteEngine

logger = structlog.get_logger()

router = APIRouter()


def get_config() -> QuoteConfig:
    """Dependency provider for the engine configuration.

    Override this in tests to change defaults:
        app.dependency_overrides[get_config] = lambda: QuoteConfig(default_slippage_bps=50)
    """
    return DEFAULT_CONFIG


def _engine(state: PoolQuoteStateModel, config: QuoteConfig) -> QuoteEngine:
    # Buffer capacity follows whatever the snapshot producer sent
    config = replace(config, snapshot_capacity=state.snapshot_capacity)
    return QuoteEngine(state.to_domain(), config)


@router.post("/quote/swap")
async def swap_quote(
    request: SwapQuoteRequest, config: QuoteConfig = Depends(get_config)
) -> SwapQuoteResponse:
    """Quote a swap of ``inAmount`` of ``inTokenMint``."""
    logger.info(
        "received_swap_quote",
        in_token_mint=request.in_token_mint,
        in_amount=request.in_amount,
    )
    quote = _engine(request.state, config).get_swap_quote(
        request.in_token_mint, request.in_amount, request.slippage_bps
    )
    return SwapQuoteResponse.from_quote(quote)


@router.post("/quote/max-swap")
async def max_swap(
    request: MaxSwapRequest, config: QuoteConfig = Depends(get_config)
) -> MaxSwapResponse:
    """Estimated maximum input and output for swaps paying in ``inTokenMint``."""
    engine = _engine(request.state, config)
    pool = engine.state.pool
    return MaxSwapResponse(
        max_in_amount=engine.get_max_swap_in_amount(request.in_token_mint),
        max_out_amount=engine.get_max_swap_out_amount(pool.other_mint(request.in_token_mint)),
    )


@router.post("/quote/deposit")
async def deposit_quote(
    request: DepositQuoteRequest, config: QuoteConfig = Depends(get_config)
) -> DepositQuoteResponse:
    logger.info(
        "received_deposit_quote",
        token_a_in_amount=request.token_a_in_amount,
        token_b_in_amount=request.token_b_in_amount,
        balanced=request.balanced,
    )
    quote = _engine(request.state, config).get_deposit_quote(
        request.token_a_in_amount,
        request.token_b_in_amount,
        request.balanced,
        request.slippage_bps,
    )
    return DepositQuoteResponse.from_quote(quote)


@router.post("/quote/withdraw")
async def withdraw_quote(
    request: WithdrawQuoteRequest, config: QuoteConfig = Depends(get_config)
) -> WithdrawQuoteResponse:
    logger.info(
        "received_withdraw_quote",
        pool_token_amount=request.pool_token_amount,
        token_mint=request.token_mint,
    )
    quote = _engine(request.state, config).get_withdraw_quote(
        request.pool_token_amount, request.slippage_bps, request.token_mint
    )
    return WithdrawQuoteResponse.from_quote(quote)


@router.post("/pool/info")
async def pool_info(
    request: PoolInfoRequest, config: QuoteConfig = Depends(get_config)
) -> PoolInfoResponse:
    """Vault-backed reserves, virtual price and trailing APY."""
    info = _engine(request.state, config).get_pool_info()
    return PoolInfoResponse.from_info(info)
