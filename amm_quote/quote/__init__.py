"""Swap, deposit and withdraw quotes.

Usage:
    from amm_quote.quote import PoolQuoteState, QuoteEngine

    engine = QuoteEngine(PoolQuoteState(pool=pool, vault_a=vault_a, vault_b=vault_b))
    quote = engine.get_swap_quote(pool.token_a_mint, 1_000_000, slippage_bps=100)
"""

from amm_quote.quote.engine import QuoteEngine
from amm_quote.quote.state import PoolQuoteState
from amm_quote.quote.types import DepositQuote, PoolInformation, SwapQuote, WithdrawQuote

__all__ = [
    "QuoteEngine",
    "PoolQuoteState",
    "SwapQuote",
    "DepositQuote",
    "WithdrawQuote",
    "PoolInformation",
]
