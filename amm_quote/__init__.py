"""AMM Quote - pricing and accounting engine for two-asset dynamic AMM pools."""

from amm_quote.config import QuoteConfig
from amm_quote.pool import ActivationType, PoolSnapshot
from amm_quote.quote import PoolQuoteState, QuoteEngine
from amm_quote.vault import LockedProfitTracker, VaultSnapshot

__version__ = "0.1.0"
__all__ = [
    "QuoteEngine",
    "QuoteConfig",
    "PoolQuoteState",
    "PoolSnapshot",
    "ActivationType",
    "VaultSnapshot",
    "LockedProfitTracker",
    "__version__",
]
