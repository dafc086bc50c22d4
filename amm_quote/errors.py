"""Quote engine error classes.

Every failure is reported synchronously to the caller as a typed error.
Nothing is retried or downgraded to a default value: re-fetching a fresher
snapshot is the caller's decision.
"""


class QuoteError(Exception):
    """Base error for quote computations."""

    pass


class InvalidMint(QuoteError):
    """Requested mint is not one of the pool's two mints."""

    pass


class EmptyPool(QuoteError):
    """A divisor reserve or supply is zero."""

    pass


class ImbalancedDepositUnsupported(QuoteError):
    """Non-proportional deposit on a constant product pool."""

    pass


class InsufficientReserve(QuoteError):
    """Requested output exceeds available liquidity."""

    pass


class AmountOverflow(QuoteError):
    """A quoted amount does not fit the program's u64 amount type."""

    pass


class InvariantDidNotConverge(QuoteError):
    """Newton-Raphson iteration exceeded its iteration budget."""

    pass


class MissingDepegAccount(QuoteError):
    """Depeg oracle state required by the curve is absent."""

    pass


class CapabilityUnsupported(QuoteError):
    """Operation is not available for this curve type."""

    pass


class UndefinedAPY(QuoteError):
    """Not enough virtual price history, or non-positive elapsed time."""

    pass


class ConfigurationError(QuoteError):
    """Invalid caller-supplied parameters (slippage, fee schedule, deposit mode)."""

    pass


class PoolDisabled(QuoteError):
    """Pool is disabled and refuses swaps."""

    pass


class SwapNotActivated(QuoteError):
    """Current point is before the pool's activation point."""

    pass
