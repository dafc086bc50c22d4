"""Slippage tolerance helpers (basis points)."""

from amm_quote.constants import BPS_DENOMINATOR
from amm_quote.errors import ConfigurationError


def validate_slippage_bps(slippage_bps: int) -> int:
    """Return slippage_bps if it is within [0, 10000].

    Raises:
        ConfigurationError: If slippage is out of range
    """
    if isinstance(slippage_bps, bool) or not isinstance(slippage_bps, int):
        raise ConfigurationError(f"Slippage must be an integer bps value, got {slippage_bps!r}")
    if not 0 <= slippage_bps <= BPS_DENOMINATOR:
        raise ConfigurationError(
            f"Slippage must be within [0, {BPS_DENOMINATOR}] bps, got {slippage_bps}"
        )
    return slippage_bps


def min_amount_with_slippage(amount: int, slippage_bps: int) -> int:
    """Minimum acceptable amount: ``amount - amount * bps // 10000``."""
    validate_slippage_bps(slippage_bps)
    return amount - amount * slippage_bps // BPS_DENOMINATOR


def max_amount_with_slippage(amount: int, slippage_bps: int) -> int:
    """Maximum amount to ask for: ``amount + amount * bps // 10000``."""
    validate_slippage_bps(slippage_bps)
    return amount + amount * slippage_bps // BPS_DENOMINATOR
