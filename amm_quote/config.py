"""Quote engine configuration."""

from __future__ import annotations

from dataclasses import dataclass

from amm_quote.constants import DEFAULT_SNAPSHOT_CAPACITY, SECONDS_PER_YEAR
from amm_quote.errors import ConfigurationError
from amm_quote.math.slippage import validate_slippage_bps


@dataclass(frozen=True)
class QuoteConfig:
    """Configuration for the quote engine.

    Attributes:
        default_slippage_bps: Slippage used when a caller does not pass one (1% default)
        snapshot_capacity: Size of the virtual price ring buffer
        seconds_per_year: Annualization period for the APY estimate
    """

    default_slippage_bps: int = 100
    snapshot_capacity: int = DEFAULT_SNAPSHOT_CAPACITY
    seconds_per_year: int = SECONDS_PER_YEAR

    def __post_init__(self) -> None:
        validate_slippage_bps(self.default_slippage_bps)
        if self.snapshot_capacity < 1:
            raise ConfigurationError(
                f"snapshot_capacity must be >= 1, got {self.snapshot_capacity}"
            )
        if self.seconds_per_year < 1:
            raise ConfigurationError(f"seconds_per_year must be >= 1, got {self.seconds_per_year}")


DEFAULT_CONFIG = QuoteConfig()
