"""Pool snapshot: reserves, share supply, fees and curve at one point in time."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from amm_quote.curve.types import CurveType, TradeDirection
from amm_quote.errors import ConfigurationError, InvalidMint
from amm_quote.fees.pool_fees import PoolFees
from amm_quote.fees.schedule import FeeSchedule


class ActivationType(str, Enum):
    """Clock the pool's activation point and fee schedule are measured on."""

    SLOT = "slot"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable pool state read at a single point in time.

    Attributes:
        token_a_mint: Mint address of token A
        token_b_mint: Mint address of token B
        token_a_amount: Logical reserve of token A (value of the pool's vault A shares)
        token_b_amount: Logical reserve of token B
        lp_supply: Pool share supply
        fees: Trade and owner fee parameters
        curve: Pricing curve
        current_time: Unix timestamp of the snapshot
        fee_schedule: Optional time-activated trade fee, offset from activation_point
        enabled: Disabled pools refuse swaps
        activation_type: Whether activation is measured in slots or seconds
        activation_point: First slot/timestamp at which swaps are accepted
        current_slot: Slot of the snapshot
    """

    token_a_mint: str
    token_b_mint: str
    token_a_amount: int
    token_b_amount: int
    lp_supply: int
    fees: PoolFees
    curve: CurveType
    current_time: int
    fee_schedule: FeeSchedule | None = None
    enabled: bool = True
    activation_type: ActivationType = ActivationType.TIMESTAMP
    activation_point: int = 0
    current_slot: int = 0

    def __post_init__(self) -> None:
        if self.token_a_mint == self.token_b_mint:
            raise ValueError(f"Pool mints must differ, both are {self.token_a_mint}")
        for name in (
            "token_a_amount",
            "token_b_amount",
            "lp_supply",
            "current_time",
            "activation_point",
            "current_slot",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.fee_schedule is not None and self.fees.trade_fee_denominator == 0:
            raise ConfigurationError("A fee schedule needs a non-zero trade fee denominator")

    @property
    def current_point(self) -> int:
        """Current slot or timestamp, depending on the activation type."""
        if self.activation_type is ActivationType.SLOT:
            return self.current_slot
        return self.current_time

    @property
    def is_activated(self) -> bool:
        return self.current_point >= self.activation_point

    def has_mint(self, mint: str) -> bool:
        return mint in (self.token_a_mint, self.token_b_mint)

    def direction_for(self, in_token_mint: str) -> TradeDirection:
        """Trade direction of a swap paying in ``in_token_mint``.

        Raises:
            InvalidMint: If the mint is not one of the pool's two mints
        """
        if in_token_mint == self.token_a_mint:
            return TradeDirection.A_TO_B
        if in_token_mint == self.token_b_mint:
            return TradeDirection.B_TO_A
        raise InvalidMint(f"Mint {in_token_mint} is not part of this pool")

    def other_mint(self, mint: str) -> str:
        """The pool's other mint.

        Raises:
            InvalidMint: If the mint is not one of the pool's two mints
        """
        if self.direction_for(mint) is TradeDirection.A_TO_B:
            return self.token_b_mint
        return self.token_a_mint

    def token_amount(self, mint: str) -> int:
        """Logical reserve held for ``mint``."""
        if self.direction_for(mint) is TradeDirection.A_TO_B:
            return self.token_a_amount
        return self.token_b_amount

    def latest_pool_fees(self) -> PoolFees:
        """Fees in force at the current point, with the fee schedule applied."""
        if self.fee_schedule is None:
            return self.fees
        return self.fees.with_trade_fee_bps(
            self.fee_schedule.effective_fee_bps(self.activation_point, self.current_point)
        )
