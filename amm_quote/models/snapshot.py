"""Pydantic models for decoded pool, vault and oracle state.

Field names follow the remote program's account layout in camelCase. Every
model converts to its frozen domain counterpart with ``to_domain()``.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Field, Tag, model_validator

from amm_quote.apy import VirtualPrice, VirtualPriceSnapshot
from amm_quote.constants import DEFAULT_SNAPSHOT_CAPACITY
from amm_quote.curve.depeg import DepegOracle, ExchangeRateOracle, SplStakeOracle
from amm_quote.curve.types import (
    ConstantProduct,
    CurveType,
    DepegConfig,
    DepegSource,
    StableSwap,
    TokenMultiplier,
)
from amm_quote.errors import ConfigurationError
from amm_quote.fees.pool_fees import PoolFees
from amm_quote.fees.schedule import FeeCurveType, FeeSchedule, FeeSchedulePoint
from amm_quote.models.types import U64, U128, Pubkey
from amm_quote.pool import ActivationType, PoolSnapshot
from amm_quote.quote.state import PoolQuoteState
from amm_quote.vault import LockedProfitTracker, VaultSnapshot


class PoolFeesModel(BaseModel):
    """Trade and owner fee pairs."""

    trade_fee_numerator: U64 = Field(alias="tradeFeeNumerator")
    trade_fee_denominator: U64 = Field(alias="tradeFeeDenominator")
    owner_trade_fee_numerator: U64 = Field(default=0, alias="ownerTradeFeeNumerator")
    owner_trade_fee_denominator: U64 = Field(default=0, alias="ownerTradeFeeDenominator")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_fee_pairs(self) -> "PoolFeesModel":
        if self.trade_fee_numerator > self.trade_fee_denominator:
            raise ValueError("tradeFeeNumerator exceeds tradeFeeDenominator")
        if self.owner_trade_fee_numerator > self.owner_trade_fee_denominator:
            raise ValueError("ownerTradeFeeNumerator exceeds ownerTradeFeeDenominator")
        return self

    def to_domain(self) -> PoolFees:
        return PoolFees(
            trade_fee_numerator=self.trade_fee_numerator,
            trade_fee_denominator=self.trade_fee_denominator,
            owner_trade_fee_numerator=self.owner_trade_fee_numerator,
            owner_trade_fee_denominator=self.owner_trade_fee_denominator,
        )


class FeeSchedulePointModel(BaseModel):
    fee_bps: int = Field(alias="feeBps", ge=0, le=10_000)
    activation_offset: U64 = Field(alias="activationOffset")

    model_config = {"populate_by_name": True}


class FeeScheduleModel(BaseModel):
    """Time-activated trade fee. Points must already be in activation order.

    Offsets count from the pool's ``activationPoint``; the schedule carries no
    anchor of its own, so one sent here is rejected.
    """

    points: list[FeeSchedulePointModel] = Field(min_length=1)
    curve_type: FeeCurveType = Field(default=FeeCurveType.FLAT, alias="curveType")

    model_config = {"extra": "forbid", "populate_by_name": True}

    @model_validator(mode="after")
    def check_schedule(self) -> "FeeScheduleModel":
        try:
            self.to_domain()
        except ConfigurationError as e:
            raise ValueError(str(e)) from e
        return self

    def to_domain(self) -> FeeSchedule:
        return FeeSchedule(
            points=tuple(
                FeeSchedulePoint(fee_bps=p.fee_bps, activation_offset=p.activation_offset)
                for p in self.points
            ),
            curve_type=self.curve_type,
        )


class TokenMultiplierModel(BaseModel):
    token_a_multiplier: U64 = Field(default=1, alias="tokenAMultiplier", gt=0)
    token_b_multiplier: U64 = Field(default=1, alias="tokenBMultiplier", gt=0)
    precision_factor: int = Field(default=0, alias="precisionFactor", ge=0, le=255)

    model_config = {"populate_by_name": True}

    def to_domain(self) -> TokenMultiplier:
        return TokenMultiplier(
            token_a_multiplier=self.token_a_multiplier,
            token_b_multiplier=self.token_b_multiplier,
            precision_factor=self.precision_factor,
        )


class DepegModel(BaseModel):
    """Depeg selector. The base virtual price is read from the oracle, not sent."""

    depeg_type: DepegSource = Field(default=DepegSource.NONE, alias="depegType")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> DepegConfig:
        return DepegConfig(source=self.depeg_type)


class ConstantProductCurveModel(BaseModel):
    type: Literal["constantProduct"] = "constantProduct"

    def to_domain(self) -> ConstantProduct:
        return ConstantProduct()


class StableCurveModel(BaseModel):
    type: Literal["stable"] = "stable"
    amp: U64 = Field(ge=1, description="Amplification coefficient")
    token_multiplier: TokenMultiplierModel = Field(
        default_factory=TokenMultiplierModel, alias="tokenMultiplier"
    )
    depeg: DepegModel = Field(default_factory=DepegModel)

    model_config = {"populate_by_name": True}

    def to_domain(self) -> StableSwap:
        return StableSwap(
            amp=self.amp,
            token_multiplier=self.token_multiplier.to_domain(),
            depeg=self.depeg.to_domain(),
        )


def _get_tag(v: Any, default: str) -> str:
    if isinstance(v, dict):
        return str(v.get("type", default))
    return str(v.type)


CurveModel = Annotated[
    Annotated[ConstantProductCurveModel, Tag("constantProduct")]
    | Annotated[StableCurveModel, Tag("stable")],
    Discriminator(lambda v: _get_tag(v, "constantProduct")),
]


class PoolSnapshotModel(BaseModel):
    """Decoded pool account plus the clock it was read at."""

    token_a_mint: Pubkey = Field(alias="tokenAMint")
    token_b_mint: Pubkey = Field(alias="tokenBMint")
    token_a_amount: U64 = Field(alias="tokenAAmount")
    token_b_amount: U64 = Field(alias="tokenBAmount")
    lp_supply: U64 = Field(alias="lpSupply")
    fees: PoolFeesModel
    curve: CurveModel = Field(alias="curveType")
    current_time: U64 = Field(alias="currentTime")
    fee_schedule: FeeScheduleModel | None = Field(default=None, alias="feeSchedule")
    enabled: bool = True
    activation_type: ActivationType = Field(default=ActivationType.TIMESTAMP, alias="activationType")
    activation_point: U64 = Field(default=0, alias="activationPoint")
    current_slot: U64 = Field(default=0, alias="currentSlot")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_pool(self) -> "PoolSnapshotModel":
        if self.token_a_mint == self.token_b_mint:
            raise ValueError("tokenAMint and tokenBMint must differ")
        if self.fee_schedule is not None and self.fees.trade_fee_denominator == 0:
            raise ValueError("feeSchedule needs a non-zero tradeFeeDenominator")
        return self

    def to_domain(self) -> PoolSnapshot:
        return PoolSnapshot(
            token_a_mint=self.token_a_mint,
            token_b_mint=self.token_b_mint,
            token_a_amount=self.token_a_amount,
            token_b_amount=self.token_b_amount,
            lp_supply=self.lp_supply,
            fees=self.fees.to_domain(),
            curve=self.curve.to_domain(),
            current_time=self.current_time,
            fee_schedule=self.fee_schedule.to_domain() if self.fee_schedule else None,
            enabled=self.enabled,
            activation_type=self.activation_type,
            activation_point=self.activation_point,
            current_slot=self.current_slot,
        )


class LockedProfitTrackerModel(BaseModel):
    last_updated_locked_profit: U64 = Field(default=0, alias="lastUpdatedLockedProfit")
    last_report: U64 = Field(default=0, alias="lastReport")
    locked_profit_degradation: U64 = Field(default=0, alias="lockedProfitDegradation")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> LockedProfitTracker:
        return LockedProfitTracker(
            last_updated_locked_profit=self.last_updated_locked_profit,
            last_report=self.last_report,
            locked_profit_degradation=self.locked_profit_degradation,
        )


class VaultSnapshotModel(BaseModel):
    """Decoded vault account with its lp mint supply and token account balance."""

    total_amount: U64 = Field(alias="totalAmount")
    lp_supply: U64 = Field(alias="lpSupply")
    reserve_balance: U64 = Field(alias="reserveBalance")
    pool_lp_amount: U64 = Field(alias="poolLpAmount")
    locked_profit_tracker: LockedProfitTrackerModel = Field(
        default_factory=LockedProfitTrackerModel, alias="lockedProfitTracker"
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_pool_lp(self) -> "VaultSnapshotModel":
        if self.pool_lp_amount > self.lp_supply:
            raise ValueError("poolLpAmount exceeds the vault lpSupply")
        return self

    def to_domain(self) -> VaultSnapshot:
        return VaultSnapshot(
            total_amount=self.total_amount,
            lp_supply=self.lp_supply,
            reserve_balance=self.reserve_balance,
            pool_lp_amount=self.pool_lp_amount,
            locked_profit_tracker=self.locked_profit_tracker.to_domain(),
        )


class VirtualPriceModel(BaseModel):
    price: U128 = 0
    timestamp: U64 = 0


class VirtualPriceSnapshotModel(BaseModel):
    """Virtual price ring buffer with its next write index."""

    virtual_prices: list[VirtualPriceModel] = Field(alias="virtualPrices", min_length=1)
    pointer: int = Field(default=0, ge=0)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_pointer(self) -> "VirtualPriceSnapshotModel":
        if self.pointer >= len(self.virtual_prices):
            raise ValueError(
                f"pointer {self.pointer} out of range for {len(self.virtual_prices)} slots"
            )
        return self

    def to_domain(self) -> VirtualPriceSnapshot:
        return VirtualPriceSnapshot(
            virtual_prices=tuple(
                VirtualPrice(price=v.price, timestamp=v.timestamp) for v in self.virtual_prices
            ),
            pointer=self.pointer,
        )


class ExchangeRateOracleModel(BaseModel):
    type: Literal["exchangeRate"] = "exchangeRate"
    virtual_price: U64 = Field(alias="virtualPrice", gt=0)

    model_config = {"populate_by_name": True}

    def to_domain(self) -> ExchangeRateOracle:
        return ExchangeRateOracle(virtual_price=self.virtual_price)


class SplStakeOracleModel(BaseModel):
    type: Literal["splStake"] = "splStake"
    total_lamports: U64 = Field(alias="totalLamports")
    pool_token_supply: U64 = Field(alias="poolTokenSupply")
    withdrawal_fee_numerator: U64 = Field(default=0, alias="withdrawalFeeNumerator")
    withdrawal_fee_denominator: U64 = Field(default=0, alias="withdrawalFeeDenominator")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> SplStakeOracle:
        return SplStakeOracle(
            total_lamports=self.total_lamports,
            pool_token_supply=self.pool_token_supply,
            withdrawal_fee_numerator=self.withdrawal_fee_numerator,
            withdrawal_fee_denominator=self.withdrawal_fee_denominator,
        )


DepegOracleModel = Annotated[
    Annotated[ExchangeRateOracleModel, Tag("exchangeRate")]
    | Annotated[SplStakeOracleModel, Tag("splStake")],
    Discriminator(lambda v: _get_tag(v, "exchangeRate")),
]


class PoolQuoteStateModel(BaseModel):
    """Everything a quote reads, as sent by the snapshot producer."""

    pool: PoolSnapshotModel
    vault_a: VaultSnapshotModel = Field(alias="vaultA")
    vault_b: VaultSnapshotModel = Field(alias="vaultB")
    apy_snapshot: VirtualPriceSnapshotModel | None = Field(default=None, alias="apySnapshot")
    depeg_oracle: DepegOracleModel | None = Field(default=None, alias="depegOracle")

    model_config = {"populate_by_name": True}

    @property
    def snapshot_capacity(self) -> int:
        if self.apy_snapshot is None:
            return DEFAULT_SNAPSHOT_CAPACITY
        return len(self.apy_snapshot.virtual_prices)

    def to_domain(self) -> PoolQuoteState:
        apy_snapshot = (
            self.apy_snapshot.to_domain()
            if self.apy_snapshot is not None
            else VirtualPriceSnapshot.empty(DEFAULT_SNAPSHOT_CAPACITY)
        )
        oracle: DepegOracle | None = (
            self.depeg_oracle.to_domain() if self.depeg_oracle is not None else None
        )
        return PoolQuoteState(
            pool=self.pool.to_domain(),
            vault_a=self.vault_a.to_domain(),
            vault_b=self.vault_b.to_domain(),
            apy_snapshot=apy_snapshot,
            depeg_oracle=oracle,
        )
