"""Tests for pool snapshots."""

import pytest

from amm_quote.curve import TradeDirection
from amm_quote.errors import ConfigurationError, InvalidMint
from amm_quote.fees import FeeSchedule, FeeSchedulePoint
from amm_quote.pool import ActivationType
from tests.helpers import UNKNOWN_MINT, USDC, USDT, make_fees, make_pool


class TestMints:
    def test_direction_for(self):
        pool = make_pool()
        assert pool.direction_for(USDC) is TradeDirection.A_TO_B
        assert pool.direction_for(USDT) is TradeDirection.B_TO_A

    def test_unknown_mint_raises(self):
        with pytest.raises(InvalidMint):
            make_pool().direction_for(UNKNOWN_MINT)

    def test_other_mint_and_amount(self):
        pool = make_pool()
        assert pool.other_mint(USDC) == USDT
        assert pool.other_mint(USDT) == USDC
        assert pool.token_amount(USDT) == 1_000_000_000
        assert pool.has_mint(USDC)
        assert not pool.has_mint(UNKNOWN_MINT)

    def test_identical_mints_rejected(self):
        with pytest.raises(ValueError, match="must differ"):
            make_pool(token_b_mint=USDC)

    def test_negative_reserve_rejected(self):
        with pytest.raises(ValueError):
            make_pool(token_a_amount=-1)


class TestActivation:
    def test_timestamp_activation(self):
        pool = make_pool(current_time=100, activation_point=101)
        assert not pool.is_activated
        assert make_pool(current_time=101, activation_point=101).is_activated

    def test_slot_activation_ignores_timestamp(self):
        pool = make_pool(
            current_time=10**9,
            activation_type=ActivationType.SLOT,
            activation_point=500,
            current_slot=499,
        )
        assert pool.current_point == 499
        assert not pool.is_activated


class TestLatestPoolFees:
    def test_without_schedule(self):
        pool = make_pool()
        assert pool.latest_pool_fees() is pool.fees

    def test_schedule_applies_at_current_point(self):
        schedule = FeeSchedule(points=(FeeSchedulePoint(500, 0), FeeSchedulePoint(25, 3_600)))
        launching = make_pool(current_time=1_000, activation_point=1_000, fee_schedule=schedule)
        settled = make_pool(current_time=4_600, activation_point=1_000, fee_schedule=schedule)
        assert launching.latest_pool_fees().trade_fee_numerator == 500
        assert settled.latest_pool_fees().trade_fee_numerator == 25
        assert launching.fees.trade_fee_numerator == 25

    def test_schedule_is_anchored_at_pool_activation(self):
        schedule = FeeSchedule(points=(FeeSchedulePoint(500, 0), FeeSchedulePoint(25, 3_600)))
        early = make_pool(current_time=4_000, activation_point=1_000, fee_schedule=schedule)
        late = make_pool(current_time=4_000, activation_point=0, fee_schedule=schedule)
        assert early.latest_pool_fees().trade_fee_numerator == 500
        assert late.latest_pool_fees().trade_fee_numerator == 25

    def test_schedule_over_no_fee_pair_rejected(self):
        """A 0/0 fee pair cannot carry a scheduled fee; quoting it as free is wrong."""
        schedule = FeeSchedule(points=(FeeSchedulePoint(500, 0),))
        with pytest.raises(ConfigurationError, match="non-zero trade fee denominator"):
            make_pool(fees=make_fees(0, 0), fee_schedule=schedule)

    def test_no_fee_pair_without_schedule_is_free(self):
        pool = make_pool(fees=make_fees(0, 0))
        assert pool.latest_pool_fees().trading_fee(1_000_000) == 0
