"""Tests for pool trade and owner fees."""

import pytest

from amm_quote.errors import ConfigurationError
from amm_quote.fees import PoolFees
from tests.helpers import make_fees


class TestPoolFees:
    def test_trading_fee(self):
        assert make_fees().trading_fee(1_000_000) == 2_500

    def test_trading_fee_truncates(self):
        # 399 * 25 / 10_000 = 0.9975
        assert make_fees().trading_fee(399) == 0

    def test_owner_trading_fee(self):
        fees = make_fees(owner_trade_fee_numerator=5, owner_trade_fee_denominator=10_000)
        assert fees.owner_trading_fee(1_000_000) == 500

    def test_zero_over_zero_is_no_fee(self):
        fees = make_fees()
        assert fees.owner_trade_fee_denominator == 0
        assert fees.owner_trading_fee(1_000_000) == 0

    def test_normalized_trade_fee_halves_numerator(self):
        """For two assets the numerator is scaled by 2 / 4 and truncated (25 -> 12)."""
        assert make_fees().normalized_trade_fee(1_000_000) == 1_200


class TestWithTradeFeeBps:
    def test_rewrites_numerator(self):
        fees = make_fees().with_trade_fee_bps(50)
        assert fees.trade_fee_numerator == 50
        assert fees.trade_fee_denominator == 10_000

    def test_scales_to_denominator(self):
        fees = make_fees(trade_fee_numerator=2_500, trade_fee_denominator=1_000_000).with_trade_fee_bps(50)
        assert fees.trade_fee_numerator == 5_000
        assert fees.trading_fee(1_000_000) == 5_000

    def test_keeps_owner_fee(self):
        fees = make_fees(owner_trade_fee_numerator=5, owner_trade_fee_denominator=10_000).with_trade_fee_bps(1)
        assert fees.owner_trade_fee_numerator == 5

    def test_zero_denominator_refused(self):
        with pytest.raises(ConfigurationError):
            make_fees(0, 0).with_trade_fee_bps(500)


class TestValidation:
    def test_numerator_above_denominator(self):
        with pytest.raises(ValueError, match="exceeds"):
            PoolFees(trade_fee_numerator=2, trade_fee_denominator=1)

    def test_negative_fee(self):
        with pytest.raises(ValueError, match="non-negative"):
            PoolFees(trade_fee_numerator=-1, trade_fee_denominator=10_000)
