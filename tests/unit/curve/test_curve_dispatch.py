"""Tests for curve dispatch over the CurveType union."""

import pytest

from amm_quote import curve as curves
from amm_quote.curve import ConstantProduct, StableSwap, TradeDirection, constant_product, stable_swap
from amm_quote.errors import CapabilityUnsupported
from amm_quote.fees import PoolFees

FEES = PoolFees(trade_fee_numerator=25, trade_fee_denominator=10_000)


class TestDispatch:
    def test_constant_product_out_amount(self):
        assert curves.compute_out_amount(
            ConstantProduct(), 997_500, 10_000_000, 1_000_000_000, TradeDirection.A_TO_B
        ) == constant_product.compute_out_amount(997_500, 10_000_000, 1_000_000_000)

    def test_stable_out_amount(self):
        curve = StableSwap(amp=100)
        assert curves.compute_out_amount(
            curve, 1_000, 1_000_000, 1_000_000, TradeDirection.B_TO_A
        ) == stable_swap.compute_out_amount(curve, 1_000, 1_000_000, 1_000_000, TradeDirection.B_TO_A)

    def test_compute_d_per_curve(self):
        assert curves.compute_d(ConstantProduct(), 1_000, 1_000) == 1_000_000
        assert curves.compute_d(StableSwap(amp=100), 1_000, 1_000) == 2_000

    def test_constant_product_withdraw_one_unsupported(self):
        with pytest.raises(CapabilityUnsupported):
            curves.compute_withdraw_one(ConstantProduct(), 1, 10, 10, 10, FEES, TradeDirection.A_TO_B)

    @pytest.mark.parametrize("curve,expected", [(ConstantProduct(), False), (StableSwap(amp=1), True)])
    def test_supports_imbalanced_liquidity(self, curve, expected):
        assert curves.supports_imbalanced_liquidity(curve) is expected
