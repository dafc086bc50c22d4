"""Tests for StableSwap precision and depeg scaling."""

import pytest

from amm_quote.curve import stable_swap
from amm_quote.curve.types import DepegConfig, DepegSource, StableSwap, TokenMultiplier, TradeDirection
from amm_quote.errors import MissingDepegAccount
from amm_quote.fees import PoolFees

FEES = PoolFees(trade_fee_numerator=25, trade_fee_denominator=10_000)


class TestStableSwapType:
    def test_amp_must_be_positive(self):
        with pytest.raises(ValueError):
            StableSwap(amp=0)

    def test_multiplier_must_be_positive(self):
        with pytest.raises(ValueError):
            TokenMultiplier(token_a_multiplier=0)

    def test_with_base_virtual_price_keeps_source(self):
        curve = StableSwap(amp=100, depeg=DepegConfig(source=DepegSource.ORACLE_B))
        resolved = curve.with_base_virtual_price(1_050_000)
        assert resolved.depeg.source is DepegSource.ORACLE_B
        assert resolved.depeg.base_virtual_price == 1_050_000
        assert curve.depeg.base_virtual_price is None


class TestTokenMultiplier:
    """A has 6 decimals, B has 9: A amounts are multiplied by 1000."""

    CURVE = StableSwap(amp=100, token_multiplier=TokenMultiplier(1_000, 1, 9))
    RESERVE_A = 1_000_000_000
    RESERVE_B = 1_000_000_000_000

    def test_invariant_in_common_precision(self):
        assert stable_swap.compute_d(self.CURVE, self.RESERVE_A, self.RESERVE_B) == 2 * self.RESERVE_B

    def test_one_token_swaps_for_about_one_token(self):
        out = stable_swap.compute_out_amount(
            self.CURVE, 1_000_000, self.RESERVE_A, self.RESERVE_B, TradeDirection.A_TO_B
        )
        assert 999_000_000 < out < 1_000_000_000

    def test_reverse_direction_downscales_output(self):
        out = stable_swap.compute_out_amount(
            self.CURVE, 1_000_000_000, self.RESERVE_B, self.RESERVE_A, TradeDirection.B_TO_A
        )
        assert 999_000 < out < 1_000_000

    def test_withdraw_one_side_uses_matching_precision(self):
        lp_supply = 2 * self.RESERVE_B
        amount_b = stable_swap.compute_withdraw_one(
            self.CURVE, 2_000_000_000, lp_supply, self.RESERVE_A, self.RESERVE_B, FEES, TradeDirection.A_TO_B
        )
        amount_a = stable_swap.compute_withdraw_one(
            self.CURVE, 2_000_000_000, lp_supply, self.RESERVE_A, self.RESERVE_B, FEES, TradeDirection.B_TO_A
        )
        assert 1_990_000_000 < amount_b < 2_000_000_000
        assert 1_990_000 < amount_a < 2_000_000


class TestDepeg:
    """B is a staked wrapper worth 1.1 A."""

    CURVE = StableSwap(
        amp=100,
        depeg=DepegConfig(source=DepegSource.ORACLE_B, base_virtual_price=1_100_000),
    )
    RESERVE_A = 1_100_000_000
    RESERVE_B = 1_000_000_000

    def test_invariant_in_peg_units(self):
        assert stable_swap.compute_d(self.CURVE, self.RESERVE_A, self.RESERVE_B) == 2_200_000_000

    def test_wrapper_swaps_at_exchange_rate(self):
        out = stable_swap.compute_out_amount(
            self.CURVE, 1_000_000, self.RESERVE_B, self.RESERVE_A, TradeDirection.B_TO_A
        )
        assert 1_098_000 < out < 1_100_000

    def test_unresolved_base_price_raises(self):
        curve = StableSwap(amp=100, depeg=DepegConfig(source=DepegSource.ORACLE_B))
        with pytest.raises(MissingDepegAccount):
            stable_swap.compute_out_amount(curve, 1_000, self.RESERVE_B, self.RESERVE_A, TradeDirection.B_TO_A)

    def test_no_depeg_uses_unit_factors(self):
        curve = StableSwap(amp=100)
        assert stable_swap.upscale_a(curve, 123) == 123
        assert stable_swap.downscale_b(curve, 123) == 123
