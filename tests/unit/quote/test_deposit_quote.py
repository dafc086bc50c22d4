"""Tests for deposit quotes."""

import pytest

from amm_quote.curve import StableSwap
from amm_quote.errors import AmountOverflow, ConfigurationError, EmptyPool, ImbalancedDepositUnsupported
from amm_quote.safe_int import U64_MAX
from tests.helpers import make_engine, make_pool, make_state, make_vault


class TestConstantProductDeposit:
    """Balanced deposits into the 10_000_000 A / 1_000_000_000 B pool (lp supply 10_000_000)."""

    def test_given_token_a(self, cp_engine):
        quote = cp_engine.get_deposit_quote(1_000_000, 0, balanced=True, slippage_bps=100)

        assert quote.pool_token_amount_out == 1_000_000
        assert quote.min_pool_token_amount_out == 990_000
        # Both sides are what the pool will ask for, padded by slippage
        assert quote.token_a_in_amount == 1_010_000
        assert quote.token_b_in_amount == 101_000_000

    def test_given_token_b(self, cp_engine):
        quote = cp_engine.get_deposit_quote(0, 100_000_000, balanced=True, slippage_bps=0)

        assert quote.pool_token_amount_out == 1_000_000
        assert quote.token_a_in_amount == 1_000_000
        assert quote.token_b_in_amount == 100_000_000

    def test_required_amounts_round_up(self):
        # Vault A pays 3 tokens per share: 3_333_334 shares worth 10_000_002 back the reserve
        vault_a = make_vault(30_000_000, lp_supply=10_000_000, pool_lp_amount=3_333_334)
        engine = make_engine(make_state(vault_a=vault_a))

        quote = engine.get_deposit_quote(0, 100_000_000, balanced=True, slippage_bps=0)

        # ceil(1_000_000 * 3_333_334 / 10_000_000) = 333_334 vault shares, 3 tokens each
        assert quote.pool_token_amount_out == 1_000_000
        assert quote.token_a_in_amount == 1_000_002

    def test_two_sides_rejected(self, cp_engine):
        with pytest.raises(ImbalancedDepositUnsupported):
            cp_engine.get_deposit_quote(1_000_000, 100_000_000, balanced=False)

    def test_single_side_imbalanced_rejected(self, cp_engine):
        with pytest.raises(ImbalancedDepositUnsupported):
            cp_engine.get_deposit_quote(1_000_000, 0, balanced=False)

    def test_empty_pool(self):
        pool = make_pool(token_a_amount=0, token_b_amount=0, lp_supply=0)
        engine = make_engine(make_state(pool))
        with pytest.raises(EmptyPool):
            engine.get_deposit_quote(1_000_000, 0, balanced=True)

    def test_negative_amount(self, cp_engine):
        with pytest.raises(ConfigurationError):
            cp_engine.get_deposit_quote(-1, 0, balanced=True)

    def test_amount_above_u64(self, cp_engine):
        with pytest.raises(ConfigurationError, match="u64"):
            cp_engine.get_deposit_quote(U64_MAX + 1, 0, balanced=True)


class TestStableDeposit:
    """Deposits into the balanced 1_000_000_000 / 1_000_000_000 stable pool."""

    def test_balanced_two_sided_deposit(self, stable_engine):
        quote = stable_engine.get_deposit_quote(1_000_000, 1_000_000, balanced=False, slippage_bps=100)

        assert quote.pool_token_amount_out == 2_000_000
        assert quote.min_pool_token_amount_out == 1_980_000
        assert quote.token_a_in_amount == 1_000_000
        assert quote.token_b_in_amount == 1_000_000

    def test_balanced_flag_derives_other_side(self, stable_engine):
        quote = stable_engine.get_deposit_quote(1_000_000, 0, balanced=True, slippage_bps=100)

        assert quote.pool_token_amount_out == 2_000_000
        # Given side is exact, derived side is padded
        assert quote.token_a_in_amount == 1_000_000
        assert quote.token_b_in_amount == 1_010_000

    def test_single_sided_deposit_costs_fee(self, stable_engine):
        quote = stable_engine.get_deposit_quote(2_000_000, 0, balanced=False)

        assert 0 < quote.pool_token_amount_out < 2_000_000
        assert quote.token_b_in_amount == 0

    def test_balanced_flag_with_two_sides(self, stable_engine):
        with pytest.raises(ConfigurationError):
            stable_engine.get_deposit_quote(1_000_000, 1_000_000, balanced=True)

    def test_zero_deposit(self, stable_engine):
        quote = stable_engine.get_deposit_quote(0, 0, balanced=False)
        assert quote.pool_token_amount_out == 0

    def test_shares_beyond_u64_rejected(self):
        """A tiny pool with a full share supply would mint more shares than a u64 holds."""
        pool = make_pool(token_a_amount=2, token_b_amount=2, lp_supply=U64_MAX, curve=StableSwap(amp=100))
        engine = make_engine(make_state(pool))

        with pytest.raises(AmountOverflow, match="pool_token_amount_out"):
            engine.get_deposit_quote(U64_MAX - 10, U64_MAX - 10, balanced=False)
