"""Tests for vault snapshots and locked profit release."""

import pytest

from amm_quote.vault import LockedProfitTracker, VaultSnapshot, compute_pool_token_amounts
from tests.helpers import make_vault

# 1% of the locked profit released per second
DEGRADATION = 10**10


class TestLockedProfitTracker:
    TRACKER = LockedProfitTracker(last_updated_locked_profit=1_000, last_report=100, locked_profit_degradation=DEGRADATION)

    @pytest.mark.parametrize(
        "current_time,expected",
        [(50, 1_000), (100, 1_000), (150, 500), (199, 10), (200, 0), (1_000, 0)],
    )
    def test_linear_release(self, current_time, expected):
        assert self.TRACKER.locked_profit(current_time) == expected

    def test_no_degradation_keeps_profit_locked(self):
        tracker = LockedProfitTracker(last_updated_locked_profit=1_000, last_report=100)
        assert tracker.locked_profit(10**9) == 1_000

    def test_negative_field_rejected(self):
        with pytest.raises(ValueError):
            LockedProfitTracker(last_report=-1)


class TestVaultSnapshot:
    def test_withdrawable_excludes_locked_profit(self):
        vault = make_vault(
            10_000,
            locked_profit_tracker=LockedProfitTracker(1_000, 100, DEGRADATION),
        )
        assert vault.withdrawable_amount(150) == 9_500
        assert vault.withdrawable_amount(200) == 10_000

    def test_pool_token_amount(self):
        # 500 of 1_000 vault shares at 3 tokens per share
        vault = make_vault(3_000, lp_supply=1_000, pool_lp_amount=500)
        assert vault.pool_token_amount(0) == 1_500

    def test_pool_token_amount_rounds_down(self):
        vault = make_vault(1_000, lp_supply=3, pool_lp_amount=1)
        assert vault.pool_token_amount(0) == 333

    def test_pool_cannot_own_more_than_supply(self):
        with pytest.raises(ValueError, match="pool_lp_amount"):
            VaultSnapshot(total_amount=100, lp_supply=10, reserve_balance=100, pool_lp_amount=11)

    def test_compute_pool_token_amounts(self):
        vault_a = make_vault(3_000, lp_supply=1_000, pool_lp_amount=500)
        vault_b = make_vault(7_000)
        assert compute_pool_token_amounts(vault_a, vault_b, 0) == (1_500, 7_000)

    def test_empty_vault_backs_nothing(self):
        assert make_vault(0).pool_token_amount(0) == 0
