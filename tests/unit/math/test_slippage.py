"""Tests for slippage helpers."""

import pytest

from amm_quote.errors import ConfigurationError
from amm_quote.math.slippage import max_amount_with_slippage, min_amount_with_slippage, validate_slippage_bps


class TestSlippage:
    def test_min_amount_truncates_reduction(self):
        # 1% of 12_345 is 123.45 -> reduction 123
        assert min_amount_with_slippage(12_345, 100) == 12_222

    def test_max_amount_truncates_increase(self):
        assert max_amount_with_slippage(12_345, 100) == 12_468

    def test_zero_slippage_is_identity(self):
        assert min_amount_with_slippage(12_345, 0) == 12_345
        assert max_amount_with_slippage(12_345, 0) == 12_345

    def test_full_slippage(self):
        assert min_amount_with_slippage(12_345, 10_000) == 0

    @pytest.mark.parametrize("bps", [-1, 10_001, 1.5, True])
    def test_invalid_slippage_raises(self, bps):
        with pytest.raises(ConfigurationError):
            validate_slippage_bps(bps)
