"""Unit tests for the quote API endpoints."""

import pytest
from fastapi.testclient import TestClient

from amm_quote.api.endpoints import get_config
from amm_quote.api.main import app
from amm_quote.config import QuoteConfig
from amm_quote.safe_int import U64_MAX
from tests.helpers import UNKNOWN_MINT, USDC, USDT, make_state_payload

REFERENCE_OUT = 1_000_000_000 * 997_500 // (10_000_000 + 997_500)


@pytest.fixture
def client():
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestSwapEndpoint:
    def test_swap_quote(self, client):
        response = client.post(
            "/quote/swap",
            json={
                "state": make_state_payload(),
                "inTokenMint": USDC,
                "inAmount": "1000000",
                "slippageBps": 100,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["amountIn"] == "1000000"
        assert data["amountOut"] == str(REFERENCE_OUT)
        assert data["minAmountOut"] == str(REFERENCE_OUT - REFERENCE_OUT * 100 // 10_000)
        assert data["tradeFee"] == "2500"
        assert data["tradeDirection"] == "aToB"

    def test_default_slippage_from_config(self, client):
        """The config dependency supplies the slippage when the request omits it."""
        app.dependency_overrides[get_config] = lambda: QuoteConfig(default_slippage_bps=50)

        response = client.post(
            "/quote/swap",
            json={"state": make_state_payload(), "inTokenMint": USDC, "inAmount": 1_000_000},
        )

        assert response.status_code == 200
        assert response.json()["minAmountOut"] == str(REFERENCE_OUT - REFERENCE_OUT * 50 // 10_000)

    def test_unknown_mint_returns_typed_error(self, client):
        response = client.post(
            "/quote/swap",
            json={"state": make_state_payload(), "inTokenMint": UNKNOWN_MINT, "inAmount": "1000"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidMint"

    def test_disabled_pool(self, client):
        response = client.post(
            "/quote/swap",
            json={"state": make_state_payload(enabled=False), "inTokenMint": USDC, "inAmount": "1000"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "PoolDisabled"

    def test_slippage_out_of_range_rejected(self, client):
        response = client.post(
            "/quote/swap",
            json={
                "state": make_state_payload(),
                "inTokenMint": USDC,
                "inAmount": "1000",
                "slippageBps": 10_001,
            },
        )
        assert response.status_code == 422

    def test_negative_amount_rejected(self, client):
        response = client.post(
            "/quote/swap",
            json={"state": make_state_payload(), "inTokenMint": USDC, "inAmount": "-1"},
        )
        assert response.status_code == 422


class TestMaxSwapEndpoint:
    def test_max_swap(self, client):
        response = client.post("/quote/max-swap", json={"state": make_state_payload(), "inTokenMint": USDT})

        assert response.status_code == 200
        data = response.json()
        assert data["maxOutAmount"] == "10000000"
        assert int(data["maxInAmount"]) > 0


class TestLiquidityEndpoints:
    def test_balanced_deposit(self, client):
        response = client.post(
            "/quote/deposit",
            json={"state": make_state_payload(), "tokenAInAmount": "1000000", "slippageBps": 100},
        )

        assert response.status_code == 200
        assert response.json() == {
            "poolTokenAmountOut": "1000000",
            "minPoolTokenAmountOut": "990000",
            "tokenAInAmount": "1010000",
            "tokenBInAmount": "101000000",
        }

    def test_imbalanced_constant_product_deposit(self, client):
        response = client.post(
            "/quote/deposit",
            json={
                "state": make_state_payload(),
                "tokenAInAmount": "1000",
                "tokenBInAmount": "1000",
                "balanced": False,
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ImbalancedDepositUnsupported"

    def test_deposit_minting_beyond_u64(self, client):
        state = make_state_payload(token_a_amount=2, token_b_amount=2, curve={"type": "stable", "amp": 100})
        state["pool"]["lpSupply"] = str(U64_MAX)
        amount = str(U64_MAX - 10)

        response = client.post(
            "/quote/deposit",
            json={"state": state, "tokenAInAmount": amount, "tokenBInAmount": amount, "balanced": False},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "AmountOverflow"

    def test_balanced_withdraw(self, client):
        response = client.post(
            "/quote/withdraw",
            json={"state": make_state_payload(), "poolTokenAmount": "1000000", "slippageBps": 0},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tokenAOutAmount"] == "1000000"
        assert data["tokenBOutAmount"] == "100000000"
        assert data["minTokenBOutAmount"] == "100000000"

    def test_single_sided_withdraw_on_constant_product(self, client):
        response = client.post(
            "/quote/withdraw",
            json={"state": make_state_payload(), "poolTokenAmount": "1000", "tokenMint": USDC},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "CapabilityUnsupported"

    def test_single_sided_withdraw_on_stable_pool(self, client):
        state = make_state_payload(
            token_a_amount=1_000_000_000,
            token_b_amount=1_000_000_000,
            curve={"type": "stable", "amp": 100},
        )
        state["pool"]["lpSupply"] = "2000000000"

        response = client.post(
            "/quote/withdraw",
            json={"state": state, "poolTokenAmount": "2000000", "tokenMint": USDT},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tokenAOutAmount"] == "0"
        assert 1_990_000 < int(data["tokenBOutAmount"]) < 2_000_000


class TestPoolInfoEndpoint:
    def test_pool_info_without_history(self, client):
        response = client.post("/pool/info", json={"state": make_state_payload()})

        assert response.status_code == 200
        data = response.json()
        assert data["tokenAAmount"] == "10000000"
        assert data["virtualPrice"] == str(10**17)
        assert data["apy"] is None
        assert data["firstVirtualPrice"] is None

    def test_pool_info_with_history(self, client):
        state = make_state_payload()
        state["apySnapshot"] = {
            "virtualPrices": [
                {"price": "100000000", "timestamp": 0},
                {"price": "100010000", "timestamp": 86_400},
                {},
            ],
            "pointer": 2,
        }

        response = client.post("/pool/info", json={"state": state})

        assert response.status_code == 200
        data = response.json()
        assert 0.03 < data["apy"] < 0.04
        assert data["firstVirtualPrice"] == "100000000"
        assert data["firstTimestamp"] == 0
