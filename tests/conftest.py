"""Shared engines and snapshot fixture loading."""

import json
from pathlib import Path

import pytest

from amm_quote.curve.types import StableSwap
from amm_quote.quote.engine import QuoteEngine
from tests.helpers import make_engine, make_pool, make_state

SNAPSHOTS_DIR = Path(__file__).parent / "fixtures" / "snapshots"


def load_snapshot_fixture(name: str) -> dict:
    """Raw snapshot JSON document, e.g. load_snapshot_fixture("stable_pool")."""
    return json.loads((SNAPSHOTS_DIR / f"{name}.json").read_text())


@pytest.fixture
def cp_engine() -> QuoteEngine:
    """Constant product pool: 10_000_000 A / 1_000_000_000 B, 25 bps fee."""
    return make_engine()


@pytest.fixture
def stable_engine() -> QuoteEngine:
    """Balanced stable pool: 1_000_000_000 of each side, amp 100, 25 bps fee."""
    pool = make_pool(
        token_a_amount=1_000_000_000,
        token_b_amount=1_000_000_000,
        lp_supply=2_000_000_000,
        curve=StableSwap(amp=100),
    )
    return make_engine(make_state(pool))
