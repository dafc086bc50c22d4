"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token mints and common fee parameters
- factories: Pool, vault, state and engine factory functions
"""

from tests.helpers.constants import (
    CURRENT_TIME,
    MSOL,
    TRADE_FEE_DENOMINATOR,
    TRADE_FEE_NUMERATOR,
    UNKNOWN_MINT,
    USDC,
    USDT,
    WSOL,
)
from tests.helpers.factories import (
    make_engine,
    make_fees,
    make_pool,
    make_state,
    make_state_payload,
    make_vault,
)

__all__ = [
    # Constants
    "USDC",
    "USDT",
    "WSOL",
    "MSOL",
    "UNKNOWN_MINT",
    "CURRENT_TIME",
    "TRADE_FEE_NUMERATOR",
    "TRADE_FEE_DENOMINATOR",
    # Factories
    "make_fees",
    "make_pool",
    "make_vault",
    "make_state",
    "make_engine",
    "make_state_payload",
]
