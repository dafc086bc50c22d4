"""Shared type definitions for the wire models.

On-chain amounts are u64 (token amounts, supplies) or u128 (accumulators).
JSON callers may send them as integers or as decimal strings, since many JSON
stacks lose precision above 2^53.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm_quote.safe_int import U64_MAX, U128_MAX


def _validate_unsigned(value: Any, max_value: int, type_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{type_name} must be an integer or decimal string, got bool")
    if isinstance(value, str):
        try:
            value = int(value, 10)
        except ValueError as err:
            raise ValueError(f"{type_name} must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"{type_name} must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{type_name} cannot be negative: {value}")
    if value > max_value:
        raise ValueError(f"{type_name} overflow: {value} > {max_value}")
    return value


def validate_u64(value: Any) -> int:
    """Validate a u64 given as int or decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    return _validate_unsigned(value, U64_MAX, "U64")


def validate_u128(value: Any) -> int:
    """Validate a u128 given as int or decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within u128 range
    """
    return _validate_unsigned(value, U128_MAX, "U128")


U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer (int or decimal string)"),
]

U128 = Annotated[
    int,
    BeforeValidator(validate_u128),
    Field(description="128-bit unsigned integer (int or decimal string)"),
]

# Base58 account address
Pubkey = Annotated[str, Field(pattern=r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")]

# Slippage tolerance in basis points
SlippageBps = Annotated[int, Field(ge=0, le=10_000)]
