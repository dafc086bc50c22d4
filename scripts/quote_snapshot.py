"""Quote against a pool snapshot stored as JSON.

The snapshot file holds a PoolQuoteStateModel document (pool, vaultA, vaultB,
optional apySnapshot and depegOracle), as produced by the snapshot fetcher.

Usage:
    python -m scripts.quote_snapshot snapshot.json swap --mint <MINT> --amount 1000000
    python -m scripts.quote_snapshot snapshot.json deposit --a 1000000 --b 0
    python -m scripts.quote_snapshot snapshot.json withdraw --amount 5000 --mint <MINT>
    python -m scripts.quote_snapshot snapshot.json info
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog
from pydantic import BaseModel, ValidationError

from amm_quote.config import QuoteConfig
from amm_quote.errors import QuoteError
from amm_quote.models.responses import (
    DepositQuoteResponse,
    MaxSwapResponse,
    PoolInfoResponse,
    SwapQuoteResponse,
    WithdrawQuoteResponse,
)
from amm_quote.models.snapshot import PoolQuoteStateModel
from amm_quote.quote.engine import QuoteEngine

logger = structlog.get_logger()


def load_state(path: Path) -> PoolQuoteStateModel:
    """Load and validate a snapshot document."""
    with open(path) as f:
        data = json.load(f)
    return PoolQuoteStateModel.model_validate(data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Quote against a stored pool snapshot")
    parser.add_argument("snapshot", type=Path, help="Path to the snapshot JSON file")
    parser.add_argument(
        "--slippage-bps",
        type=int,
        default=None,
        help="Slippage tolerance in basis points (default: 100)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    commands = parser.add_subparsers(dest="command", required=True)

    swap = commands.add_parser("swap", help="Swap quote")
    swap.add_argument("--mint", required=True, help="Input token mint")
    swap.add_argument("--amount", type=int, required=True, help="Input amount in base units")

    max_swap = commands.add_parser("max-swap", help="Swap capacity estimate")
    max_swap.add_argument("--mint", required=True, help="Input token mint")

    deposit = commands.add_parser("deposit", help="Deposit quote")
    deposit.add_argument("--a", type=int, default=0, help="Token A amount")
    deposit.add_argument("--b", type=int, default=0, help="Token B amount")
    deposit.add_argument(
        "--imbalanced",
        action="store_true",
        help="Deposit the amounts as given instead of deriving the zero side",
    )

    withdraw = commands.add_parser("withdraw", help="Withdraw quote")
    withdraw.add_argument("--amount", type=int, required=True, help="Pool tokens to burn")
    withdraw.add_argument("--mint", default=None, help="Withdraw only this token")

    commands.add_parser("info", help="Reserves, virtual price and APY")
    return parser


def run_command(args: argparse.Namespace, state: PoolQuoteStateModel) -> BaseModel:
    config = QuoteConfig(snapshot_capacity=state.snapshot_capacity)
    engine = QuoteEngine(state.to_domain(), config)

    match args.command:
        case "swap":
            return SwapQuoteResponse.from_quote(
                engine.get_swap_quote(args.mint, args.amount, args.slippage_bps)
            )
        case "max-swap":
            return MaxSwapResponse(
                max_in_amount=engine.get_max_swap_in_amount(args.mint),
                max_out_amount=engine.get_max_swap_out_amount(engine.state.pool.other_mint(args.mint)),
            )
        case "deposit":
            return DepositQuoteResponse.from_quote(
                engine.get_deposit_quote(args.a, args.b, not args.imbalanced, args.slippage_bps)
            )
        case "withdraw":
            return WithdrawQuoteResponse.from_quote(
                engine.get_withdraw_quote(args.amount, args.slippage_bps, args.mint)
            )
        case "info":
            return PoolInfoResponse.from_info(engine.get_pool_info())
        case _:
            raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    if not args.snapshot.exists():
        logger.error("snapshot_not_found", path=str(args.snapshot))
        print(f"Error: Snapshot file not found: {args.snapshot}")
        return 1

    try:
        state = load_state(args.snapshot)
    except json.JSONDecodeError as e:
        logger.error("snapshot_unreadable", path=str(args.snapshot), error=str(e))
        print(f"Error: Snapshot is not valid JSON: {e}")
        return 1
    except ValidationError as e:
        logger.error("snapshot_invalid", path=str(args.snapshot), errors=e.error_count())
        print(f"Error: Invalid snapshot: {e}")
        return 1

    try:
        result = run_command(args, state)
    except QuoteError as e:
        logger.warning("quote_rejected", error=type(e).__name__, detail=str(e))
        print(json.dumps({"error": type(e).__name__, "detail": str(e)}, indent=2))
        return 2

    print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
