"""Command-line interface for the lending pool data lens."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from .config import load_config
from .logging_setup import configure_logging
from .models import LoanRequest
from .services import QueryService


def parse_loan_request(value: str) -> LoanRequest:
    """Parse ``ASSET:TOKEN_ID`` into a loan request."""
    asset, sep, token_id = value.rpartition(":")
    if not sep or not asset:
        raise argparse.ArgumentTypeError(f"expected ASSET:TOKEN_ID, got '{value}'")
    try:
        return LoanRequest(asset=asset, token_id=int(token_id, 0))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid token id in '{value}'") from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="pool-lens",
        description="Read-only views of lending pool reserves, NFT pools and loans",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--market",
        default=None,
        help="Market name from config (default: first configured market)",
    )

    sub = parser.add_subparsers(dest="command")

    reserves_parser = sub.add_parser("reserves", help="Reserve snapshots and positions")
    reserves_parser.add_argument("--user", default=None, help="User address")

    positions_parser = sub.add_parser(
        "positions", help="User reserve positions and unclaimed rewards"
    )
    positions_parser.add_argument("user", help="User address")

    nfts_parser = sub.add_parser("nfts", help="NFT pool snapshots and positions")
    nfts_parser.add_argument("--user", default=None, help="User address")

    loans_parser = sub.add_parser("loans", help="Risk metrics of NFT loans")
    loans_parser.add_argument(
        "loans",
        nargs="+",
        type=parse_loan_request,
        metavar="ASSET:TOKEN_ID",
        help="NFT asset and token id pairs",
    )

    list_parser = sub.add_parser("list", help="List reserve or NFT pool assets")
    list_parser.add_argument("kind", choices=["reserves", "nfts"])

    return parser


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    service = QueryService(config, args.market)

    if args.command == "reserves":
        return await service.reserves(args.user)
    if args.command == "positions":
        return await service.user_reserves(args.user)
    if args.command == "nfts":
        return await service.nfts(args.user)
    if args.command == "loans":
        return await service.loans(args.loans)
    if args.kind == "reserves":
        return await service.list_reserves()
    return await service.list_nfts()


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    result = asyncio.run(_run(args))
    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
