#!/usr/bin/env python3
"""Simple CLI for checking a wallet's stablecoin share locally"""

import argparse
import asyncio
import sys
from typing import List, Optional

from stablescope.errors import InvalidInputError
from stablescope.logging_config import setup_logging
from stablescope.services.address import is_valid_wallet_address, normalize_address
from stablescope.services.aggregator import PortfolioAggregator
from stablescope.services.members import find_member
from stablescope.tools.stablecoins import get_stable_breakdown
from stablescope.types import StablecoinBreakdown


def print_breakdown(breakdown: StablecoinBreakdown, warnings: List[str]) -> None:
    """Pretty print a stablecoin breakdown"""
    print(f"\n🪙 Stablecoin Share: {breakdown.formatted_percentage()}%")
    print("=" * 50)
    print(f"Address: {breakdown.address}")
    print(f"Total Value:  ${breakdown.total:,.2f} USD")
    print(f"Stable Value: ${breakdown.stable:,.2f} USD")

    if breakdown.chains:
        print("\nNetworks:")
        print("-" * 50)
        for row in breakdown.chains:
            print(f"{row.chain:<20} {row.token_count:>4} tokens  ${row.total:>14,.2f}  stable ${row.stable:>12,.2f}")

    if breakdown.stable_tokens:
        print(f"\nStablecoins held: {', '.join(breakdown.stable_tokens)}")

    if warnings:
        print("\n⚠️  Warnings:")
        for warning in warnings:
            print(f"  - {warning}")


async def cli_stable(address: str, chains: Optional[str] = None, transport: Optional[str] = None) -> int:
    """CLI command to compute the stablecoin share of a wallet"""
    try:
        wallet = normalize_address(address)
    except InvalidInputError as e:
        print(f"❌ {e.message}")
        return 1

    if not is_valid_wallet_address(wallet):
        print("❌ Invalid wallet address format")
        return 1

    chain_list = [c.strip() for c in chains.split(",") if c.strip()] if chains else None
    aggregator = PortfolioAggregator(chains=chain_list, transport=transport)

    print(f"🔍 Checking {len(aggregator.chains)} networks for {wallet}...")
    result = await get_stable_breakdown(wallet, aggregator)
    print_breakdown(result.data, result.warnings)
    return 0


def cli_member(name: str) -> int:
    """CLI command to look up a community member"""
    try:
        member = find_member(name)
    except InvalidInputError as e:
        print(f"❌ {e.message}")
        return 1

    if member is None:
        print(f"❌ No member named '{name.strip()}'")
        return 1

    print(f"\n👤 {member.name}")
    print(f"Role:      {member.role}")
    print(f"Joined:    {member.joined_date():%d %b %Y}")
    print(f"Trillions: {member.trillions}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stablescope CLI")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")
    subparsers = parser.add_subparsers(dest="command")

    stable_parser = subparsers.add_parser("stable", help="Stablecoin share of a wallet")
    stable_parser.add_argument("address", help="Wallet address or ENS name")
    stable_parser.add_argument("--chains", help="Comma-separated network identifiers (default: configured list)")
    stable_parser.add_argument(
        "--transport",
        choices=["per_chain", "cross_chain"],
        help="Query each network separately or use the single allchains request",
    )

    member_parser = subparsers.add_parser("member", help="Look up a community member")
    member_parser.add_argument("name", help="Member nickname")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, stream=sys.stderr)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "stable":
        return await cli_stable(args.address, args.chains, args.transport)

    if args.command == "member":
        return cli_member(args.name)

    print(f"❌ Unknown command: {args.command}")
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
