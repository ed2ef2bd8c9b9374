"""
Multi-network stablecoin share aggregation.

Balances are fetched one network at a time, in configured order, to stay
under the free-tier rate limit of the data provider. A failing network is
logged and skipped; it never aborts the rest of the run.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

import httpx

from ..config import settings
from ..errors import ProviderError
from ..providers.base import BalanceProvider
from ..types import ChainBreakdown, NetworkSkipped, StablecoinBreakdown, TokenBalanceItem
from .address import normalize_address
from .stablecoins import build_ticker_set, is_stablecoin

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    """Running sums for a single aggregation call."""

    total: float = 0.0
    stable: float = 0.0
    chains: List[ChainBreakdown] = field(default_factory=list)
    skipped: List[NetworkSkipped] = field(default_factory=list)
    stable_tokens: List[str] = field(default_factory=list)


class PortfolioAggregator:
    """Compute what share of a wallet's USD value sits in stablecoins.

    Provider, network list, ticker set, pacing and transport are fixed at
    construction; nothing is shared between calls.
    """

    def __init__(
        self,
        provider: Optional[BalanceProvider] = None,
        chains: Optional[Sequence[str]] = None,
        stable_tickers: Optional[Iterable[str]] = None,
        pacing_seconds: Optional[float] = None,
        transport: Optional[str] = None,
    ):
        if provider is None:
            from ..providers.covalent import CovalentProvider

            provider = CovalentProvider()

        self.provider = provider
        self.chains: tuple = tuple(settings.balance_chains if chains is None else chains)
        self.stable_tickers = build_ticker_set(
            settings.stable_tickers if stable_tickers is None else stable_tickers
        )
        self.pacing_seconds = settings.request_pacing_seconds if pacing_seconds is None else pacing_seconds
        self.transport = (transport or settings.balance_transport).replace("-", "_")
        if self.transport not in ("per_chain", "cross_chain"):
            raise ValueError(f"Unknown balance transport '{transport}'")

    async def compute_stable_percentage(self, address: str) -> StablecoinBreakdown:
        """Aggregate total and stablecoin USD value across every configured network.

        Raises InvalidInputError for an empty address before any request is
        made. Past that point the call always succeeds; failed networks are
        reported in ``skipped`` and contribute nothing.
        """
        wallet = normalize_address(address)
        acc = _Accumulator()

        if self.transport == "cross_chain":
            await self._collect_cross_chain(wallet, acc)
        else:
            await self._collect_per_chain(wallet, acc)

        percentage = (acc.stable / acc.total) * 100 if acc.total > 0 else 0.0

        if acc.skipped:
            logger.info(
                f"Stablecoin share for {wallet}: {percentage:.2f}% "
                f"({len(acc.skipped)}/{len(self.chains)} networks skipped)"
            )

        return StablecoinBreakdown(
            address=wallet,
            total=acc.total,
            stable=acc.stable,
            percentage=percentage,
            chains=acc.chains,
            skipped=acc.skipped,
            stable_tokens=acc.stable_tokens,
        )

    async def get_portfolio_breakdown(self, address: str) -> StablecoinBreakdown:
        """Same computation as compute_stable_percentage, kept under the breakdown name."""
        return await self.compute_stable_percentage(address)

    async def _collect_per_chain(self, wallet: str, acc: _Accumulator) -> None:
        for index, chain in enumerate(self.chains):
            if index and self.pacing_seconds > 0:
                await asyncio.sleep(self.pacing_seconds)

            try:
                items = await self.provider.get_token_balances(wallet, chain)
            except ProviderError as e:
                self._skip(acc, chain, e.reason)
                continue
            except httpx.HTTPError as e:
                self._skip(acc, chain, str(e) or e.__class__.__name__)
                continue

            self._add_items(acc, chain, items)

    async def _collect_cross_chain(self, wallet: str, acc: _Accumulator) -> None:
        try:
            grouped = await self.provider.get_cross_chain_balances(wallet, self.chains)
        except (ProviderError, httpx.HTTPError) as e:
            reason = e.reason if isinstance(e, ProviderError) else (str(e) or e.__class__.__name__)
            for chain in self.chains:
                self._skip(acc, chain, reason)
            return

        for chain in self.chains:
            self._add_items(acc, chain, grouped.get(chain, []))

    def _skip(self, acc: _Accumulator, chain: str, reason: str) -> None:
        logger.warning(
            f"Skipping {chain} balances: {reason}",
            extra={"chain": chain, "reason": reason},
        )
        acc.skipped.append(NetworkSkipped(chain=chain, reason=reason))

    def _add_items(self, acc: _Accumulator, chain: str, items: List[TokenBalanceItem]) -> None:
        row = ChainBreakdown(chain=chain)
        for item in items:
            value = item.quote_value()
            if value is None:
                continue

            row.total += value
            row.token_count += 1
            acc.total += value

            if is_stablecoin(item, self.stable_tickers):
                row.stable += value
                acc.stable += value
                symbol = item.ticker_symbol.upper() or item.contract_name
                if symbol and symbol not in acc.stable_tokens:
                    acc.stable_tokens.append(symbol)

        acc.chains.append(row)


async def get_stable_percent(address: str, aggregator: Optional[PortfolioAggregator] = None) -> float:
    """Return only the stablecoin percentage for ``address``."""

    result = await (aggregator or PortfolioAggregator()).compute_stable_percentage(address)
    return result.percentage
