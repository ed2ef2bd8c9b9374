from datetime import datetime
from typing import Optional
from ..types import ToolEnvelope, Source
from ..services.aggregator import PortfolioAggregator


async def get_stable_breakdown(address: str, aggregator: Optional[PortfolioAggregator] = None) -> ToolEnvelope:
    """Compute the stablecoin breakdown for an address and wrap it with sources and warnings.

    InvalidInputError from the aggregator propagates to the caller.
    """

    aggregator = aggregator or PortfolioAggregator()
    start_time = datetime.now()

    breakdown = await aggregator.compute_stable_percentage(address)

    warnings = [f"Skipped {s.chain}: {s.reason}" for s in breakdown.skipped]
    if not breakdown.has_balances():
        warnings.append("No balances found across queried networks")

    sources = []
    if len(breakdown.skipped) < len(aggregator.chains):
        sources.append(Source(
            name=aggregator.provider.name,
            url=getattr(aggregator.provider, "source_url", None),
        ))

    latency_ms = int((datetime.now() - start_time).total_seconds() * 1000)

    return ToolEnvelope(
        data=breakdown,
        sources=sources,
        fetched_at=start_time,
        latency_ms=latency_ms,
        warnings=warnings,
    )
