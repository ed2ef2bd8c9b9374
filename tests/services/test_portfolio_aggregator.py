import logging

import pytest

from stablescope.errors import InvalidInputError, ProviderError
from stablescope.providers.base import BalanceProvider
from stablescope.services import aggregator as agg
from stablescope.services.aggregator import PortfolioAggregator, get_stable_percent
from stablescope.types import TokenBalanceItem


def _item(symbol, quote, name=""):
    return TokenBalanceItem(contract_ticker_symbol=symbol, contract_name=name, quote=quote)


class _FakeProvider(BalanceProvider):
    """Serves canned items per chain; an Exception value is raised instead."""

    name = "fake"

    def __init__(self, responses, cross_chain=None):
        self.responses = responses
        self.cross_chain = cross_chain
        self.calls = []

    async def ready(self):
        return True

    async def health_check(self):
        return {"status": "healthy"}

    async def get_token_balances(self, address, chain):
        self.calls.append((address, chain))
        response = self.responses.get(chain, [])
        if isinstance(response, Exception):
            raise response
        return list(response)

    async def get_cross_chain_balances(self, address, chains):
        self.calls.append((address, tuple(chains)))
        if isinstance(self.cross_chain, Exception):
            raise self.cross_chain
        return self.cross_chain


def _aggregator(responses, chains=("a", "b", "c"), **kwargs):
    provider = _FakeProvider(responses, kwargs.pop("cross_chain", None))
    return PortfolioAggregator(provider=provider, chains=chains, pacing_seconds=0, **kwargs), provider


@pytest.mark.asyncio
@pytest.mark.parametrize("address", ["", "   ", None])
async def test_empty_address_fails_without_network_calls(address):
    aggregator, provider = _aggregator({})
    with pytest.raises(InvalidInputError):
        await aggregator.compute_stable_percentage(address)
    assert provider.calls == []


@pytest.mark.asyncio
async def test_pure_stablecoin_portfolio():
    aggregator, _ = _aggregator({"a": [_item("USDC", 100)], "b": [_item("USDT", 50)]})
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.total == 150
    assert result.stable == 150
    assert result.percentage == 100.0
    assert result.stable_tokens == ["USDC", "USDT"]


@pytest.mark.asyncio
async def test_mixed_portfolio():
    aggregator, _ = _aggregator({"a": [_item("ETH", 200), _item("USDC", 100)]})
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.total == 300
    assert result.stable == 100
    assert result.percentage == pytest.approx(33.3333, rel=1e-4)
    assert result.formatted_percentage() == "33.33"


@pytest.mark.asyncio
async def test_non_finite_quote_is_excluded():
    aggregator, _ = _aggregator({"a": [_item("USDC", "N/A"), _item("ETH", 100), _item("DAI", None)]})
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.total == 100
    assert result.stable == 0
    assert result.percentage == 0.0
    assert result.chains[0].token_count == 1


@pytest.mark.asyncio
async def test_partial_network_failure_is_tolerated(caplog):
    caplog.set_level(logging.WARNING, logger=agg.__name__)
    aggregator, provider = _aggregator(
        {
            "a": [_item("USDC", 100)],
            "b": ProviderError("b", "HTTP 500"),
            "c": ProviderError("c", "timeout: ReadTimeout"),
        }
    )
    result = await aggregator.compute_stable_percentage("0xabc")
    assert (result.total, result.stable, result.percentage) == (100, 100, 100.0)
    assert [s.chain for s in result.skipped] == ["b", "c"]
    assert [c.chain for c in result.chains] == ["a"]
    assert [chain for _, chain in provider.calls] == ["a", "b", "c"]

    warnings = [r for r in caplog.records if r.name == agg.__name__ and r.levelno == logging.WARNING]
    assert [(r.chain, r.reason) for r in warnings] == [("b", "HTTP 500"), ("c", "timeout: ReadTimeout")]
    assert "b" in warnings[0].getMessage() and "HTTP 500" in warnings[0].getMessage()


@pytest.mark.asyncio
async def test_raw_httpx_errors_are_skipped_too():
    import httpx

    aggregator, _ = _aggregator({"a": httpx.ConnectError("refused"), "b": [_item("ETH", 10)]})
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.total == 10
    assert result.skipped[0].chain == "a"
    assert result.skipped[0].reason == "refused"


@pytest.mark.asyncio
async def test_all_networks_failing_returns_zeros():
    aggregator, _ = _aggregator({c: ProviderError(c, "HTTP 503") for c in ("a", "b", "c")})
    result = await aggregator.compute_stable_percentage("0xabc")
    assert (result.total, result.stable, result.percentage) == (0, 0, 0)
    assert len(result.skipped) == 3
    assert not result.has_balances()


@pytest.mark.asyncio
async def test_zero_total_gives_zero_percentage():
    aggregator, _ = _aggregator({"a": [], "b": [], "c": []})
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.percentage == 0
    assert result.skipped == []


@pytest.mark.asyncio
async def test_address_is_trimmed_before_requests():
    aggregator, provider = _aggregator({}, chains=("a",))
    result = await aggregator.compute_stable_percentage("  0xabc  ")
    assert result.address == "0xabc"
    assert provider.calls == [("0xabc", "a")]


@pytest.mark.asyncio
async def test_repeated_calls_are_identical():
    responses = {
        "a": [_item("USDC", 0.1), _item("ETH", 0.2), _item("WBTC", 1234.5678)],
        "b": [_item("DAI", 0.3), _item("LINK", "17.01")],
        "c": ProviderError("c", "HTTP 500"),
    }
    aggregator, _ = _aggregator(responses)
    first = await aggregator.compute_stable_percentage("0xabc")
    second = await aggregator.compute_stable_percentage("0xabc")
    assert first.model_dump() == second.model_dump()
    assert first.percentage.hex() == second.percentage.hex()


@pytest.mark.asyncio
async def test_stable_never_exceeds_total():
    aggregator, _ = _aggregator({"a": [_item("USDC", 5), _item("ETH", 0), _item("USD Coin", 1, name="USD Coin")]})
    result = await aggregator.compute_stable_percentage("0xabc")
    assert 0 <= result.stable <= result.total
    assert 0 <= result.percentage <= 100


@pytest.mark.asyncio
async def test_breakdown_alias_matches_compute():
    aggregator, _ = _aggregator({"a": [_item("USDC", 3), _item("ETH", 1)]})
    breakdown = await aggregator.get_portfolio_breakdown("0xabc")
    assert breakdown.percentage == 75.0
    assert breakdown.chains[0].stable == 3


@pytest.mark.asyncio
async def test_pacing_sleeps_between_requests_only(monkeypatch):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(agg.asyncio, "sleep", fake_sleep)
    provider = _FakeProvider({})
    aggregator = PortfolioAggregator(provider=provider, chains=("a", "b", "c"), pacing_seconds=0.25)
    await aggregator.compute_stable_percentage("0xabc")
    assert sleeps == [0.25, 0.25]


@pytest.mark.asyncio
async def test_custom_ticker_set_is_used():
    aggregator, _ = _aggregator({"a": [_item("GHO", 10), _item("USDC", 10, name="Circle")]}, stable_tickers=["GHO"])
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.stable == 10
    assert result.stable_tokens == ["GHO"]


@pytest.mark.asyncio
async def test_cross_chain_transport_groups_by_network():
    cross = {"a": [_item("USDC", 60)], "b": [_item("ETH", 40)], "c": []}
    aggregator, provider = _aggregator({}, transport="cross_chain", cross_chain=cross)
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.percentage == 60.0
    assert provider.calls == [("0xabc", ("a", "b", "c"))]


@pytest.mark.asyncio
async def test_cross_chain_failure_skips_every_network():
    aggregator, _ = _aggregator({}, transport="cross-chain", cross_chain=ProviderError("allchains", "HTTP 429"))
    result = await aggregator.compute_stable_percentage("0xabc")
    assert result.total == 0
    assert [s.chain for s in result.skipped] == ["a", "b", "c"]
    assert {s.reason for s in result.skipped} == {"HTTP 429"}


def test_unknown_transport_is_rejected():
    with pytest.raises(ValueError):
        PortfolioAggregator(provider=_FakeProvider({}), transport="parallel")


def test_defaults_come_from_settings(monkeypatch):
    monkeypatch.setattr(agg.settings, "balance_chains", ["eth-mainnet", "base-mainnet"])
    aggregator = PortfolioAggregator(provider=_FakeProvider({}))
    assert aggregator.chains == ("eth-mainnet", "base-mainnet")
    assert "USDC" in aggregator.stable_tickers


@pytest.mark.asyncio
async def test_get_stable_percent_returns_float():
    aggregator, _ = _aggregator({"a": [_item("USDT", 1), _item("ETH", 3)]})
    assert await get_stable_percent("0xabc", aggregator) == 25.0
