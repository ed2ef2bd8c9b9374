"""Heuristic stablecoin classification for balance items."""

from __future__ import annotations

import re
from typing import AbstractSet, Iterable

from ..config import DEFAULT_STABLE_TICKERS as _CONFIGURED_TICKERS
from ..types import TokenBalanceItem

DEFAULT_STABLE_TICKERS: frozenset[str] = frozenset(_CONFIGURED_TICKERS)

_USD_WORD_RE = re.compile(r"\bUSD\b")
_STABLE_WORD_RE = re.compile(r"\bSTABLE\b")


def build_ticker_set(tickers: Iterable[str]) -> frozenset[str]:
    """Normalize configured tickers into an uppercase lookup set."""

    return frozenset(t.strip().upper() for t in tickers if t and t.strip())


def is_stablecoin(
    item: TokenBalanceItem,
    tickers: AbstractSet[str] = DEFAULT_STABLE_TICKERS,
) -> bool:
    """Return True when the item looks like a stablecoin.

    Known tickers match exactly. Anything else matches when the symbol or the
    name contains ``USD`` or ``STABLE`` as a whole word, so "USD Coin" is
    stable while "CUSTODY" is not.
    """

    symbol = (item.ticker_symbol or "").upper()
    name = (item.contract_name or "").upper()

    if symbol in tickers:
        return True

    for text in (symbol, name):
        if _USD_WORD_RE.search(text) or _STABLE_WORD_RE.search(text):
            return True
    return False
