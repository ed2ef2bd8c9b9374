"""Service layer helpers"""

from .address import is_valid_wallet_address, normalize_address
from .aggregator import PortfolioAggregator, get_stable_percent
from .members import find_member, list_members
from .stablecoins import DEFAULT_STABLE_TICKERS, is_stablecoin

__all__ = [
    "DEFAULT_STABLE_TICKERS",
    "PortfolioAggregator",
    "find_member",
    "get_stable_percent",
    "is_stablecoin",
    "is_valid_wallet_address",
    "list_members",
    "normalize_address",
]
