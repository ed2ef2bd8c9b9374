from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from ..types import TokenBalanceItem


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: float = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class BalanceProvider(Provider):
    """Provider for per-network token balances quoted in USD.

    Implementations raise ``ProviderError`` for any failure of a single
    request so callers can skip that network and carry on.
    """

    @abstractmethod
    async def get_token_balances(self, address: str, chain: str) -> List[TokenBalanceItem]:
        """Get all token balances for an address on one network"""
        pass

    @abstractmethod
    async def get_cross_chain_balances(
        self, address: str, chains: Sequence[str]
    ) -> Dict[str, List[TokenBalanceItem]]:
        """Get balances for several networks in one request, grouped by network"""
        pass
