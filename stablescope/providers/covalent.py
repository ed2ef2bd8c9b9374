"""
Covalent (GoldRush) balances provider.

Per-network balances: GET /v1/{chain}/address/{address}/balances_v2/
Cross-network balances: GET /v1/allchains/address/{address}/balances/

Docs: https://goldrush.dev/docs/api-reference/foundational-api/balances
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from ..config import settings
from ..errors import ProviderError
from ..types import TokenBalanceItem
from .base import BalanceProvider

logger = logging.getLogger(__name__)


class CovalentProvider(BalanceProvider):
    """Covalent API provider for multi-network token balances"""

    name = "covalent"
    source_url = "https://goldrush.dev"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        auth_mode: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ):
        self.api_key = settings.covalent_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.covalent_base_url).rstrip("/")
        self.auth_mode = auth_mode or settings.covalent_auth_mode
        self.timeout_s = timeout_s or settings.request_timeout_seconds

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key and self.auth_mode == "bearer":
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _with_key(self, params: Dict[str, str]) -> Dict[str, str]:
        if self.api_key and self.auth_mode == "query":
            return {**params, "key": self.api_key}
        return params

    async def ready(self) -> bool:
        return bool(self.api_key) and settings.enable_covalent

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "API key not configured or provider disabled"
            }

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                response = await client.get(
                    f"{self.base_url}/chains/status/",
                    params=self._with_key({}),
                    headers=self._build_headers(),
                )
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}

    async def _get_envelope_data(self, url: str, params: Dict[str, str], chain: str) -> Dict[str, Any]:
        """Issue one GET and return the envelope's ``data`` object.

        Every failure mode is reported as ProviderError tagged with ``chain``.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                response = await client.get(
                    url,
                    params=self._with_key(params),
                    headers=self._build_headers(),
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as e:
            raise ProviderError(chain, f"timeout: {e.__class__.__name__}") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(chain, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderError(chain, f"transport error: {e}") from e
        except ValueError as e:
            raise ProviderError(chain, "malformed JSON body") from e

        if not isinstance(payload, dict):
            raise ProviderError(chain, "unexpected response envelope")
        if payload.get("error"):
            raise ProviderError(chain, f"API error: {payload.get('error_message') or 'unknown'}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise ProviderError(chain, "response missing data object")
        return data

    @staticmethod
    def _parse_items(raw_items: Any, chain: str) -> List[TokenBalanceItem]:
        if raw_items is None:
            return []
        if not isinstance(raw_items, list):
            raise ProviderError(chain, "items is not a list")

        items = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                logger.debug("Ignoring non-object balance item on %s", chain)
                continue
            try:
                items.append(TokenBalanceItem.model_validate(raw))
            except ValidationError:
                logger.debug("Ignoring malformed balance item on %s", chain)
        return items

    async def get_token_balances(self, address: str, chain: str) -> List[TokenBalanceItem]:
        """Get all token balances (USD quoted, spam and NFTs filtered) on one network"""
        params = {
            "quote-currency": "usd",
            "no-nft-fetch": "true",
            "no-spam": "true",
        }
        data = await self._get_envelope_data(
            f"{self.base_url}/{chain}/address/{address}/balances_v2/",
            params,
            chain,
        )
        return self._parse_items(data.get("items"), chain)

    async def get_cross_chain_balances(
        self, address: str, chains: Sequence[str]
    ) -> Dict[str, List[TokenBalanceItem]]:
        """Get balances for all requested networks with a single allchains request"""
        label = "allchains"
        params = {
            "chains": ",".join(chains),
            "quote-currency": "USD",
            "no-nft-fetch": "true",
            "no-spam": "true",
        }
        data = await self._get_envelope_data(
            f"{self.base_url}/allchains/address/{address}/balances/",
            params,
            label,
        )

        grouped: Dict[str, List[TokenBalanceItem]] = {chain: [] for chain in chains}
        for item in self._parse_items(data.get("items"), label):
            if item.chain in grouped:
                grouped[item.chain].append(item)
            else:
                logger.debug("Ignoring balance on unrequested network %s", item.chain)
        return grouped
