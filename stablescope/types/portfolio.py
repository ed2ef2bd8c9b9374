import math
import re
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class TokenBalanceItem(BaseModel):
    """One token balance as returned by the balance provider for a network."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ticker_symbol: str = Field(
        default="",
        alias="contract_ticker_symbol",
        description="Exchange ticker symbol (may be empty)",
    )
    contract_name: str = Field(default="", description="Human readable token name (may be empty)")
    contract_address: Optional[str] = Field(default=None, description="Token contract address")
    chain: Optional[str] = Field(default=None, alias="chain_name", description="Network the balance was reported on")
    quote: Any = Field(default=None, description="USD value of the held balance, as reported")

    @field_validator("ticker_symbol", "contract_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def quote_value(self) -> Optional[float]:
        """Parse the quote as a float, or None when it is absent or not a finite number.

        Strings are read up to their leading number, so "12abc" counts as 12.
        Integers too large for a float are treated as non-finite.
        """
        raw = self.quote
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, str):
            match = _LEADING_NUMBER_RE.match(raw.strip())
            if match is None:
                return None
            raw = match.group(0)
        try:
            value = float(raw)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(value):
            return None
        return value


class ChainBreakdown(BaseModel):
    chain: str = Field(description="Network identifier")
    total: float = Field(default=0.0, description="Sum of valid quotes on this network")
    stable: float = Field(default=0.0, description="Portion of total held in stablecoins")
    token_count: int = Field(default=0, description="Items with a valid quote")


class NetworkSkipped(BaseModel):
    chain: str = Field(description="Network that contributed nothing")
    reason: str = Field(description="Why the network was skipped")


class StablecoinBreakdown(BaseModel):
    address: str = Field(description="Wallet address (trimmed)")
    total: float = Field(default=0.0, description="Sum of all valid USD quotes")
    stable: float = Field(default=0.0, description="Subset of total held in stablecoins")
    percentage: float = Field(default=0.0, description="stable / total * 100, or 0 when total is 0")
    chains: List[ChainBreakdown] = Field(default_factory=list, description="Per-network contributions")
    skipped: List[NetworkSkipped] = Field(default_factory=list, description="Networks that failed")
    stable_tokens: List[str] = Field(default_factory=list, description="Stablecoin symbols seen")

    def formatted_percentage(self) -> str:
        return f"{self.percentage:.2f}"

    def has_balances(self) -> bool:
        return self.total > 0
