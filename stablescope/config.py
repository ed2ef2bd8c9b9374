import os

from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

DEFAULT_BALANCE_CHAINS = [
    "eth-mainnet",
    "arbitrum-mainnet",
    "base-mainnet",
    "bsc-mainnet",
    "optimism-mainnet",
    "polygon-mainnet",
    "linea-mainnet",
]

DEFAULT_STABLE_TICKERS = [
    "USDC", "USDT", "DAI", "FRAX", "TUSD", "BUSD", "USDP", "USDD", "GUSD",
    "LUSD", "RSV", "MIM", "USDN", "FEI", "CUSD", "SUSD", "XSGD", "EURS",
    "HUSD", "USDK", "USDS", "USDE", "USDL", "PAI", "YUSD",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Ensure we pick up legacy environment variable aliases."""

        super().model_post_init(__context)

        if not self.covalent_api_key:
            fallback = os.getenv("GOLDRUSH_API_KEY") or os.getenv("COVALENT_KEY")
            if fallback:
                object.__setattr__(self, "covalent_api_key", fallback)

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Balance data provider (Covalent / GoldRush)
    covalent_api_key: str = Field(default="", description="Covalent (GoldRush) API key")
    covalent_base_url: str = Field(
        default="https://api.covalenthq.com/v1",
        description="Base URL for the Covalent balances API",
    )
    covalent_auth_mode: str = Field(
        default="query",
        description="How the API key is sent: 'query' (key= parameter) or 'bearer' (Authorization header)",
    )
    enable_covalent: bool = Field(default=True, description="Enable Covalent provider")

    # Aggregation
    balance_transport: str = Field(
        default="per_chain",
        description="'per_chain' issues one request per network, 'cross_chain' uses the allchains endpoint",
    )
    balance_chains: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_BALANCE_CHAINS),
        description="Ordered network identifiers queried for balances",
    )
    stable_tickers: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_STABLE_TICKERS),
        description="Tickers always classified as stablecoins",
    )

    # Rate Limiting
    request_timeout_seconds: float = Field(default=15, gt=0, description="Request timeout")
    request_pacing_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Pause between consecutive network requests",
    )

    @field_validator("balance_chains", "stable_tickers", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("covalent_auth_mode")
    @classmethod
    def _check_auth_mode(cls, value: str) -> str:
        mode = value.strip().lower()
        if mode not in {"query", "bearer"}:
            raise ValueError("covalent_auth_mode must be 'query' or 'bearer'")
        return mode

    @field_validator("balance_transport")
    @classmethod
    def _check_transport(cls, value: str) -> str:
        transport = value.strip().lower().replace("-", "_")
        if transport not in {"per_chain", "cross_chain"}:
            raise ValueError("balance_transport must be 'per_chain' or 'cross_chain'")
        return transport

    def has_covalent_key(self) -> bool:
        return bool(self.covalent_api_key)


# Global settings instance
settings = Settings()
