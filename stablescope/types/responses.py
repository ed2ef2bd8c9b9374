from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field
from .portfolio import StablecoinBreakdown


class StablePercentResponse(BaseModel):
    success: bool = Field(description="Whether request was successful")
    address: Optional[str] = Field(default=None, description="Wallet address that was evaluated")
    percentage: Optional[str] = Field(default=None, description="Stablecoin share, two decimals")
    total_usd: Optional[float] = Field(default=None, description="Total USD value across networks")
    stable_usd: Optional[float] = Field(default=None, description="USD value held in stablecoins")
    breakdown: Optional[StablecoinBreakdown] = Field(default=None, description="Per-network detail")
    error: Optional[str] = Field(default=None, description="Error message if failed")
    warnings: List[str] = Field(default_factory=list, description="Skipped networks and other notes")
    sources: list = Field(default_factory=list, description="Data sources used")


class MemberResponse(BaseModel):
    name: str = Field(description="Community nickname")
    role: str = Field(description="Community role")
    joined: date = Field(description="Date the member joined")
    trillions: int = Field(description="Membership stat")
