from .envelope import ToolEnvelope, Source
from .members import Member
from .portfolio import ChainBreakdown, NetworkSkipped, StablecoinBreakdown, TokenBalanceItem
from .responses import MemberResponse, StablePercentResponse

__all__ = [
    "ToolEnvelope",
    "Source",
    "Member",
    "ChainBreakdown",
    "NetworkSkipped",
    "StablecoinBreakdown",
    "TokenBalanceItem",
    "MemberResponse",
    "StablePercentResponse",
]
