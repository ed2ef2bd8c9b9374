import logging

from fastapi import APIRouter, HTTPException, Query
from ..errors import InvalidInputError
from ..types import StablePercentResponse
from ..tools.stablecoins import get_stable_breakdown
from ..services.address import is_valid_wallet_address, normalize_address

router = APIRouter(prefix="/tools")
_logger = logging.getLogger(__name__)


@router.get("/stable-percent")
async def get_stable_percent_endpoint(
    address: str = Query("", description="Wallet address or ENS name to analyze"),
) -> StablePercentResponse:
    """Share of the wallet's USD value held in stablecoins across configured networks"""

    try:
        wallet = normalize_address(address)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    if not is_valid_wallet_address(wallet):
        raise HTTPException(status_code=400, detail="Invalid wallet address format")

    try:
        result = await get_stable_breakdown(wallet)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        _logger.exception("Stablecoin aggregation failed")
        raise HTTPException(status_code=500, detail=f"Failed to compute stablecoin share: {str(e)}")

    breakdown = result.data
    return StablePercentResponse(
        success=True,
        address=breakdown.address,
        percentage=breakdown.formatted_percentage(),
        total_usd=round(breakdown.total, 2),
        stable_usd=round(breakdown.stable, 2),
        breakdown=breakdown,
        warnings=result.warnings,
        sources=[source.model_dump() for source in result.sources],
    )
