from fastapi import APIRouter
from typing import Dict, Any
from ..config import settings
from ..providers.covalent import CovalentProvider

router = APIRouter()


@router.get("/healthz")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint that verifies provider status"""

    covalent = CovalentProvider()

    provider_status = {"covalent": await covalent.health_check()}

    all_healthy = all(
        status["status"] in ["healthy", "unavailable"]
        for status in provider_status.values()
    )

    available_providers = sum(
        1 for status in provider_status.values()
        if status["status"] == "healthy"
    )

    return {
        "status": "healthy" if all_healthy and available_providers > 0 else "degraded",
        "providers": provider_status,
        "available_providers": available_providers,
        "total_providers": len(provider_status),
        "chains": list(settings.balance_chains),
        "transport": settings.balance_transport,
    }
