"""
Health check endpoint
"""
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from core.config import Settings
from d0_gateway.factory import GatewayClientFactory

from .dependencies import get_app_settings, get_gateway

router = APIRouter()

# Health keys as the browser client reads them
HEALTH_KEYS = {
    "lightbox": "lightbox",
    "anthropic": "claude",
    "rentcast": "rentcast",
    "reapi": "reapi",
    "regrid": "regrid",
}


@router.get("/")
@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    gateway: GatewayClientFactory = Depends(get_gateway),
) -> dict[str, Any]:
    """
    Process status and which providers have credentials.

    Always 200: a missing credential only disables its own endpoints.
    """
    providers = gateway.provider_status()

    health_data: dict[str, Any] = {
        "status": f"{settings.app_name} running",
        "version": settings.app_version,
        "environment": settings.environment,
    }
    for provider, key in HEALTH_KEYS.items():
        health_data[key] = providers.get(provider, False)
    health_data["time"] = datetime.now(timezone.utc).isoformat()

    return health_data
