"""
FastAPI endpoint for the combined enrichment
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_lightbox
from core.utils import parse_coordinates
from d0_gateway.providers.lightbox import LightBoxClient

from .coordinator import EnrichmentCoordinator
from .models import EnrichmentRequest

router = APIRouter(prefix="/api", tags=["enrichment"])


@router.get("/enrich")
async def enrich_point(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    lightbox: LightBoxClient = Depends(get_lightbox),
) -> JSONResponse:
    """
    Parcel + zoning + assessment for one map click.

    Returns 200 whenever the input is valid; check ``errors`` for stages
    that did not return data.
    """
    latitude, longitude = parse_coordinates(lat, lon)
    result = await EnrichmentCoordinator(lightbox).enrich(EnrichmentRequest(lat=latitude, lon=longitude))
    return JSONResponse(content=result.to_dict())
