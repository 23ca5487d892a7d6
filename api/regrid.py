"""
Bounding-box parcel search, capped to a small area
"""
from typing import Optional

from fastapi import APIRouter, Depends, Response

from d0_gateway.providers.regrid import RegridClient, parse_bbox

from .dependencies import get_regrid
from .relay import relay

router = APIRouter(prefix="/api", tags=["regrid"])


@router.get("/parcels-bbox")
async def parcels_in_bbox(
    west: Optional[str] = None,
    south: Optional[str] = None,
    east: Optional[str] = None,
    north: Optional[str] = None,
    token: Optional[str] = None,
    regrid: RegridClient = Depends(get_regrid),
) -> Response:
    """Parcels inside a bbox no wider than 0.05 degrees in either axis"""
    bbox = parse_bbox(west, south, east, north)
    return relay(await regrid.search_bbox(bbox, token=token))
