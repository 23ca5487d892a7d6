"""
LightBox pass-through endpoints

Parcels, zoning and assessments. Each route validates its input, then
relays the upstream status and body.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from core.utils import parse_coordinates, parse_flag, require_params
from d0_gateway.providers.lightbox import LightBoxClient

from .dependencies import get_lightbox
from .relay import relay

router = APIRouter(prefix="/api/lightbox", tags=["lightbox"])


# Parcels. Fixed paths are registered before /parcels/{parcel_id}.


@router.get("/parcels/geometry")
async def parcels_by_point(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    lightbox: LightBoxClient = Depends(get_lightbox),
) -> Response:
    """Parcel under a map click (50 ft buffer, nearest one)"""
    latitude, longitude = parse_coordinates(lat, lon)
    return relay(await lightbox.parcels_by_point(latitude, longitude))


@router.get("/parcels/address")
async def parcels_by_address(
    text: Optional[str] = None,
    lightbox: LightBoxClient = Depends(get_lightbox),
) -> Response:
    params = require_params("text required", text=text)
    return relay(await lightbox.parcels_by_address(params["text"]))


@router.get("/parcels/{parcel_id}")
async def parcel_by_id(parcel_id: str, lightbox: LightBoxClient = Depends(get_lightbox)) -> Response:
    return relay(await lightbox.parcel_by_id(parcel_id))


@router.get("/parcels/{parcel_id}/adjacent")
@router.get("/adjacent/{parcel_id}")
async def adjacent_parcels(
    parcel_id: str,
    common_ownership: Optional[str] = Query(default=None, alias="commonOwnership"),
    lightbox: LightBoxClient = Depends(get_lightbox),
) -> Response:
    """Neighbouring parcels, optionally only those sharing an owner"""
    flag = parse_flag(common_ownership, "commonOwnership")
    return relay(await lightbox.adjacent_parcels(parcel_id, common_ownership=flag))


# Zoning


@router.get("/zoning/parcel/{parcel_id}")
async def zoning_by_parcel(parcel_id: str, lightbox: LightBoxClient = Depends(get_lightbox)) -> Response:
    """Zoning code, permitted use, setbacks, FAR, height limits, ordinance link"""
    return relay(await lightbox.zoning_by_parcel(parcel_id))


@router.get("/zoning/address")
async def zoning_by_address(
    text: Optional[str] = None,
    lightbox: LightBoxClient = Depends(get_lightbox),
) -> Response:
    params = require_params("text required", text=text)
    return relay(await lightbox.zoning_by_address(params["text"]))


# Assessments


@router.get("/assessment/parcel/{parcel_id}")
async def assessment_by_parcel(parcel_id: str, lightbox: LightBoxClient = Depends(get_lightbox)) -> Response:
    """Owner, tax record, improvement value and sale history"""
    return relay(await lightbox.assessment_by_parcel(parcel_id))


@router.get("/assessment/address")
async def assessment_by_address(
    text: Optional[str] = None,
    lightbox: LightBoxClient = Depends(get_lightbox),
) -> Response:
    params = require_params("text required", text=text)
    return relay(await lightbox.assessment_by_address(params["text"]))


@router.get("/history/{assessment_id}")
async def assessment_history(assessment_id: str, lightbox: LightBoxClient = Depends(get_lightbox)) -> Response:
    return relay(await lightbox.historical_assessed_value(assessment_id))


@router.get("/portfolio/{assessment_id}")
async def owner_portfolio(assessment_id: str, lightbox: LightBoxClient = Depends(get_lightbox)) -> Response:
    return relay(await lightbox.owner_portfolio(assessment_id))
