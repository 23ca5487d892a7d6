"""
Rentcast pass-through endpoints: comparable sales and for-sale listings
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from core.utils import parse_coordinates, require_params
from d0_gateway.providers.rentcast import RentcastClient

from .dependencies import get_rentcast
from .relay import relay

router = APIRouter(prefix="/api", tags=["rentcast"])


@router.get("/comps")
async def comparable_sales(
    address: Optional[str] = None,
    bedrooms: Optional[str] = None,
    bathrooms: Optional[str] = None,
    square_footage: Optional[str] = Query(default=None, alias="squareFootage"),
    property_type: Optional[str] = Query(default=None, alias="propertyType"),
    rentcast: RentcastClient = Depends(get_rentcast),
) -> Response:
    """Value estimate with the five closest comparable sales"""
    rentcast.ensure_configured()
    params = require_params("address required", address=address)
    return relay(
        await rentcast.value_estimate(
            params["address"],
            bedrooms=bedrooms,
            bathrooms=bathrooms,
            square_footage=square_footage,
            property_type=property_type,
        )
    )


@router.get("/listings")
async def sale_listings(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    radius: Optional[str] = None,
    limit: Optional[str] = None,
    property_type: Optional[str] = Query(default=None, alias="propertyType"),
    rentcast: RentcastClient = Depends(get_rentcast),
) -> Response:
    """Active for-sale listings near a point (radius in miles)"""
    rentcast.ensure_configured()
    latitude, longitude = parse_coordinates(lat, lon)
    return relay(
        await rentcast.sale_listings(latitude, longitude, radius=radius, limit=limit, property_type=property_type)
    )
