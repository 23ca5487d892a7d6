"""
Rentcast API client
Automated valuation with comparable sales, and active for-sale listings

Base: https://api.rentcast.io/v1
Auth: X-Api-Key header
"""
from typing import Dict, Optional

from ..base import BaseAPIClient
from ..types import UpstreamResponse

COMP_COUNT = 5
DEFAULT_LISTING_RADIUS = "1"
DEFAULT_LISTING_LIMIT = "50"


class RentcastClient(BaseAPIClient):
    """Rentcast valuation and listings client"""

    def __init__(self, http_client, api_key: Optional[str] = None, **kwargs):
        super().__init__(provider="rentcast", http_client=http_client, api_key=api_key, **kwargs)

    def _get_base_url(self) -> str:
        return self.settings.rentcast_base_url

    def _get_headers(self) -> Dict[str, str]:
        return {
            "X-Api-Key": self.api_key or "",
            "Accept": "application/json",
        }

    async def value_estimate(
        self,
        address: str,
        bedrooms: Optional[str] = None,
        bathrooms: Optional[str] = None,
        square_footage: Optional[str] = None,
        property_type: Optional[str] = None,
    ) -> UpstreamResponse:
        """AVM value estimate with the closest comparable sales"""
        params = {"address": address, "compCount": COMP_COUNT}
        optional = {
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "squareFootage": square_footage,
            "propertyType": property_type,
        }
        params.update({name: value for name, value in optional.items() if value})

        self.logger.info(f"Comps lookup address={address}")
        return await self.make_request("GET", "avm/value", operation="avm_value", params=params)

    async def sale_listings(
        self,
        lat: float,
        lon: float,
        radius: Optional[str] = None,
        limit: Optional[str] = None,
        property_type: Optional[str] = None,
    ) -> UpstreamResponse:
        """Active for-sale listings within ``radius`` miles of a point"""
        params = {
            "latitude": lat,
            "longitude": lon,
            "radius": radius or DEFAULT_LISTING_RADIUS,
            "limit": limit or DEFAULT_LISTING_LIMIT,
            "status": "Active",
        }
        if property_type:
            params["propertyType"] = property_type

        self.logger.info(f"Listings lookup lat={lat} lon={lon} radius={params['radius']}mi")
        return await self.make_request("GET", "listings/sale", operation="listings_sale", params=params)
