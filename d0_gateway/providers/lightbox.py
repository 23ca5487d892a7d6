"""
LightBox API client
Parcels, zoning and assessments for US land records

Base: https://api.lightboxre.com/v1
Auth: x-api-key header
"""
from typing import Optional
from urllib.parse import quote

from ..base import BaseAPIClient
from ..types import UpstreamResponse

# Point lookups search this far around the clicked point
POINT_BUFFER_DISTANCE = 50
POINT_BUFFER_UNIT = "ft"


def point_wkt(lat: float, lon: float) -> str:
    """WKT point, longitude first"""
    return f"POINT({lon} {lat})"


class LightBoxClient(BaseAPIClient):
    """LightBox parcels / zoning / assessments client"""

    def __init__(self, http_client, api_key: Optional[str] = None, **kwargs):
        super().__init__(provider="lightbox", http_client=http_client, api_key=api_key, **kwargs)

    def _get_base_url(self) -> str:
        return self.settings.lightbox_base_url

    def _get_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "Accept": "application/json",
        }

    # Parcels

    async def parcels_by_point(self, lat: float, lon: float, limit: int = 1) -> UpstreamResponse:
        """Point-in-polygon parcel search with a small buffer"""
        self.logger.info(f"Parcel lookup lat={lat} lon={lon}")
        return await self.make_request(
            "GET",
            "parcels/us/geometry",
            operation="parcels_geometry",
            params={
                "wkt": point_wkt(lat, lon),
                "bufferDistance": POINT_BUFFER_DISTANCE,
                "bufferUnit": POINT_BUFFER_UNIT,
                "limit": limit,
            },
        )

    async def parcels_by_address(self, text: str) -> UpstreamResponse:
        self.logger.info(f"Parcel lookup address={text}")
        return await self.make_request(
            "GET", "parcels/address", operation="parcels_address", params={"text": text}
        )

    async def parcel_by_id(self, parcel_id: str) -> UpstreamResponse:
        self.logger.info(f"Parcel lookup id={parcel_id}")
        return await self.make_request("GET", f"parcels/us/{_segment(parcel_id)}", operation="parcels_id")

    async def adjacent_parcels(self, parcel_id: str, common_ownership: bool = False) -> UpstreamResponse:
        """Neighbouring parcels, optionally only those with the same owner"""
        self.logger.info(f"Adjacent parcels id={parcel_id} commonOwnership={common_ownership}")
        params = {"commonOwnership": "true"} if common_ownership else None
        return await self.make_request(
            "GET",
            f"parcels/_adjacent/us/{_segment(parcel_id)}",
            operation="parcels_adjacent",
            params=params,
        )

    # Zoning

    async def zoning_by_parcel(self, parcel_id: str) -> UpstreamResponse:
        self.logger.info(f"Zoning lookup parcel={parcel_id}")
        return await self.make_request(
            "GET", f"zoning/_on/parcel/us/{_segment(parcel_id)}", operation="zoning_parcel"
        )

    async def zoning_by_address(self, text: str) -> UpstreamResponse:
        self.logger.info(f"Zoning lookup address={text}")
        return await self.make_request("GET", "zoning/address", operation="zoning_address", params={"text": text})

    # Assessments

    async def assessment_by_parcel(self, parcel_id: str) -> UpstreamResponse:
        self.logger.info(f"Assessment lookup parcel={parcel_id}")
        return await self.make_request(
            "GET", f"assessments/_on/parcel/us/{_segment(parcel_id)}", operation="assessments_parcel"
        )

    async def assessment_by_address(self, text: str) -> UpstreamResponse:
        self.logger.info(f"Assessment lookup address={text}")
        return await self.make_request(
            "GET", "assessments/address", operation="assessments_address", params={"text": text}
        )

    async def historical_assessed_value(self, assessment_id: str) -> UpstreamResponse:
        """Multi-year land / improvement / total assessed values"""
        self.logger.info(f"Assessment history id={assessment_id}")
        return await self.make_request(
            "GET",
            f"assessments/historicalassessedvalue/us/{_segment(assessment_id)}",
            operation="assessments_history",
        )

    async def owner_portfolio(self, assessment_id: str) -> UpstreamResponse:
        """Every property held by the owner of this assessment"""
        self.logger.info(f"Owner portfolio id={assessment_id}")
        return await self.make_request(
            "GET",
            f"assessments/ownerportfolio/us/{_segment(assessment_id)}",
            operation="assessments_portfolio",
        )


def _segment(value: str) -> str:
    """Encode an identifier as exactly one path segment"""
    return quote(str(value), safe="")
