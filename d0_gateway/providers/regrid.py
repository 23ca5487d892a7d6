"""
Regrid API client
Parcel search inside a small bounding box, for map filter layers

Base: https://app.regrid.com/api/v1
Auth: token query parameter
"""
from dataclasses import dataclass
from typing import Dict, Optional

from core.exceptions import ValidationError
from core.utils import parse_float, require_params

from ..base import BaseAPIClient
from ..types import UpstreamResponse

# Bounding boxes wider than this in either axis are refused (result size and cost)
MAX_BBOX_SPAN_DEGREES = 0.05
SEARCH_LIMIT = 500


@dataclass(frozen=True)
class BoundingBox:
    west: float
    south: float
    east: float
    north: float

    @property
    def lat_span(self) -> float:
        return self.north - self.south

    @property
    def lon_span(self) -> float:
        return self.east - self.west

    def to_param(self) -> str:
        return f"{self.west},{self.south},{self.east},{self.north}"


def parse_bbox(
    west: Optional[str], south: Optional[str], east: Optional[str], north: Optional[str]
) -> BoundingBox:
    """
    Validate the four bbox edges

    Raises:
        ValidationError: Missing or non-numeric edge, or a span above the cap
    """
    edges = require_params("west, south, east, north required", west=west, south=south, east=east, north=north)
    bbox = BoundingBox(**{name: parse_float(value, name) for name, value in edges.items()})

    if bbox.lat_span > MAX_BBOX_SPAN_DEGREES or bbox.lon_span > MAX_BBOX_SPAN_DEGREES:
        raise ValidationError(
            "Bbox too large, zoom in further",
            field="bbox",
            lat_span=round(bbox.lat_span, 6),
            lon_span=round(bbox.lon_span, 6),
            max_span=MAX_BBOX_SPAN_DEGREES,
        )
    return bbox


class RegridClient(BaseAPIClient):
    """Regrid parcel search client"""

    requires_api_key = False

    def __init__(self, http_client, api_key: Optional[str] = None, **kwargs):
        super().__init__(provider="regrid", http_client=http_client, api_key=api_key, **kwargs)

    def _get_base_url(self) -> str:
        return self.settings.regrid_base_url

    def _get_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def resolve_token(self, token: Optional[str]) -> str:
        """Caller's token, else the configured one"""
        if token and token.strip():
            return token.strip()
        if self.api_key:
            return self.api_key
        raise ValidationError("west, south, east, north, token required", field="token")

    async def search_bbox(self, bbox: BoundingBox, token: Optional[str] = None) -> UpstreamResponse:
        params = {
            "bbox": bbox.to_param(),
            "limit": SEARCH_LIMIT,
            "token": self.resolve_token(token),
        }
        self.logger.info(
            f"BBox search {bbox.west:.5f},{bbox.south:.5f} -> {bbox.east:.5f},{bbox.north:.5f}"
        )
        return await self.make_request("GET", "search.json", operation="search_bbox", params=params)
