"""
RealEstateAPI client
Skip trace: owner phones, emails and mailing address for a property

Base: https://api.realestateapi.com/v2
Auth: x-api-key + x-user-id headers
"""
from typing import Any, Dict, Optional

from ..base import BaseAPIClient
from ..types import UpstreamResponse


def build_skip_trace_payload(
    address: str,
    city: Optional[str] = None,
    state: Optional[str] = None,
    zip_code: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the SkipTrace body

    The provider rejects empty strings, so only supplied fields are sent.
    ZIP+4 values are cut to the 5-digit ZIP.
    """
    payload: Dict[str, Any] = {"address": address.strip()}

    if city and city.strip():
        payload["city"] = city.strip()
    if state and state.strip():
        payload["state"] = state.strip()
    if zip_code and str(zip_code).strip():
        payload["zip"] = str(zip_code).strip().split("-")[0]

    return payload


class RealEstateAPIClient(BaseAPIClient):
    """RealEstateAPI skip trace client"""

    def __init__(self, http_client, api_key: Optional[str] = None, user_id: Optional[str] = None, **kwargs):
        self.user_id = user_id
        super().__init__(provider="reapi", http_client=http_client, api_key=api_key, **kwargs)

    def _get_base_url(self) -> str:
        return self.settings.reapi_base_url

    def _get_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "x-user-id": self.user_id or "",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def skip_trace(
        self,
        address: str,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zip_code: Optional[str] = None,
    ) -> UpstreamResponse:
        """Owner contact lookup for one address"""
        payload = build_skip_trace_payload(address, city, state, zip_code)
        self.logger.info(f"Skip trace {payload['address']}, {payload.get('city', '')} {payload.get('state', '')}")
        return await self.make_request("POST", "SkipTrace", operation="skip_trace", json=payload)
