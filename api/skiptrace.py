"""
Skip trace pass-through endpoint
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, Response

from core.utils import require_params
from d0_gateway.providers.realestateapi import RealEstateAPIClient

from .dependencies import get_reapi, read_json_object
from .relay import relay

router = APIRouter(prefix="/api", tags=["skiptrace"])


def _text(value: Any) -> Optional[str]:
    """Body fields may arrive as numbers (zip) or null"""
    if value is None:
        return None
    return str(value)


@router.post("/skiptrace")
async def skip_trace(
    body: dict[str, Any] = Depends(read_json_object),
    reapi: RealEstateAPIClient = Depends(get_reapi),
) -> Response:
    """
    Owner phones, emails and mailing address.

    Body: ``{address, city?, state?, zip?, ownerName?}``. ``ownerName`` is
    accepted for the browser's convenience but not forwarded.
    """
    reapi.ensure_configured()
    params = require_params("address required", address=_text(body.get("address")))
    return relay(
        await reapi.skip_trace(
            params["address"],
            city=_text(body.get("city")),
            state=_text(body.get("state")),
            zip_code=_text(body.get("zip")),
        )
    )
