"""
API dependencies
"""
import json
from typing import Any

from fastapi import Depends, Request

from core.config import Settings
from core.exceptions import PayloadTooLargeError, ValidationError
from d0_gateway.factory import GatewayClientFactory
from d0_gateway.providers import (
    AnthropicClient,
    LightBoxClient,
    RealEstateAPIClient,
    RegridClient,
    RentcastClient,
)


def get_app_settings(request: Request) -> Settings:
    """Settings injected at application start"""
    return request.app.state.settings


def get_gateway(request: Request) -> GatewayClientFactory:
    """Gateway factory bound to the shared outbound client"""
    return request.app.state.gateway


def get_lightbox(gateway: GatewayClientFactory = Depends(get_gateway)) -> LightBoxClient:
    return gateway.lightbox()


def get_anthropic(gateway: GatewayClientFactory = Depends(get_gateway)) -> AnthropicClient:
    return gateway.anthropic()


def get_rentcast(gateway: GatewayClientFactory = Depends(get_gateway)) -> RentcastClient:
    return gateway.rentcast()


def get_reapi(gateway: GatewayClientFactory = Depends(get_gateway)) -> RealEstateAPIClient:
    return gateway.reapi()


def get_regrid(gateway: GatewayClientFactory = Depends(get_gateway)) -> RegridClient:
    return gateway.regrid()


async def read_json_object(request: Request) -> dict[str, Any]:
    """
    Read a JSON object body, enforcing the body size cap

    Raises:
        PayloadTooLargeError: Body above ``max_body_bytes``
        ValidationError: Body missing, not JSON, or not an object
    """
    limit = request.app.state.settings.max_body_bytes
    body = await request.body()
    if len(body) > limit:
        raise PayloadTooLargeError(limit)

    if not body.strip():
        return {}

    try:
        data = json.loads(body)
    except ValueError:
        raise ValidationError("Request body must be valid JSON")

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
