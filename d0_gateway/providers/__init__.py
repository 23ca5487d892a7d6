"""
Provider-specific API clients for D0 Gateway
"""

from .anthropic import AnthropicClient
from .lightbox import LightBoxClient
from .realestateapi import RealEstateAPIClient
from .regrid import RegridClient
from .rentcast import RentcastClient

__all__ = [
    "AnthropicClient",
    "LightBoxClient",
    "RealEstateAPIClient",
    "RegridClient",
    "RentcastClient",
]
