"""
D0 Gateway - Shared outbound access to every upstream provider

Holds provider credentials server-side, attaches auth headers, and returns
upstream status and body untouched for relaying. No caching, rate limiting
or retries.
"""

from .base import BaseAPIClient
from .exceptions import APIProviderError, GatewayError, InvalidResponseError, ProviderNotConfiguredError
from .factory import GatewayClientFactory, build_http_client
from .metrics import GatewayMetrics
from .types import UpstreamResponse

__all__ = [
    "BaseAPIClient",
    "GatewayClientFactory",
    "GatewayMetrics",
    "build_http_client",
    # Exceptions
    "GatewayError",
    "APIProviderError",
    "InvalidResponseError",
    "ProviderNotConfiguredError",
    # Types
    "UpstreamResponse",
]
