"""
Base API client with common functionality for all external API providers
"""
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from core.config import PROVIDER_KEY_FIELDS, Settings, get_settings
from core.logging import get_logger
from core.utils import truncate

from .exceptions import APIProviderError, ProviderNotConfiguredError
from .metrics import GatewayMetrics
from .types import UpstreamResponse


class BaseAPIClient(ABC):
    """Abstract base class for all external API clients"""

    # Providers that authenticate through the caller's own token set this False
    requires_api_key = True

    def __init__(
        self,
        provider: str,
        http_client: httpx.AsyncClient,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.provider = provider
        self.settings = settings or get_settings()
        self.logger = get_logger(f"gateway.{provider}", domain="d0", provider=provider)

        self.api_key = api_key
        self.base_url = base_url or self._get_base_url()

        # Shared across providers, owned by the application lifespan
        self.client = http_client
        self.metrics = GatewayMetrics()

    @abstractmethod
    def _get_base_url(self) -> str:
        """Get the base URL for this provider"""

    @abstractmethod
    def _get_headers(self) -> dict[str, str]:
        """Get authentication headers for this provider"""

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) or not self.requires_api_key

    def ensure_configured(self) -> None:
        """Refuse to call upstream without a credential"""
        if not self.is_configured:
            self.metrics.record_not_configured(self.provider)
            self.logger.warning(f"{self.provider} called but not configured")
            raise ProviderNotConfiguredError(self.provider, PROVIDER_KEY_FIELDS.get(self.provider, self.provider))

    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    async def make_request(
        self, method: str, endpoint: str, operation: Optional[str] = None, **kwargs: Any
    ) -> UpstreamResponse:
        """
        Make an authenticated API request and return the raw outcome

        Non-success statuses are returned, not raised, so callers can relay
        them unchanged.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path relative to the provider base URL
            operation: Metric/log label (defaults to the endpoint)
            **kwargs: Additional arguments passed to httpx

        Returns:
            UpstreamResponse with status code and body bytes

        Raises:
            ProviderNotConfiguredError: When the provider credential is missing
            APIProviderError: When no HTTP response was received
        """
        self.ensure_configured()

        operation = operation or endpoint
        log = self.logger.with_context(operation=operation)
        url = self._build_url(endpoint)
        start_time = time.time()

        try:
            response = await self.client.request(method, url, headers=self._get_headers(), **kwargs)
        except httpx.HTTPError as e:
            self.metrics.record_transport_error(self.provider, operation)
            log.error(f"{self.provider} {operation} transport failure: {e!r}")
            raise APIProviderError(self.provider, str(e) or e.__class__.__name__) from e

        duration = time.time() - start_time
        self.metrics.record_api_call(self.provider, operation, response.status_code, duration)

        upstream = UpstreamResponse(
            provider=self.provider,
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("content-type"),
            headers=dict(response.headers),
        )

        if not upstream.ok:
            log.warning(
                f"{self.provider} {operation} returned HTTP {upstream.status_code}: {truncate(upstream.text)}"
            )

        return upstream

    async def open_stream(
        self, method: str, endpoint: str, operation: Optional[str] = None, **kwargs: Any
    ) -> httpx.Response:
        """
        Send a request and return the response with its body still unread

        The caller owns the response and must close it with ``aclose()``.
        """
        self.ensure_configured()

        operation = operation or endpoint
        log = self.logger.with_context(operation=operation)
        request = self.client.build_request(method, self._build_url(endpoint), headers=self._get_headers(), **kwargs)
        start_time = time.time()

        try:
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            self.metrics.record_transport_error(self.provider, operation)
            log.error(f"{self.provider} {operation} transport failure: {e!r}")
            raise APIProviderError(self.provider, str(e) or e.__class__.__name__) from e

        # Latency here is time to first byte
        self.metrics.record_api_call(self.provider, operation, response.status_code, time.time() - start_time)
        return response
