"""
Factory for creating D0 Gateway API clients
"""
from typing import Any, Dict, Optional, Type

import httpx

from core.config import PROVIDER_KEY_FIELDS, Settings
from core.logging import get_logger

from .base import BaseAPIClient
from .providers.anthropic import AnthropicClient
from .providers.lightbox import LightBoxClient
from .providers.realestateapi import RealEstateAPIClient
from .providers.regrid import RegridClient
from .providers.rentcast import RentcastClient

# Provider name -> client class; the default registry of every factory
PROVIDER_CLIENTS: Dict[str, Type[BaseAPIClient]] = {
    "lightbox": LightBoxClient,
    "anthropic": AnthropicClient,
    "rentcast": RentcastClient,
    "reapi": RealEstateAPIClient,
    "regrid": RegridClient,
}


def credential_required(provider: str) -> bool:
    """False for providers whose callers may bring their own credential"""
    client_class = PROVIDER_CLIENTS.get(provider)
    return client_class.requires_api_key if client_class else True


class GatewayClientFactory:
    """
    Builds provider clients from injected settings

    One factory lives on the application state; every client it builds
    shares the application's httpx.AsyncClient.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.logger = get_logger("gateway.factory", domain="d0")
        self.settings = settings
        self.http_client = http_client

        # Registry of available providers
        self._providers: Dict[str, Type[BaseAPIClient]] = dict(PROVIDER_CLIENTS)

        # Cache for created instances
        self._client_cache: Dict[str, BaseAPIClient] = {}

    def register_provider(self, provider_name: str, client_class: Type[BaseAPIClient]) -> None:
        """
        Register a new provider with the factory

        Args:
            provider_name: Name of the provider
            client_class: Client class that inherits from BaseAPIClient
        """
        if not issubclass(client_class, BaseAPIClient):
            raise ValueError(f"Client class {client_class} must inherit from BaseAPIClient")

        self._providers[provider_name] = client_class
        self._client_cache.pop(provider_name, None)
        self.logger.info(f"Registered provider: {provider_name}")

    def get_provider_names(self) -> list[str]:
        """Get list of registered provider names"""
        return list(self._providers.keys())

    def create_client(self, provider: str, use_cache: bool = True) -> BaseAPIClient:
        """
        Create or retrieve a client for the specified provider

        Args:
            provider: Provider name (lightbox, anthropic, rentcast, reapi, regrid)
            use_cache: Whether to use cached instances

        Returns:
            API client instance

        Raises:
            ValueError: If provider is not registered
        """
        if provider not in self._providers:
            available = ", ".join(self._providers.keys())
            raise ValueError(f"Unknown provider '{provider}'. Available: {available}")

        if use_cache and provider in self._client_cache:
            return self._client_cache[provider]

        client_class = self._providers[provider]
        client = client_class(http_client=self.http_client, **self._get_provider_config(provider))

        if use_cache:
            self._client_cache[provider] = client

        self.logger.debug(f"Created new client for {provider}")
        return client

    def _get_provider_config(self, provider: str) -> Dict[str, Any]:
        """Constructor arguments for one provider"""
        config: Dict[str, Any] = {
            "api_key": self.settings.get_api_key(provider) if provider in PROVIDER_KEY_FIELDS else None,
            "base_url": self.settings.api_base_urls.get(provider),
            "settings": self.settings,
        }

        if provider == "reapi":
            secret = self.settings.reapi_secret
            config["user_id"] = secret.get_secret_value() if secret else None

        return config

    def provider_status(self) -> Dict[str, bool]:
        """Configured / not-configured flag per registered provider"""
        status = self.settings.provider_status()
        return {name: status.get(name, False) for name in self._providers}

    # Typed accessors used by the routers

    def lightbox(self) -> LightBoxClient:
        return self.create_client("lightbox")

    def anthropic(self) -> AnthropicClient:
        return self.create_client("anthropic")

    def rentcast(self) -> RentcastClient:
        return self.create_client("rentcast")

    def reapi(self) -> RealEstateAPIClient:
        return self.create_client("reapi")

    def regrid(self) -> RegridClient:
        return self.create_client("regrid")


def build_http_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """
    Create the shared outbound client

    Args:
        settings: Supplies the transport timeout
        transport: Replacement transport, used by tests
    """
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout), transport=transport)
