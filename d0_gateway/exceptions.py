"""
Gateway-specific exceptions
"""
from core.exceptions import ConfigurationError, ParcelIQError


class GatewayError(ParcelIQError):
    """Base exception for gateway domain"""

    pass


class APIProviderError(GatewayError):
    """Upstream call failed before a usable response was produced"""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int = None,
        response_data: dict = None,
    ):
        self.provider = provider
        self.response_data = response_data
        super().__init__(
            message=f"{provider}: {message}",
            error_code="UPSTREAM_ERROR",
            details={"provider": provider},
            status_code=status_code or 500,
        )


class InvalidResponseError(APIProviderError):
    """Invalid or unexpected response from API provider"""

    def __init__(self, provider: str, expected_format: str, received_data: str = None):
        message = f"Invalid response format, expected {expected_format}"
        super().__init__(provider, message, response_data={"received": received_data})


class ProviderNotConfiguredError(ConfigurationError):
    """Provider credential missing; the call never reaches upstream"""

    def __init__(self, provider: str, setting: str):
        self.provider = provider
        super().__init__(
            message=f"{setting.upper()} not configured",
            setting=setting,
            status_code=503,
        )
        self.details["provider"] = provider
