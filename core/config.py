"""
Configuration management using Pydantic Settings
Handles environment variables and validation
"""
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

# Provider name -> settings field holding its credential
PROVIDER_KEY_FIELDS = {
    "lightbox": "lightbox_key",
    "anthropic": "anthropic_key",
    "rentcast": "rentcast_key",
    "reapi": "reapi_key",
    "regrid": "regrid_token",
}


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Environment
    environment: str = Field(default="development")

    # Application
    app_name: str = "ParcelIQ Relay"
    app_version: str = "0.1.0"
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001)

    # Provider credentials - use SecretStr so they never leak into logs or dumps
    lightbox_key: Optional[SecretStr] = Field(default=None)
    anthropic_key: Optional[SecretStr] = Field(default=None)
    rentcast_key: Optional[SecretStr] = Field(default=None)
    reapi_key: Optional[SecretStr] = Field(default=None)
    reapi_secret: Optional[SecretStr] = Field(default=None, description="Sent upstream as x-user-id")
    regrid_token: Optional[SecretStr] = Field(default=None, description="Fallback when callers send no token")

    # Upstream base URLs
    lightbox_base_url: str = Field(default="https://api.lightboxre.com/v1")
    anthropic_base_url: str = Field(default="https://api.anthropic.com/v1")
    rentcast_base_url: str = Field(default="https://api.rentcast.io/v1")
    reapi_base_url: str = Field(default="https://api.realestateapi.com/v2")
    regrid_base_url: str = Field(default="https://app.regrid.com/api/v1")

    anthropic_version: str = Field(default="2023-06-01")

    # HTTP
    request_timeout: float = Field(default=30.0)
    max_body_bytes: int = Field(default=2 * 1024 * 1024)
    cors_origins: List[str] = Field(default=["*"])

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text

    # Monitoring
    prometheus_enabled: bool = Field(default=True)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    @field_validator(
        "lightbox_key", "anthropic_key", "rentcast_key", "reapi_key", "reapi_secret", "regrid_token", mode="before"
    )
    @classmethod
    def blank_secret_is_unset(cls, v):
        # An exported but empty variable means "not configured"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def api_base_urls(self) -> Dict[str, str]:
        """Get base URLs for external APIs"""
        return {
            "lightbox": self.lightbox_base_url,
            "anthropic": self.anthropic_base_url,
            "rentcast": self.rentcast_base_url,
            "reapi": self.reapi_base_url,
            "regrid": self.regrid_base_url,
        }

    def get_api_key(self, provider: str) -> Optional[str]:
        """Get the credential for a provider, or None when it is not configured"""
        if provider not in PROVIDER_KEY_FIELDS:
            raise ValueError(f"Unknown provider '{provider}'")

        secret = getattr(self, PROVIDER_KEY_FIELDS[provider])
        return secret.get_secret_value() if secret else None

    def is_configured(self, provider: str) -> bool:
        return self.get_api_key(provider) is not None

    def provider_status(self) -> Dict[str, bool]:
        """Configured / not-configured flag per provider"""
        return {provider: self.is_configured(provider) for provider in PROVIDER_KEY_FIELDS}

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    def model_dump(self, **kwargs):
        """Override to mask sensitive fields when serializing"""
        data = super().model_dump(**kwargs)

        for field in list(PROVIDER_KEY_FIELDS.values()) + ["reapi_secret"]:
            if field in data and data[field]:
                if hasattr(data[field], "get_secret_value"):
                    value = data[field].get_secret_value()
                else:
                    value = str(data[field])

                # Keep first 4 chars for identification
                if len(value) > 4:
                    data[field] = value[:4] + "*" * (len(value) - 4)
                else:
                    data[field] = "*" * len(value)

        return data


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
