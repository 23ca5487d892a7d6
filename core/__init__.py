"""Core utilities and configuration for ParcelIQ Relay"""
from core.config import settings
from core.exceptions import ConfigurationError, ParcelIQError, ValidationError
from core.logging import get_logger

__all__ = [
    "settings",
    "get_logger",
    "ParcelIQError",
    "ValidationError",
    "ConfigurationError",
]
