"""
Core utility functions used across domains

Query-string helpers shared by the relay endpoints. Browsers send every
parameter as a string, so presence, numeric and flag checks happen here
before any upstream call is made.
"""
import math
from typing import Dict, Optional

from core.exceptions import ValidationError

TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no"})


def is_blank(value: Optional[str]) -> bool:
    """True for None and whitespace-only strings"""
    return value is None or not str(value).strip()


def require_params(message: Optional[str] = None, **params: Optional[str]) -> Dict[str, str]:
    """
    Ensure every named parameter is present and non-blank

    Args:
        message: Error message to use instead of the generated one
        **params: Parameter name -> raw value

    Returns:
        The parameters, stripped

    Raises:
        ValidationError: If any parameter is missing
    """
    missing = [name for name, value in params.items() if is_blank(value)]
    if missing:
        raise ValidationError(
            message or f"{', '.join(params)} required",
            field=missing[0],
            missing=missing,
        )
    return {name: str(value).strip() for name, value in params.items()}


def parse_float(value: str, name: str) -> float:
    """Parse a numeric query parameter"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number", field=name, value=value)

    # float() accepts "nan" and "inf"
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be a finite number", field=name, value=value)
    return number


def parse_coordinates(lat: Optional[str], lon: Optional[str]) -> tuple[float, float]:
    """Validate a lat/lon pair from the query string"""
    params = require_params("lat and lon required", lat=lat, lon=lon)
    latitude = parse_float(params["lat"], "lat")
    longitude = parse_float(params["lon"], "lon")

    if not -90.0 <= latitude <= 90.0:
        raise ValidationError("lat must be between -90 and 90", field="lat", value=lat)
    if not -180.0 <= longitude <= 180.0:
        raise ValidationError("lon must be between -180 and 180", field="lon", value=lon)

    return latitude, longitude


def parse_flag(value: Optional[str], name: str, default: bool = False) -> bool:
    """
    Parse an optional boolean query flag

    Unrecognized values are rejected instead of silently read as false.
    """
    if is_blank(value):
        return default

    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False

    raise ValidationError(
        f"{name} must be one of: true, false, 1, 0, yes, no",
        field=name,
        value=value,
    )


def truncate(text: str, limit: int = 300) -> str:
    """Shorten upstream bodies for log lines"""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
