"""
Type definitions for gateway domain
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .exceptions import InvalidResponseError


@dataclass
class UpstreamResponse:
    """Status and raw body of one completed upstream call"""

    provider: str
    status_code: int
    content: bytes
    content_type: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parse the body, raising InvalidResponseError when it is not JSON"""
        try:
            return json.loads(self.content)
        except ValueError as e:
            raise InvalidResponseError(self.provider, "JSON", received_data=self.text[:200]) from e
