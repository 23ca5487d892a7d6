"""
Anthropic Messages API client
Streams chat completions back as Server-Sent Events

Base: https://api.anthropic.com/v1
Auth: x-api-key + anthropic-version headers
"""
from typing import Any, Dict, Optional

import httpx

from ..base import BaseAPIClient


class AnthropicClient(BaseAPIClient):
    """Anthropic Messages API client"""

    def __init__(self, http_client, api_key: Optional[str] = None, **kwargs):
        super().__init__(provider="anthropic", http_client=http_client, api_key=api_key, **kwargs)

    def _get_base_url(self) -> str:
        return self.settings.anthropic_base_url

    def _get_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "anthropic-version": self.settings.anthropic_version,
            "Content-Type": "application/json",
        }

    async def stream_messages(self, payload: Dict[str, Any]) -> httpx.Response:
        """
        Open a streamed messages call

        The caller's payload is forwarded with ``stream`` forced on.

        Returns:
            Unread httpx response; the caller must close it
        """
        body = {**payload, "stream": True}
        self.logger.info(f"Messages call model={body.get('model')} max_tokens={body.get('max_tokens')}")
        return await self.open_stream("POST", "messages", operation="messages", json=body)
