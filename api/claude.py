"""
AI chat relay

Forwards a Messages API payload with streaming forced on and pipes the
upstream Server-Sent-Events bytes to the caller as they arrive.
"""
from typing import Any, AsyncIterator

import httpx
from fastapi import APIRouter, Depends, Response
from fastapi.responses import StreamingResponse

from core.logging import get_logger
from core.utils import truncate
from d0_gateway.providers.anthropic import AnthropicClient

from .dependencies import get_anthropic, read_json_object

logger = get_logger(__name__, domain="api")
router = APIRouter(prefix="/api", tags=["ai"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


async def relay_stream(upstream: httpx.Response) -> AsyncIterator[bytes]:
    """Decoded upstream chunks; the response is closed however iteration ends"""
    try:
        async for chunk in upstream.aiter_bytes():
            yield chunk
    finally:
        await upstream.aclose()


@router.post("/claude")
async def claude_messages(
    payload: dict[str, Any] = Depends(read_json_object),
    anthropic: AnthropicClient = Depends(get_anthropic),
) -> Response:
    """
    Stream a chat completion.

    Upstream errors are relayed with their status and body; on success the
    response is ``text/event-stream`` and ends when upstream ends.
    """
    upstream = await anthropic.stream_messages(payload)

    if not upstream.is_success:
        try:
            body = await upstream.aread()
        finally:
            await upstream.aclose()
        logger.error(f"Messages call returned HTTP {upstream.status_code}: {truncate(body.decode(errors='replace'))}")
        return Response(
            content=body,
            status_code=upstream.status_code,
            media_type=upstream.headers.get("content-type", "application/json"),
        )

    return StreamingResponse(
        relay_stream(upstream),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
