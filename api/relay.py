"""
Relay convention shared by every pass-through endpoint

Upstream success: the JSON body is re-emitted with 200.
Upstream failure status: status and body bytes are passed through untouched.
Transport or parse failures never reach here; they surface as gateway
exceptions and become 500s in the application exception handler.
"""
from fastapi import Response
from fastapi.responses import JSONResponse

from d0_gateway.types import UpstreamResponse


def relay(upstream: UpstreamResponse) -> Response:
    if upstream.ok:
        return JSONResponse(content=upstream.json())

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.content_type or "application/json",
    )
