"""
Main FastAPI application entry point
"""
import time
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import PROVIDER_KEY_FIELDS, Settings, get_settings
from core.exceptions import ParcelIQError, PayloadTooLargeError
from core.logging import get_logger
from core.metrics import get_metrics_response, metrics
from d0_gateway.factory import GatewayClientFactory, build_http_client, credential_required

logger = get_logger(__name__)


def _log_provider_status(settings: Settings) -> None:
    """Warn once per missing credential; the process still serves everything else"""
    for provider, configured in settings.provider_status().items():
        if configured:
            continue
        setting = PROVIDER_KEY_FIELDS[provider].upper()
        if credential_required(provider):
            logger.warning(f"{setting} not set, {provider} endpoints will return 503")
        else:
            logger.info(f"{setting} not set, {provider} callers must supply their own")

    if settings.is_configured("reapi") and not settings.reapi_secret:
        logger.warning("REAPI_SECRET not set, skip trace will send an empty x-user-id")


def _route_domain(path: str) -> str:
    """/api/lightbox/parcels/1 -> lightbox"""
    parts = [part for part in path.split("/") if part]
    if len(parts) >= 2 and parts[0] == "api":
        return parts[1]
    return "core"


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the relay application

    Args:
        settings: Settings to run with, defaults to the process settings
        transport: Outbound transport override (tests pass httpx.MockTransport)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http_client = build_http_client(settings, transport=transport)
        app.state.http_client = http_client
        app.state.gateway = GatewayClientFactory(settings, http_client)

        logger.info(
            f"Starting {settings.app_name} version={settings.app_version} "
            f"environment={settings.environment} port={settings.port}"
        )
        _log_provider_status(settings)
        try:
            yield
        finally:
            await http_client.aclose()
            logger.info(f"Shutting down {settings.app_name}")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def track_requests(request: Request, call_next):
        """Track all HTTP requests for metrics and refuse oversized bodies early"""
        start_time = time.time()

        # Skip metrics endpoint to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.max_body_bytes:
            exc = PayloadTooLargeError(settings.max_body_bytes)
            response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
        else:
            response = await call_next(request)

        metrics.track_request(
            method=request.method,
            endpoint=request.url.path,
            status=response.status_code,
            duration=time.time() - start_time,
        )
        return response

    # Exception handlers
    @app.exception_handler(ParcelIQError)
    async def parceliq_error_handler(request: Request, exc: ParcelIQError):
        """Handle relay errors with their own status"""
        log = logger.with_context(path=request.url.path)
        if exc.status_code >= 500:
            log.error(f"ParcelIQ error - error_code: {exc.error_code}, details: {exc.details}")
        else:
            log.info(f"Rejected request - error_code: {exc.error_code}")
        metrics.track_error(error_type=exc.error_code, domain=_route_domain(request.url.path))
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        logger.exception(f"Unexpected error - path: {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred", "error_code": "INTERNAL_ERROR"},
        )

    # Custom metrics endpoint
    @app.get("/metrics", include_in_schema=False)
    async def prometheus_metrics():
        """Expose metrics for Prometheus scraping"""
        if not settings.prometheus_enabled:
            return JSONResponse(status_code=404, content={"error": "Metrics not enabled"})

        metrics_data, content_type = get_metrics_response()
        return Response(content=metrics_data, media_type=content_type)

    # Import and register routers
    from api.claude import router as claude_router
    from api.health import router as health_router
    from api.lightbox import router as lightbox_router
    from api.regrid import router as regrid_router
    from api.rentcast import router as rentcast_router
    from api.skiptrace import router as skiptrace_router
    from d4_enrichment.api import router as enrichment_router

    # Register health router (no prefix needed as it defines its own paths)
    app.include_router(health_router, tags=["health"])

    # Routers carry their own prefixes
    app.include_router(lightbox_router)
    app.include_router(enrichment_router)
    app.include_router(claude_router)
    app.include_router(rentcast_router)
    app.include_router(skiptrace_router)
    app.include_router(regrid_router)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
