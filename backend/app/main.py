import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.routes_health import router as health_router
from app.api.v1.routes_scan import router as scan_router
from app.core.config import Settings, get_settings
from app.core.errors import InternalScanError, ScanError
from app.core.logging import configure_logging
from app.services.scan.relay import ScanRelay
from app.services.scan.shodan_client import ShodanHostClient

logger = logging.getLogger(__name__)


def build_relay(settings: Settings) -> ScanRelay:
    client = ShodanHostClient(
        api_key=settings.SHODAN_API_KEY,
        base_url=settings.SHODAN_BASE_URL,
        timeout=settings.SHODAN_TIMEOUT_SECONDS,
    )
    return ScanRelay(client, allowlist=settings.scan_allowlist)


def create_app(settings: Optional[Settings] = None, relay: Optional[ScanRelay] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    if not settings.SHODAN_API_KEY:
        logger.error("Missing SHODAN_API_KEY in env")
        raise SystemExit(1)

    app = FastAPI(
        title="Shodan Scan Relay",
        version="0.1.0",
        description="Looks up an IPv4 address on Shodan and returns a simplified host record.",
    )
    app.state.settings = settings
    app.state.relay = relay or build_relay(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ScanError)
    async def scan_error_handler(request: Request, exc: ScanError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed request body on %s", request.url.path)
        return JSONResponse(
            status_code=400,
            content={"error": "Request body must be a JSON object like {\"target\": \"45.33.12.101\"}"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        error = InternalScanError(str(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.get("/", tags=["root"])
    async def root() -> dict:
        return {
            "status": "ok",
            "service": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
        }

    app.include_router(health_router, prefix="/api")
    app.include_router(scan_router, prefix="/api")

    return app
