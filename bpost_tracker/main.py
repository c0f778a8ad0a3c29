"""FastAPI application entry point."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bpost_tracker import __version__
from bpost_tracker.api.routes import og_image, page, proxy
from bpost_tracker.config import Settings
from bpost_tracker.core.request_id import get_request_id
from bpost_tracker.middleware.logging import RequestLoggingMiddleware
from bpost_tracker.services.assets import StaticAssetStore
from bpost_tracker.utils.exceptions import AssetNotFoundError, ProxyError, TrackerException
from bpost_tracker.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """Strict proxy errors: JSON body, status from the exception, open CORS."""
    logger.info(
        f"Proxy request rejected: {exc.message}",
        extra={"request_id": get_request_id(), "status_code": exc.status_code, "method": request.method},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers={"Access-Control-Allow-Origin": "*"},
    )


async def asset_not_found_handler(request: Request, exc: AssetNotFoundError) -> JSONResponse:
    """Handle a missing base document."""
    logger.error(f"Asset missing: {exc}", extra={"request_id": get_request_id(), "path": request.url.path})
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


async def tracker_exception_handler(request: Request, exc: TrackerException) -> JSONResponse:
    """Handle any other application exception."""
    logger.error(
        f"Exception: {exc}",
        extra={"request_id": get_request_id(), "path": request.url.path},
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Routing is by exact path: ``/proxy``, ``/og.svg``, ``/`` and
    ``/index.html`` are handled here, every other path is served from the
    static asset directory.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="bpost tracker",
        description="CORS proxy, social previews and static assets for the bpost tracker",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.assets = StaticAssetStore(settings.static_dir, settings.index_document)

    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.add_exception_handler(AssetNotFoundError, asset_not_found_handler)
    app.add_exception_handler(TrackerException, tracker_exception_handler)

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(proxy.router)
    app.include_router(og_image.router)
    app.include_router(page.router)

    # Fallback to static assets; must stay last.
    app.mount("/", app.state.assets.as_app(), name="static")

    @app.on_event("startup")
    async def startup_event():
        """Application startup event."""
        logger.info("bpost tracker starting up...")
        logger.info(f"Proxy origin: {settings.allowed_origin}")
        logger.info(f"Static assets: {settings.static_dir}")

    return app


app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
