"""
FastAPI Application
==================

Main FastAPI application serving the web root, the Squire's Page and the
optional /api/ reverse proxy.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Dict, Optional, Tuple, Type

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from escudeiro.config.settings import get_settings, Settings
from escudeiro.config.logging import get_logger
from escudeiro.core.exceptions import (
    ConfigurationError,
    DirectoryListingError,
    EscudeiroError,
    FileNotFoundInRootError,
    PageRenderingError,
    PathOutsideRootError,
    PHPExecutionError,
    ProxyError,
)
from escudeiro.core.filesystem.web_root import WebRoot
from escudeiro.core.php.executor import PHPExecutor
from escudeiro.core.proxy import ReverseProxyClient
from escudeiro.models.schemas import ErrorResponse

logger = get_logger(__name__)

# Exception type -> (status code, error code, user message)
ERROR_RESPONSES: Dict[Type[EscudeiroError], Tuple[int, str, str]] = {
    PathOutsideRootError: (404, "NOT_FOUND", "Not found"),
    FileNotFoundInRootError: (404, "NOT_FOUND", "Not found"),
    DirectoryListingError: (500, "DIRECTORY_LISTING_FAILED", "Failed to list directory"),
    PHPExecutionError: (500, "PHP_EXECUTION_FAILED", "Error executing PHP"),
    ProxyError: (502, "PROXY_ERROR", "Proxy request failed"),
    PageRenderingError: (500, "RENDERING_FAILED", "Failed to render page"),
    ConfigurationError: (503, "NOT_CONFIGURED", "Server is not configured"),
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info("Starting Escudeiro", environment=settings.environment)

    try:
        app.state.web_root = WebRoot.from_setting(settings.web_root)
    except ConfigurationError as e:
        logger.error("Invalid web root configuration", error=str(e))
        raise

    app.state.php_executor = PHPExecutor(settings.php_binary, settings.php_timeout)

    if settings.proxy_enabled:
        app.state.proxy_client = ReverseProxyClient(settings.proxy_target, settings.proxy_timeout)
        logger.info("Proxy enabled", target=settings.proxy_target)
    else:
        app.state.proxy_client = None
        logger.warning("No PROXY_TARGET defined, proxy disabled")

    logger.info(
        "Server ready",
        web_root=str(app.state.web_root.root),
        host=settings.server_host,
        port=settings.server_port,
    )

    try:
        yield
    finally:
        logger.info("Shutting down Escudeiro")
        if app.state.proxy_client is not None:
            try:
                await app.state.proxy_client.close()
                logger.info("Proxy session closed")
            except Exception as e:
                logger.error("Error closing proxy session", error=str(e))
        logger.info("Server shut down")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    error_code: str,
    details: Optional[dict] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    error_response = ErrorResponse(
        error=error,
        error_code=error_code,
        details=details,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach the structured error handlers to the application."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """HTTP exception handler with structured error response."""
        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
            request_id=getattr(request.state, "request_id", None),
        )
        return _error_response(
            request,
            exc.status_code,
            str(exc.detail),
            str(exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(EscudeiroError)
    async def escudeiro_exception_handler(request: Request, exc: EscudeiroError) -> JSONResponse:
        """Translate domain errors into HTTP responses."""
        status_code, error_code, message = ERROR_RESPONSES.get(
            type(exc), (500, "INTERNAL_ERROR", "Internal server error")
        )
        if isinstance(exc, PHPExecutionError):
            message = f"{message}: {exc}"

        log = logger.warning if status_code < 500 else logger.error
        log(
            "Request failed",
            error_code=error_code,
            error_message=str(exc),
            path=request.url.path,
            request_id=getattr(request.state, "request_id", None),
        )

        return _error_response(
            request,
            status_code,
            message,
            error_code,
            details={"message": str(exc)} if settings.debug else None,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        request_id = getattr(request.state, "request_id", None)
        logger.error(
            "Unhandled exception",
            exception=str(exc),
            path=request.url.path,
            request_id=request_id,
            exc_info=True,
        )
        # Served outside the request ID middleware, so set the header here
        return _error_response(
            request,
            500,
            "Internal server error",
            "INTERNAL_ERROR",
            details={"exception": str(exc)} if settings.debug else None,
            headers={"X-Request-ID": request_id} if request_id else None,
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.

    Args:
        settings: Settings to use; defaults to the global settings

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Serve a local web root with directory listings, PHP execution and an API proxy",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore
        """Add request ID to all requests and log them."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request received",
            method=request.method,
            path=request.url.path,
            request_id=request_id,
        )

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app, settings)

    from escudeiro.api.routes.health import router as health_router
    from escudeiro.api.routes.pages import router as pages_router
    from escudeiro.api.routes.files import router as files_router
    from escudeiro.api.routes.listing import router as listing_router

    app.include_router(health_router)
    app.include_router(pages_router)
    app.include_router(files_router)

    if settings.proxy_enabled:
        from escudeiro.api.routes.proxy import router as proxy_router

        app.include_router(proxy_router)

    # Catch-all listing routes go last
    app.include_router(listing_router)

    return app


def run_server(
    host: Optional[str] = None, port: Optional[int] = None, reload: bool = False
) -> None:
    """Run the server with uvicorn; SIGINT and SIGTERM trigger a graceful shutdown."""
    settings = get_settings()
    uvicorn.run(
        "escudeiro.api.main:create_app",
        factory=True,
        host=host or settings.server_host,
        port=port or settings.server_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
        timeout_keep_alive=settings.idle_timeout,
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )


if __name__ == "__main__":
    run_server()
