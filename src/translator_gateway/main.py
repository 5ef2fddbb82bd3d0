"""
Main FastAPI application for Translator Gateway.
"""

import argparse
import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog
import uvicorn

from .api.routes import ENDPOINTS, router as api_router
from .config import AppConfig, load_config
from .gateway.azure import AzureTranslatorGateway
from .gateway.base import BaseTranslatorGateway, UpstreamError
from .utils.http_client import create_http_client

logger = structlog.get_logger(__name__)

INVALID_ROUTE_MESSAGE = "Invalid route, Please use endpoints like " + ", ".join(
    f"({endpoint})" for endpoint in ENDPOINTS
)


def configure_logging(debug: bool = False) -> None:
    """Configure stdlib logging and structlog on top of it."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def format_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Flatten request validation errors into field-level entries."""
    errors = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        path = ".".join(str(part) for part in loc[1:] if isinstance(part, str)) or "body"
        errors.append({
            "type": "field",
            "msg": error.get("msg"),
            "path": path,
            "location": location,
            "value": error.get("input"),
        })
    return errors


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the translator gateway on startup and release it on shutdown."""
    config: AppConfig = app.state.config
    owns_gateway = app.state.gateway is None

    logger.info("Starting Translator Gateway", endpoint=config.endpoint, port=config.port)

    if owns_gateway:
        app.state.gateway = AzureTranslatorGateway(config, create_http_client(config))

    try:
        yield
    finally:
        logger.info("Shutting down Translator Gateway")
        if owns_gateway:
            await app.state.gateway.shutdown()
            app.state.gateway = None


def create_app(
    config: Optional[AppConfig] = None,
    gateway: Optional[BaseTranslatorGateway] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Application configuration; loaded from the environment if omitted
        gateway: Translator gateway to use instead of the Azure one

    Returns:
        Configured application
    """
    if config is None:
        config = load_config()
    configure_logging(config.debug)

    app = FastAPI(
        title="Translator Gateway",
        description="Validating JSON proxy in front of the Azure Translator API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if config.enable_docs else None,
        redoc_url="/redoc" if config.enable_docs else None,
        openapi_url="/openapi.json" if config.enable_docs else None,
    )
    app.state.config = config
    app.state.gateway = gateway

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests."""
        start_time = asyncio.get_running_loop().time()
        method = request.method
        path = request.url.path

        logger.info(
            "Request started",
            client_ip=request.client.host if request.client else "unknown",
            method=method,
            path=path,
        )

        response = await call_next(request)
        process_time = asyncio.get_running_loop().time() - start_time

        logger.info(
            "Request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            process_time=f"{process_time:.3f}s",
        )

        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Reject invalid input before anything is sent upstream."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder({"errors": format_validation_errors(exc)}),
        )

    @app.exception_handler(UpstreamError)
    async def upstream_exception_handler(request: Request, exc: UpstreamError):
        """Report translator failures; details were logged by the gateway."""
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": exc.message},
        )

    @app.exception_handler(404)
    @app.exception_handler(405)
    async def not_found_handler(request: Request, exc: Exception):
        """Handle unknown routes, including known paths with the wrong method."""
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": INVALID_ROUTE_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    app.include_router(api_router)

    return app


def __getattr__(name: str):
    # Module-level `app`, built on first access so imports stay side-effect free.
    if name == "app":
        app = globals()["app"] = create_app()
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main():
    """Main entry point for the application."""
    parser = argparse.ArgumentParser(description="Translator Gateway Server")
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        help="Host to bind the server to (overrides config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to run the server on (overrides config)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()

    if args.config:
        os.environ["TRANSLATOR_CONFIG_FILE"] = args.config

    config = load_config(args.config)
    host = args.host or config.host
    port = args.port or config.port

    if args.reload:
        # The reloader imports the app again in its worker process.
        uvicorn.run(
            "translator_gateway.main:app",
            host=host,
            port=port,
            reload=True,
            log_config=None,
            access_log=False,
        )
    else:
        uvicorn.run(
            create_app(config),
            host=host,
            port=port,
            log_config=None,
            access_log=False,
        )


if __name__ == "__main__":
    main()
