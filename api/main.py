"""FastAPI application factory and main entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from api.config import get_settings
from api.exceptions import BenchmarkError
from api.logging import setup_logging
from api.routers.health import API_VERSION
from api.schemas.responses import error_body

setup_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup configuration and shutdown."""
    settings = get_settings()
    logger.info(
        "api_starting",
        env=settings.env,
        version=API_VERSION,
        relays=settings.relay_urls,
        fetch_timeout_seconds=settings.fetch_timeout_seconds,
    )
    yield
    logger.info("api_stopping")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    show_docs = settings.debug or not settings.is_production

    app = FastAPI(
        title="Website Benchmark Analyzer",
        description="Score websites for SEO, security, accessibility and performance",
        version=API_VERSION,
        docs_url="/docs" if show_docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if show_docs else None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    from api.middleware import LoggingMiddleware, RequestIDMiddleware

    # Last added runs first: request ID is bound before the request is logged
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )

    register_exception_handlers(app)

    from api.routers import health, v1

    app.include_router(health.router, prefix="/api")
    app.include_router(v1.router, prefix="/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure in the shared error envelope."""

    @app.exception_handler(BenchmarkError)
    async def benchmark_error_handler(request: Request, exc: BenchmarkError) -> ORJSONResponse:
        logger.warning(
            "request_failed",
            error_code=exc.code,
            message=exc.message,
            path=request.url.path,
        )
        return ORJSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.code, exc.message, details=exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Report the first invalid field; the full list goes in details."""
        errors = jsonable_encoder(exc.errors())
        first = errors[0] if errors else {}
        # Drop the leading "body" segment of the location
        field = ".".join(str(part) for part in first.get("loc", [])[1:]) or None

        logger.warning("request_invalid", path=request.url.path, field=field)
        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body(
                "validation_error",
                first.get("msg", "Validation error"),
                field=field,
                details={"errors": errors},
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            "request_crashed",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
        )
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("internal_error", "An unexpected error occurred"),
        )


app = create_app()
