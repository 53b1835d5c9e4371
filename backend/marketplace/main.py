"""FastAPI application bootstrap."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from marketplace.api.routers import admin, health, products
from marketplace.core.config import get_settings
from marketplace.core.errors import MarketplaceError, ValidationError
from marketplace.core.logging_config import configure_logging
from marketplace.core.middleware import RequestLoggingMiddleware
from marketplace.db.schema import ensure_schema
from marketplace.db.session import SessionLocal, engine
from marketplace.services.sample_data import seed_sample_listings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Provision the schema on startup and release the pool on shutdown."""
    settings = get_settings()
    if ensure_schema(engine):
        if settings.seed_sample_data:
            with SessionLocal() as db:
                seed_sample_listings(db)
    else:
        logger.warning("Starting without a usable products table; /health reports ready=false")
    yield
    engine.dispose()


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and query strings as 400 ValidationError."""
    fields = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        name = str(loc[-1]) if loc else "request"
        if name not in fields:
            fields.append(name)
    error = ValidationError(fields)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "InternalError", "message": "An unexpected error occurred"},
    )


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and include top-level routers."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)

    logger.info(f"[CORS] Allowed origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router)
    app.include_router(products.router, prefix="/api/products", tags=["products"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    if settings.frontend_dir:
        if Path(settings.frontend_dir).is_dir():
            # mounted last so /api and /health keep precedence
            app.mount(
                "/", StaticFiles(directory=settings.frontend_dir, html=True), name="frontend"
            )
        else:
            logger.warning(f"FRONTEND_DIR {settings.frontend_dir} does not exist; not serving it")

    return app


app = create_app()
