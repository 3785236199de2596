"""
Cuvinte Banatene - Backend Application

FastAPI application serving a dictionary of Banat-dialect Romanian words.
Anonymous visitors browse, search and smile at entries; registered
contributors manage the dictionary once their email address is verified;
admins also manage accounts.

Run:
    python main.py
    # or
    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from config.settings import Settings, get_settings
from core import schemas
from core.database import Database
from routers import (
    admin_router,
    auth_router,
    search_router,
    smiles_router,
    users_router,
    words_router,
)
from services.email import EmailService
from services.seed import seed_database
from utils.exceptions import DictionaryError, error_body
from utils.logging import setup_logging, get_logger
from utils.rate_limit import limiter, rate_limit_exceeded_handler

# Initialize logging
setup_logging()
logger = get_logger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a one-line message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    email_service: Optional[EmailService] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration, defaults to the cached environment settings
        database: Store handle, defaults to one built from DATABASE_URL
        email_service: Mail sender, defaults to one built from SMTP settings
    """
    settings = settings or get_settings()
    database = database or Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    email_service = email_service or EmailService.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: create tables and seed an empty store.
        Shutdown: close pooled connections.
        """
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Debug mode: {settings.DEBUG}")

        await database.create_all()
        if settings.SEED_ON_STARTUP:
            await seed_database(database, settings)

        yield

        logger.info("Shutting down application")
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Dicționar de cuvinte din graiul bănățean",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.database = database
    app.state.email_service = email_service
    app.state.limiter = limiter

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(DictionaryError)
    async def dictionary_exception_handler(request: Request, exc: DictionaryError):
        if exc.status_code >= 500:
            logger.error(f"DictionaryError: {exc.message}", extra={"details": exc.details})
        else:
            logger.info(
                f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}",
                extra={"details": exc.details},
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.info(f"validation on {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=400, content=error_body(message, 400))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message, exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=error_body("Something went wrong!", 500))

    # =========================================================================
    # Routers
    # =========================================================================

    for router in (
        auth_router,
        words_router,
        search_router,
        smiles_router,
        admin_router,
        users_router,
    ):
        app.include_router(router, prefix=settings.API_PREFIX)

    # =========================================================================
    # Health Check Endpoints
    # =========================================================================

    @app.get("/", tags=["Health"])
    async def root():
        """Basic liveness probe."""
        return {
            "status": "OK",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    @app.get("/health", tags=["Health"], response_model=schemas.HealthResponse)
    async def health_check():
        """
        Readiness probe.

        Reports "degraded" when the database does not answer a trivial query.
        """
        db_healthy = await database.check_health()
        return {
            "status": "OK" if db_healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": db_healthy,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
