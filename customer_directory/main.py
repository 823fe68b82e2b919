"""
Customer Directory Service
CRUD over customers and their addresses, backed by a single SQLite file.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import subprocess
import os

from shared.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from customer_directory.core_settings import Settings, get_settings
from customer_directory.api.routes import customers_router, addresses_router
from customer_directory.infrastructure.db import Database

SERVICE_DESCRIPTION = "Customer and address management service"
PROJECT_ROOT = Path(__file__).resolve().parent.parent

logger = get_logger(__name__)

def _alembic(settings: Settings, *args: str) -> bool:
    result = subprocess.run(
        ["alembic", *args],
        cwd=PROJECT_ROOT,
        env={**os.environ, "DATABASE_URL": settings.DATABASE_URL},
        capture_output=True,
        text=True,
        check=False
    )
    if result.returncode != 0:
        logger.warning(f"Migration output: {result.stderr}")
    return result.returncode == 0

def run_migrations(settings: Settings, database: Database) -> None:
    """Apply alembic migrations; a failure is logged and startup continues.

    A schema created by ``create_all`` (earlier start without migrations,
    or the seed tool) is stamped at head first so the upgrade does not try
    to recreate its tables.
    """
    try:
        logger.info("Running database migrations")
        if database.has_schema() and not database.has_migration_history():
            logger.info("Stamping existing schema at head")
            if not _alembic(settings, "stamp", "head"):
                return
        if _alembic(settings, "upgrade", "head"):
            logger.info("Database migrations completed")
    except Exception as e:
        logger.error(f"Migration error: {e}")

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(service_name=settings.SERVICE_NAME, level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.SERVICE_NAME} version {settings.SERVICE_VERSION}")

        try:
            database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
            if settings.RUN_MIGRATIONS:
                run_migrations(settings, database)
            database.init_models()
        except Exception as e:
            logger.error(f"DB Error: {e}")
            raise
        app.state.database = database
        logger.info(f"Server Running at http://localhost:{settings.PORT}/")

        yield

        logger.info(f"Shutting down {settings.SERVICE_NAME}")
        database.dispose()

    app = FastAPI(
        title=settings.SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    health_service = ServiceHealth(settings.SERVICE_NAME, settings.SERVICE_VERSION)
    app.include_router(health_service.create_health_router())

    app.include_router(customers_router)
    app.include_router(addresses_router)

    @app.get("/")
    async def root():
        return {
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "status": "running",
            "docs": "/api/docs"
        }

    @app.get("/info")
    async def info():
        return {
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "description": SERVICE_DESCRIPTION,
            "environment": settings.ENVIRONMENT,
            "endpoints": {
                "customers": "/customers",
                "addresses": "/addresses/{customerId}",
                "health": "/health",
                "ready": "/health/ready",
                "live": "/health/live",
                "metrics": "/metrics",
                "docs": "/api/docs"
            }
        }

    return app

app = create_app()

def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
