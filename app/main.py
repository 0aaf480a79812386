# app/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.core.config import get_settings
from app.core.errors import CatalogError, catalog_error_handler, validation_error_handler
from app.core.logging_config import setup_logging, shutdown_logging
from app.database import check_connection, run_migrations

# Routers
from app.routers.products import router as products_router
from app.routers.subscriptions import router as subscriptions_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Configure logging.
      - Verify DB connectivity.
      - Apply pending migrations (RUN_MIGRATIONS=true).

    Shutdown:
      - Flush and close log handlers.
    """
    logger = setup_logging(settings)
    logger.info("Startup: connecting to database...")
    try:
        check_connection()
        if settings.RUN_MIGRATIONS:
            run_migrations()
        logger.info("Startup: DB connection OK, schema up to date.")
    except Exception as e:
        logger.error(f"Startup: DB initialisation FAILED: {e}")
        shutdown_logging()
        raise

    yield

    logger.info("Shutdown: closing log handlers.")
    shutdown_logging()


app = FastAPI(
    title=settings.PROJECT_NAME or "Catalog Service",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(CatalogError, catalog_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# Versioned API prefix, e.g. /api/v1
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(subscriptions_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "catalog-service"}


def run() -> None:
    """Console entry point: serve the app on HOST:PORT with uvicorn."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
