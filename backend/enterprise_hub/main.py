"""
Main FastAPI application entry point.
"""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from . import __version__
from .config import Settings, settings
from .config.settings import DEFAULT_JWT_SECRET
from .database import engine, init_db

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def check_jwt_secret(cfg: Settings) -> None:
    """Refuse the placeholder signing key outside local SQLite setups.

    Anyone who knows the placeholder can mint write tokens, so a shared
    database with the default key is a startup error; on SQLite it only
    warns.
    """
    if cfg.jwt_secret_key != DEFAULT_JWT_SECRET:
        return
    if not cfg.database_url.startswith("sqlite"):
        raise RuntimeError("JWT_SECRET_KEY must be set when not running on SQLite")
    logger.warning("JWT_SECRET_KEY is the built-in placeholder; set it before deploying")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    configure_logging()
    check_jwt_secret(settings)
    logger.info("Starting KNUST Enterprise Hub API...")
    logger.info("CORS origins: %s", settings.cors_origins_list)

    init_db()
    logger.info("Database initialized")

    if "sqlite" in settings.database_url:
        with engine.connect() as conn:
            journal_mode = conn.execute(text("PRAGMA journal_mode")).scalar()
        if journal_mode != "wal":
            logger.warning(
                "Expected WAL journal mode but got '%s'; concurrent writes may block",
                journal_mode,
            )

    yield

    logger.info("Shutting down KNUST Enterprise Hub API...")


app = FastAPI(
    title="KNUST Enterprise Hub API",
    description="Campus marketplace: student businesses, products, reviews and orders",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "KNUST Enterprise Hub API",
        "version": __version__,
        "docs": "/docs",
        "status": "running",
    }


@app.get("/livez")
async def liveness():
    """Liveness check: zero dependencies, confirms process is responsive."""
    return {"status": "ok"}


@app.get("/readyz")
async def readiness():
    """Readiness check: checks database connectivity off the event loop."""

    def _check_db():
        with engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    try:
        healthy = await asyncio.to_thread(_check_db)
        checks = {"database": "ok" if healthy else "error: unexpected result"}
    except Exception as e:
        logger.warning("Readiness check failed: %s", type(e).__name__)
        healthy = False
        checks = {"database": f"error: {type(e).__name__}"}

    return JSONResponse(
        content={"status": "ok" if healthy else "unhealthy", "checks": checks},
        status_code=200 if healthy else 503,
    )


# Include API routers
from .api.v1.router import router as api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "enterprise_hub.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
