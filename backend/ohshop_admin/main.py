"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ohshop_admin.config import get_settings
from ohshop_admin.infrastructure.database import Base, engine
from ohshop_admin.infrastructure.dependencies import get_sse_manager
from ohshop_admin.infrastructure.logging.log_config import setup_logging
from ohshop_admin.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    SQLite files are created on first connect, so nothing happens for them.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith(("postgres://", "postgresql://")):
        return

    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: create tables and the upload directory."""
    settings = get_settings()
    setup_logging()

    # 1. Ensure the PostgreSQL database exists (auto-create if missing)
    await _ensure_database_exists()

    # 2. Create the documents table
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 3. Ensure upload directory exists
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)

    yield

    # Shutdown
    sse = get_sse_manager()
    await sse.shutdown()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    # Uploaded images are served from the same paths their URLs point at
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ohshop_admin.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
