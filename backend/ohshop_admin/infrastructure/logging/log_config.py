"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(SQLAlchemy statements, httpx/httpcore) can be silenced without
touching migration or discovery output.

Usage:
    from ohshop_admin.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from ohshop_admin.config import get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_migration": [
        "ohshop_admin.migrations",
        "ohshop_admin.application.services.company_backfill_service",
        "ohshop_admin.application.services.migration_history_service",
    ],
    "log_level_discovery": [
        "ohshop_admin.application.services.collection_discovery_service",
    ],
}


def setup_logging() -> None:
    """Configure Python logging levels from application settings."""
    settings = get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # uvicorn installs its own handlers; scripts and tests may not have any
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s, http=%s, uvicorn=%s, migration=%s, discovery=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_uvicorn,
        settings.log_level_migration,
        settings.log_level_discovery,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
