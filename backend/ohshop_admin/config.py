import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _PACKAGE_DIR.parent
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "OH! Shop Admin API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./ohshop_admin.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # File upload & storage (mirrors the bucket layout of the web dashboard)
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_image_size_mb: int = 5

    # Authentication
    jwt_secret_key: str = _DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    password_reset_ttl_minutes: int = 60

    # Collection discovery
    discovery_cache_seconds: int = 300
    discovery_max_concurrency: int = 5
    discovery_schema_detection: bool = True
    discovery_permission_check: bool = True
    discovery_include_test_collections: bool = False
    discovery_exclude_patterns: list[str] = ["__*", "*_temp", "*_cache"]
    collection_catalog_file: str = str(_PACKAGE_DIR / "data" / "collections.yaml")

    # Data migrations
    migration_batch_size: int = 50
    migration_step_delay_seconds: float = 0.5
    migration_history_retention_days: int = 90

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL statements
    log_level_http: str = "WARNING"          # httpx / httpcore
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_migration: str = "INFO"        # company backfill runs
    log_level_discovery: str = "INFO"        # collection discovery

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        if self.jwt_secret_key == _DEFAULT_JWT_SECRET and self.app_env == "production":
            _config_logger.warning(
                "JWT_SECRET_KEY is not configured; tokens are signed with the default key."
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, reads .env once."""
    return Settings()
