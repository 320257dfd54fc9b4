"""Unit tests for application settings configuration."""

from pathlib import Path

from ohshop_admin.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_collection_catalog_ships_with_the_package():
    """The default catalog file points inside the package and exists."""
    catalog = Path(Settings().collection_catalog_file)
    assert catalog.name == "collections.yaml"
    assert catalog.is_file()


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MIGRATION_BATCH_SIZE", "25")
    monkeypatch.setenv("DISCOVERY_EXCLUDE_PATTERNS", '["tmp_*"]')
    settings = Settings()
    assert settings.migration_batch_size == 25
    assert settings.discovery_exclude_patterns == ["tmp_*"]
