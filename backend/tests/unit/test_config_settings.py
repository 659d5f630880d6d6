"""Unit tests for application settings configuration."""

from pathlib import Path

from remoteinbound.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_cache_defaults():
    settings = Settings(_env_file=None)
    assert settings.cache_prefix == "remoteinbound_cache"
    assert settings.cache_version == "1.0.0"
    assert settings.cache_default_ttl_ms == 10 * 60 * 60 * 1000
    assert settings.local_record_prefix == "remoteinbound"


def test_supabase_url_trailing_slash_is_stripped():
    settings = Settings(_env_file=None, supabase_url="https://x.supabase.co/", supabase_service_key="k")
    assert settings.supabase_url == "https://x.supabase.co"
    assert settings.remote_configured


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CACHE_VERSION", "2.0.0")
    monkeypatch.setenv("LOCAL_STORE_QUOTA_BYTES", "1024")
    settings = Settings(_env_file=None)
    assert settings.cache_version == "2.0.0"
    assert settings.local_store_quota_bytes == 1024
