import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)

_HOUR_MS = 60 * 60 * 1000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "RemoteInbound API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Hosted database (Supabase / PostgREST)
    supabase_url: str = ""
    supabase_service_key: str = ""
    remote_timeout_seconds: float = 15.0

    # Local persistent key/value store (cache entries + fallback records)
    local_store_url: str = "sqlite:///data/local_store.db"
    local_store_quota_bytes: int = 5 * 1024 * 1024
    local_record_prefix: str = "remoteinbound"

    # Versioned TTL cache
    cache_prefix: str = "remoteinbound_cache"
    cache_version: str = "1.0.0"
    cache_default_ttl_ms: int = 10 * _HOUR_MS

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — local store SQL
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_cache: str = "INFO"            # versioned TTL cache
    log_level_remote: str = "INFO"           # Supabase REST client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalise the hosted database URL so paths can be appended safely."""
        if self.supabase_url.endswith("/"):
            object.__setattr__(self, "supabase_url", self.supabase_url.rstrip("/"))
        if self.supabase_url and not self.supabase_service_key:
            _config_logger.warning(
                "SUPABASE_URL is set but SUPABASE_SERVICE_KEY is empty; "
                "remote writes will be rejected and registrations will fall back locally."
            )

    @property
    def remote_configured(self) -> bool:
        """True when a hosted database endpoint has been configured."""
        return bool(self.supabase_url)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
