"""SQLAlchemy engine and session factory for the local key/value store.

The key/value contract is synchronous, so this uses the plain (sync)
engine rather than the asyncio extension.
"""

from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from remoteinbound.config import get_settings


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_store_engine(url: str, *, echo: bool = False) -> Engine:
    """Build an engine for ``url``; SQLite connections may cross threads."""
    _ensure_sqlite_dir(url)
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, future=True, connect_args=connect_args)


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return create_store_engine(
        settings.local_store_url,
        echo=(settings.app_env == "development" and settings.log_level_sql == "DEBUG"),
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, class_=Session, expire_on_commit=False)
