from .base import Base
from .session import (
    create_session_factory,
    create_store_engine,
    get_engine,
)
from .models import KeyValueEntryModel

__all__ = [
    "Base",
    "create_session_factory",
    "create_store_engine",
    "get_engine",
    "KeyValueEntryModel",
]
