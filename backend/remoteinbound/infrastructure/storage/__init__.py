from .sqlalchemy_kv_store import SQLAlchemyKeyValueStore
from .memory_kv_store import InMemoryKeyValueStore
from .local_record_store import LocalRecordStore
from .local_session_store import LocalSessionStore

__all__ = [
    "SQLAlchemyKeyValueStore",
    "InMemoryKeyValueStore",
    "LocalRecordStore",
    "LocalSessionStore",
]
