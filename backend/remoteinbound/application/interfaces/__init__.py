from .key_value_store import KeyValueStore
from .remote_data_service import RemoteDataService
from .record_store import RecordStore
from .session_establisher import SessionEstablisher

__all__ = [
    "KeyValueStore",
    "RemoteDataService",
    "RecordStore",
    "SessionEstablisher",
]
