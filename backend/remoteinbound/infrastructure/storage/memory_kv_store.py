"""In-process key/value store, used for tests and ephemeral deployments."""

from remoteinbound.application.interfaces import KeyValueStore
from remoteinbound.domain.exceptions import StorageQuotaExceededError


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed KeyValueStore with the same quota semantics as the SQL store."""

    def __init__(self, *, quota_bytes: int | None = None):
        self._data: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    @staticmethod
    def _size(key: str, value: str) -> int:
        return len(key.encode("utf-8")) + len(value.encode("utf-8"))

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = sum(self._size(k, v) for k, v in self._data.items() if k != key)
            required = used + self._size(key, value)
            if required > self._quota_bytes:
                raise StorageQuotaExceededError(key, required, self._quota_bytes)
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
