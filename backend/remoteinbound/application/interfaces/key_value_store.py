"""Abstract interface (port) for a persistent, string-valued key/value store."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Port for durable local storage — implemented in the infrastructure layer.

    All operations are synchronous. The store has a finite capacity; writes
    that would exceed it raise StorageQuotaExceededError.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageQuotaExceededError: If the write would exceed the quota.
            StorageError: On any other storage failure.
        """
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``. Removing an absent key is not an error."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """Return every key currently stored."""
        ...
