"""Versioned TTL cache layered over a persistent key/value store.

Every entry is stored as a JSON envelope::

    {"data": ..., "timestamp": <epoch ms>, "version": "1.0.0", "customTTL": <ms>}

``customTTL`` is only present when the writer asked for a per-entry TTL.
An entry is valid while its version matches the active version and
``now - timestamp <= customTTL or default TTL``. Reading an invalid entry
evicts it and behaves as a miss. The cache is best-effort: no method raises.
"""

import json
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from remoteinbound.application.interfaces import KeyValueStore
from remoteinbound.domain.exceptions import CacheError

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

_MINUTE_MS = 60 * 1000
_HOUR_MS = 60 * _MINUTE_MS


class CacheKeys:
    """Logical cache keys for the conference collections."""

    SESSIONS = "sessions"
    SPEAKERS = "speakers"
    EVENTS = "events"
    USER_PREFERENCES = "user_preferences"


class CacheTTL:
    """Standard expiry windows in milliseconds."""

    SHORT = 30 * _MINUTE_MS
    MEDIUM = 2 * _HOUR_MS
    LONG = 10 * _HOUR_MS
    DAY = 24 * _HOUR_MS


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _drop_none(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_none(v) for v in value]
    return value


def canonical_filters(filters: Mapping[str, Any] | None) -> str | None:
    """Serialize filters independently of key order; None for no filters.

    Keys whose value is None are treated as absent, so ``{"track": None}``
    and ``{}`` address the same slot.
    """
    if not filters:
        return None
    cleaned = _drop_none(filters)
    if not cleaned:
        return None
    return json.dumps(cleaned, sort_keys=True, separators=(",", ":"), default=str)


def build_cache_key(resource: str, filters: Mapping[str, Any] | None = None) -> str:
    """Compose a cache key from a resource name and optional filters."""
    serialized = canonical_filters(filters)
    if serialized is None:
        return resource
    return f"{resource}_{serialized}"


@dataclass
class CacheEntry:
    """Envelope persisted for each cached value."""

    data: Any
    timestamp: int
    version: str
    custom_ttl_ms: int | None = None

    def to_json(self) -> str:
        payload: dict[str, Any] = {
            "data": self.data,
            "timestamp": self.timestamp,
            "version": self.version,
        }
        if self.custom_ttl_ms is not None:
            payload["customTTL"] = self.custom_ttl_ms
        return json.dumps(payload, separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> "CacheEntry":
        """Decode an envelope, raising CacheError for anything malformed."""
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise CacheError(f"Undecodable cache entry: {exc}") from exc
        if not isinstance(payload, dict) or "data" not in payload:
            raise CacheError("Cache entry is not an envelope object")

        timestamp = payload.get("timestamp")
        version = payload.get("version")
        custom_ttl = payload.get("customTTL")
        if not isinstance(timestamp, int) or not isinstance(version, str):
            raise CacheError("Cache entry has no valid timestamp/version")
        if custom_ttl is not None and not isinstance(custom_ttl, int):
            raise CacheError("Cache entry has a non-integer customTTL")

        return cls(
            data=payload["data"],
            timestamp=timestamp,
            version=version,
            custom_ttl_ms=custom_ttl,
        )

    def is_valid(self, *, version: str, default_ttl_ms: int, now: int) -> bool:
        if self.version != version:
            return False
        ttl = self.custom_ttl_ms if self.custom_ttl_ms is not None else default_ttl_ms
        return now - self.timestamp <= ttl


class VersionedTTLCache:
    """Namespaced, expiring cache on top of a KeyValueStore.

    Instances are constructed explicitly and injected; two caches with
    different prefixes can share one store without seeing each other's
    entries.

    Usage:
        cache = VersionedTTLCache(store, prefix="remoteinbound_cache")
        cache.set("speakers", rows, CacheTTL.LONG)
        rows = cache.get("speakers")   # None on miss
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        prefix: str = "remoteinbound_cache",
        default_ttl_ms: int = CacheTTL.LONG,
        version: str = "1.0.0",
        clock: Clock | None = None,
    ):
        self._store = store
        self._prefix = prefix
        self._default_ttl_ms = default_ttl_ms
        self._version = version
        self._clock = clock or _epoch_ms
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._writes = 0
        self._errors = 0

    @property
    def version(self) -> str:
        return self._version

    @property
    def default_ttl_ms(self) -> int:
        return self._default_ttl_ms

    def _storage_key(self, key: str) -> str:
        return f"{self._prefix}_{key}"

    def _namespace(self) -> str:
        return f"{self._prefix}_"

    def _namespaced_keys(self) -> list[str]:
        namespace = self._namespace()
        return [k for k in self._store.keys() if k.startswith(namespace)]

    # ── Public contract ─────────────────────────────────────────────

    def set(self, key: str, data: Any, custom_ttl_ms: int | None = None) -> None:
        """Write ``data`` under ``key``. Failures are logged and ignored."""
        entry = CacheEntry(
            data=data,
            timestamp=self._clock(),
            version=self._version,
            custom_ttl_ms=custom_ttl_ms,
        )
        try:
            self._store.set_item(self._storage_key(key), entry.to_json())
        except Exception as exc:
            self._errors += 1
            logger.warning("Failed to cache '%s': %s", key, exc)
            return
        self._writes += 1

    def get(self, key: str) -> Any | None:
        """Return cached data, or None on miss, expiry or version mismatch."""
        storage_key = self._storage_key(key)
        try:
            raw = self._store.get_item(storage_key)
        except Exception as exc:
            self._errors += 1
            self._misses += 1
            logger.warning("Failed to read cache '%s': %s", key, exc)
            self._evict(key)
            return None

        if raw is None:
            self._misses += 1
            return None

        try:
            entry = CacheEntry.from_json(raw)
        except CacheError as exc:
            self._errors += 1
            self._misses += 1
            logger.warning("Discarding corrupt cache entry '%s': %s", key, exc)
            self._evict(key)
            return None

        if not entry.is_valid(
            version=self._version,
            default_ttl_ms=self._default_ttl_ms,
            now=self._clock(),
        ):
            self._misses += 1
            logger.debug("Cache entry '%s' is stale (version=%s)", key, entry.version)
            self._evict(key)
            return None

        self._hits += 1
        return entry.data

    def remove(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""
        try:
            self._store.remove_item(self._storage_key(key))
        except Exception as exc:
            self._errors += 1
            logger.warning("Failed to remove cache '%s': %s", key, exc)

    def clear(self) -> None:
        """Delete every entry in this cache's namespace, leaving other keys alone."""
        try:
            storage_keys = self._namespaced_keys()
        except Exception as exc:
            self._errors += 1
            logger.warning("Failed to clear cache '%s': %s", self._prefix, exc)
            return

        for storage_key in storage_keys:
            try:
                self._store.remove_item(storage_key)
            except Exception as exc:
                self._errors += 1
                logger.warning("Failed to remove cache entry '%s': %s", storage_key, exc)

    def update_version(self, new_version: str) -> None:
        """Switch the active version and drop everything written before it."""
        logger.info("Cache version %s → %s, clearing namespace", self._version, new_version)
        self._version = new_version
        self.clear()

    def set_ttl(self, default_ttl_ms: int) -> None:
        """Change the default TTL used for entries without a per-entry override."""
        self._default_ttl_ms = default_ttl_ms

    def get_cache_info(self) -> dict[str, dict[str, Any]]:
        """Describe every stored entry: raw size, write timestamp and version.

        Read-only: unparsable entries are skipped, nothing is evicted.
        """
        info: dict[str, dict[str, Any]] = {}
        namespace = self._namespace()
        try:
            for storage_key in self._namespaced_keys():
                raw = self._store.get_item(storage_key)
                if raw is None:
                    continue
                try:
                    entry = CacheEntry.from_json(raw)
                except CacheError:
                    continue
                info[storage_key[len(namespace):]] = {
                    "size": len(raw),
                    "timestamp": entry.timestamp,
                    "version": entry.version,
                }
        except Exception as exc:
            logger.warning("Failed to collect cache info: %s", exc)
        return info

    # ── Maintenance helpers ─────────────────────────────────────────

    def keys(self) -> list[str]:
        """Logical keys currently stored in this namespace (valid or not)."""
        namespace = self._namespace()
        try:
            return [k[len(namespace):] for k in self._namespaced_keys()]
        except Exception as exc:
            logger.warning("Failed to list cache keys: %s", exc)
            return []

    def remove_resource(self, resource: str) -> None:
        """Drop the unfiltered entry of ``resource`` and all its filtered variants."""
        filtered_prefix = f"{resource}_"
        for key in self.keys():
            if key == resource or key.startswith(filtered_prefix):
                self.remove(key)

    def is_available(self) -> bool:
        """Check the underlying store with a throwaway write."""
        test_key = self._storage_key("__availability_check__")
        try:
            self._store.set_item(test_key, "1")
            self._store.remove_item(test_key)
        except Exception as exc:
            logger.warning("Cache store unavailable: %s", exc)
            return False
        return True

    @property
    def stats(self) -> dict[str, Any]:
        total = self._hits + self._misses
        return {
            "prefix": self._prefix,
            "version": self._version,
            "default_ttl_ms": self._default_ttl_ms,
            "entries": len(self.keys()),
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "writes": self._writes,
            "errors": self._errors,
            "hit_rate": (self._hits / total) if total > 0 else 0.0,
        }

    def _evict(self, key: str) -> None:
        self._evictions += 1
        self.remove(key)
