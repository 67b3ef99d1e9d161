"""
Disk cache for WHOIS and certificate-transparency evidence.

Entries live under "<namespace>:<domain>" keys in a diskcache.Cache. Each
namespace has its own default TTL, so callers only pass the domain and the
evidence value. Failed lookups are never written here; the collectors only
cache conclusive results.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import diskcache

from name_radar.constants import (
    CACHE_NAMESPACE_CRT,
    CACHE_NAMESPACE_WHOIS,
    CACHE_TTL_CRT,
    CACHE_TTL_WHOIS,
)

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path("data/cache")
DEFAULT_SIZE_LIMIT = 256 * 1024 * 1024  # evidence payloads are a few KB each

NAMESPACE_TTL_DAYS = {
    CACHE_NAMESPACE_WHOIS: CACHE_TTL_WHOIS,
    CACHE_NAMESPACE_CRT: CACHE_TTL_CRT,
}

_SECONDS_PER_DAY = 86400


class AppCache:
    """
    Namespaced evidence cache backed by diskcache (SQLite).

    Args:
        cache_dir: Directory for the cache database; created if missing
        timeout: Seconds to wait for the SQLite lock
        size_limit: Maximum size in bytes before diskcache starts culling
    """

    def __init__(
        self,
        cache_dir: Path = DEFAULT_CACHE_DIR,
        timeout: float = 30.0,
        size_limit: int = DEFAULT_SIZE_LIMIT,
    ):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(str(self.cache_dir), timeout=timeout, size_limit=size_limit)
        logger.debug(f"Evidence cache at {self.cache_dir}")

    @staticmethod
    def _key(namespace: str, domain: str) -> str:
        return f"{namespace}:{domain.lower()}"

    def _iter_keys(self, namespace: str | None = None) -> Iterator[str]:
        prefix = f"{namespace}:" if namespace else ""
        return (key for key in self._cache.iterkeys() if key.startswith(prefix))

    def get(self, namespace: str, domain: str) -> Any | None:
        """Cached evidence for a domain, or None on a miss or after expiry."""
        return self._cache.get(self._key(namespace, domain))

    def set(self, namespace: str, domain: str, value: Any, ttl_days: int | None = None) -> None:
        """
        Store evidence for a domain.

        Args:
            namespace: "whois", "crt", ...
            domain: Domain the evidence is about (case-insensitive)
            value: Picklable evidence value
            ttl_days: Overrides the namespace default; namespaces without a
                default never expire
        """
        days = ttl_days if ttl_days is not None else NAMESPACE_TTL_DAYS.get(namespace)
        expire = days * _SECONDS_PER_DAY if days else None
        self._cache.set(self._key(namespace, domain), value, expire=expire)

    def clear_namespace(self, namespace: str) -> int:
        """Delete every entry in a namespace. Returns the number removed."""
        doomed = list(self._iter_keys(namespace))
        for key in doomed:
            self._cache.delete(key)
        logger.info(f"Cleared {len(doomed)} {namespace} cache entries")
        return len(doomed)

    def count(self, namespace: str | None = None) -> int:
        if namespace is None:
            return len(self._cache)
        return sum(1 for _ in self._iter_keys(namespace))

    def stats(self) -> dict:
        """
        Summary for the name-radar-cache command.

        Returns:
            {"cache_dir", "total", "by_namespace", "size_mb"}
        """
        by_namespace: dict[str, int] = {}
        for key in self._iter_keys():
            namespace = key.partition(":")[0] if ":" in key else "unknown"
            by_namespace[namespace] = by_namespace.get(namespace, 0) + 1
        return {
            "cache_dir": str(self.cache_dir),
            "total": len(self._cache),
            "by_namespace": by_namespace,
            "size_mb": round(self._cache.volume() / (1024 * 1024), 2),
        }

    def keys(self, namespace: str | None = None, limit: int = 100) -> list[str]:
        """
        Up to limit keys; the namespace prefix is stripped when one is given.
        """
        strip = len(namespace) + 1 if namespace else 0
        found = []
        for key in self._iter_keys(namespace):
            found.append(key[strip:])
            if len(found) >= limit:
                break
        return found

    def close(self):
        self._cache.close()

    def __enter__(self) -> "AppCache":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
