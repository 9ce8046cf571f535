"""
Caching for parsed statements.

Provides named, bounded caches for results that never change once computed.
Uses cachetools LRUCache with a shared lock so the caches can be populated
from several threads.
"""
import functools
import logging
import threading

import cachetools

logger = logging.getLogger(__name__)


class Cache:
    """Cache manager for the sqldialect package.

    Thread-safe singleton that manages all LRU caches.
    """

    _instance = None
    _caches: dict[str, cachetools.LRUCache] = {}
    _lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'Cache':
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get_cache(self, name: str, maxsize: int = 256) -> cachetools.LRUCache:
        """Get or create an LRU cache with the given name.

        Args:
            name: Name of the cache
            maxsize: Maximum cache size, only used when the cache is created

        Returns
            LRUCache instance
        """
        if name not in self._caches:
            with self._lock:
                if name not in self._caches:
                    self._caches[name] = cachetools.LRUCache(maxsize=maxsize)
        return self._caches[name]

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def clear_all(self) -> None:
        """Clear all managed caches."""
        with self._lock:
            for cache in self._caches.values():
                cache.clear()

    def clear_cache(self, name: str) -> None:
        """Clear a specific cache by name."""
        with self._lock:
            if name in self._caches:
                self._caches[name].clear()

    def get_stats(self) -> dict[str, dict[str, int]]:
        """Get size and capacity of every managed cache."""
        with self._lock:
            return {
                name: {'size': len(cache), 'maxsize': cache.maxsize}
                for name, cache in self._caches.items()
            }


def cached_result(cache_name: str, maxsize: int = 256):
    """Decorator caching a pure function's result in a named cache.

    Only use for functions whose return value is immutable; every caller
    receives the same object.

    Args:
        cache_name: Name of the cache in the Cache manager
        maxsize: Maximum entries kept in the cache
    """
    def decorator(func):
        cache = Cache.get_instance().get_cache(cache_name, maxsize=maxsize)

        @functools.wraps(func)
        def wrapper(*args):
            key = cachetools.keys.hashkey(*args)
            with Cache.get_instance().lock:
                try:
                    return cache[key]
                except KeyError:
                    pass
            logger.debug(f'Cache miss for {cache_name}')
            result = func(*args)
            with Cache.get_instance().lock:
                cache[key] = result
            return result

        wrapper.cache_name = cache_name
        return wrapper
    return decorator
