"""
Caching layer for FincontractLib traversals.

Contract trees are immutable and compare by value, so the result of a
pure traversal over a given root never changes. CachedTraversal wraps
any visitor and remembers whole-tree results per root.
"""

import logging
import threading
from typing import Any, Generic, TypeVar

from cachetools import TTLCache

from .core.visitor import Visitor

logger = logging.getLogger(__name__)

R = TypeVar('R')

# Sentinel so a cached None is still a hit
_MISSING = object()


class CachedTraversal(Generic[R]):
    """
    Optional memoising layer for any traversal.
    
    Only wrap visitors whose hooks are pure: a cached result is returned
    without running any hook. Cached results are shared, so callers must
    not mutate them.
    
    Example:
        currencies = CachedTraversal(CurrencyCollector(), max_size=5000)
        for contract in contracts:
            report(currencies.visit(contract))
    """
    
    def __init__(
        self,
        visitor: Visitor[R],
        max_size: int = 1024,
        ttl: float = 300.0  # 5 minutes
    ):
        """
        Initialize caching wrapper.
        
        Args:
            visitor: The traversal to wrap
            max_size: Maximum number of cached roots
            ttl: Time-to-live for cache entries in seconds
        """
        self._visitor = visitor
        self._cache = TTLCache(maxsize=max_size, ttl=ttl)
        self._lock = threading.Lock()
        
        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0
    
    @property
    def visitor(self) -> Visitor[R]:
        """The wrapped traversal."""
        return self._visitor
    
    def visit(self, root: Any) -> R:
        """
        Return the wrapped traversal's result for ``root``, computing it once.
        
        Roots that cannot be hashed (foreign objects) bypass the cache.
        """
        try:
            hash(root)
        except TypeError:
            return self._visitor.visit(root)
        
        with self._lock:
            cached = self._cache.get(root, _MISSING)
            if cached is not _MISSING:
                self.cache_hits += 1
                logger.debug("Cache hit for %s", type(self._visitor).__name__)
                return cached
            self.cache_misses += 1
        
        logger.debug("Cache miss for %s", type(self._visitor).__name__)
        result = self._visitor.visit(root)
        
        with self._lock:
            self._cache[root] = result
        return result
    
    def clear(self) -> None:
        """Drop all cached results and reset statistics."""
        with self._lock:
            self._cache.clear()
            self.cache_hits = 0
            self.cache_misses = 0
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
    
    def __repr__(self) -> str:
        return f"CachedTraversal({self._visitor.__class__.__name__}, entries={len(self)})"
