"""
Distance matrix construction with a shared pairwise cache.

This module provides:
- A thread-safe LRU cache of stop-pair distances keyed by unordered stop ids
- Symmetric N x N distance matrices built from the cache
- Time matrices derived from distance at the fixed average speed

The cache is never invalidated on a timer. When a stop's coordinates are
corrected, callers must clear it explicitly.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
from cachetools import LRUCache

from .geo import AVERAGE_SPEED_MPH, haversine_miles
from .models import Stop


logger = logging.getLogger(__name__)


DEFAULT_CACHE_MAXSIZE = 4096


# -----------------------------
# Cache Management
# -----------------------------

class DistanceCache:
    """LRU cache of pairwise stop distances, guarded by a lock."""

    def __init__(self, maxsize: int = DEFAULT_CACHE_MAXSIZE):
        if maxsize < 1:
            raise ValueError(f"Distance cache maxsize must be >= 1, got {maxsize}")
        self._cache: LRUCache = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _cache_key(a: Stop, b: Stop) -> Tuple[str, str]:
        """Unordered pair key, so (a, b) and (b, a) share one entry."""
        return (a.id, b.id) if str(a.id) <= str(b.id) else (b.id, a.id)

    def distance(self, a: Stop, b: Stop) -> float:
        """Distance in miles between two stops, computed at most once per pair."""
        if a.id == b.id:
            return 0.0

        key = self._cache_key(a, b)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._hits += 1
                return cached

        value = haversine_miles(a.lat, a.lng, b.lat, b.lng)

        with self._lock:
            self._misses += 1
            self._cache[key] = value
        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, pair: Tuple[Stop, Stop]) -> bool:
        key = self._cache_key(*pair)
        with self._lock:
            return key in self._cache

    def clear(self) -> None:
        """Drop every cached distance and reset hit counters."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._cache),
                "maxsize": self._cache.maxsize,
                "hits": self._hits,
                "misses": self._misses,
            }


# -----------------------------
# Matrix Builders
# -----------------------------

def build_distance_matrix(
    stops: Sequence[Stop],
    cache: Optional[DistanceCache] = None,
) -> np.ndarray:
    """
    Build the symmetric pairwise distance matrix for ``stops``.

    Only the upper triangle is computed; it is mirrored into the lower
    triangle. The diagonal is zero.

    Args:
        stops: Stops in index order
        cache: Pairwise cache to consult and populate. A fresh private
               cache is used when None.

    Returns:
        (N, N) float64 array of miles
    """
    cache = cache if cache is not None else DistanceCache()
    n = len(stops)
    matrix = np.zeros((n, n), dtype=np.float64)

    for i in range(n):
        for j in range(i + 1, n):
            d = cache.distance(stops[i], stops[j])
            matrix[i, j] = d
            matrix[j, i] = d

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Built {n}x{n} distance matrix; cache {cache.stats()}")

    return matrix


def to_time_matrix(distance_matrix: np.ndarray) -> np.ndarray:
    """Convert a distance matrix (miles) into travel minutes."""
    return np.asarray(distance_matrix, dtype=np.float64) / AVERAGE_SPEED_MPH * 60.0
