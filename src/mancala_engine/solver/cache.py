"""
Bounded transposition cache with LRU eviction.

Entries record whether the stored score is exact or only a bound produced by
an alpha-beta cutoff, so the search can tell when a cached value is safe to
reuse under a different window.
"""

import logging
from collections import OrderedDict
from enum import Enum
from typing import Any, Hashable, NamedTuple, Optional

logger = logging.getLogger(__name__)

# Effectively unbounded; callers with a memory budget use from_memory_limit()
DEFAULT_MAX_ENTRIES = 500_000_000


class Bound(Enum):
    """How a cached score relates to the true minimax value."""

    EXACT = "exact"
    LOWER = "lower"  # true value >= score (search failed high)
    UPPER = "upper"  # true value <= score (search failed low)


class CacheEntry(NamedTuple):
    score: int
    best_index: int
    bound: Bound


class TranspositionCache:
    """LRU-evicting cache keyed by (state, remaining depth, maximizing)."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, entry_size_estimate: int = 550):
        """
        Initialize the cache.

        Args:
            max_entries: Maximum number of entries before eviction
            entry_size_estimate: Approximate bytes per entry (key state + entry
                tuple), used for memory reporting
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")

        self._table: "OrderedDict[Hashable, Any]" = OrderedDict()
        self.max_entries = max_entries
        self.entry_size_estimate = entry_size_estimate
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    @classmethod
    def from_memory_limit(
        cls, memory_limit_bytes: int, entry_size_estimate: int = 550
    ) -> "TranspositionCache":
        """
        Create a cache with entries capped by a memory budget.

        Args:
            memory_limit_bytes: Maximum memory to use in bytes
            entry_size_estimate: Approximate bytes per entry

        Returns:
            TranspositionCache sized for the budget (at least 1000 entries)
        """
        max_entries = max(1000, memory_limit_bytes // entry_size_estimate)
        logger.debug(
            f"Sizing cache for {memory_limit_bytes / (1024**2):.0f}MB: {max_entries:,} entries"
        )
        return cls(max_entries=max_entries, entry_size_estimate=entry_size_estimate)

    def get(self, key: Hashable) -> Optional[CacheEntry]:
        """Get entry, marking it most recently used if found."""
        if key in self._table:
            self._table.move_to_end(key)
            self.hits += 1
            return self._table[key]
        self.misses += 1
        return None

    def put(self, key: Hashable, entry: CacheEntry) -> None:
        """Add entry, evicting the least recently used one if at capacity."""
        if key in self._table:
            self._table.move_to_end(key)
        else:
            if len(self._table) >= self.max_entries:
                self._table.popitem(last=False)
                self.evictions += 1
        self._table[key] = entry

    def __contains__(self, key: Hashable) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def clear(self) -> None:
        """Clear all entries and reset stats."""
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def stats(self) -> dict:
        """
        Return usage statistics.

        Returns:
            Dictionary with entries, max_entries, hits, misses, evictions,
            hit_rate, and estimated_memory_mb.
        """
        total_lookups = self.hits + self.misses
        hit_rate = self.hits / total_lookups if total_lookups > 0 else 0.0
        return {
            "entries": len(self._table),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": hit_rate,
            "estimated_memory_mb": len(self._table) * self.entry_size_estimate / (1024**2),
        }
