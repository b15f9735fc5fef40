"""Utility modules for the Kalah engine."""

from .memory import (
    MemoryStats,
    get_memory_stats,
    cache_budget_bytes,
    log_memory_status,
)

__all__ = [
    "MemoryStats",
    "get_memory_stats",
    "cache_budget_bytes",
    "log_memory_status",
]
