"""
Memory monitoring utilities.

Used to size the transposition cache from a memory budget and to report how
much RAM a long search has taken.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass
class MemoryStats:
    """Memory usage statistics."""

    process_rss_mb: float  # Resident Set Size (actual RAM used by process)
    process_vms_mb: float  # Virtual Memory Size
    system_total_gb: float  # Total system RAM
    system_available_gb: float  # Available RAM for new allocations
    system_percent: float  # Percentage of RAM in use


def get_memory_stats() -> Optional[MemoryStats]:
    """
    Get current memory usage statistics.

    Returns:
        MemoryStats if successful, None if memory info unavailable
    """
    try:
        process = psutil.Process(os.getpid())
        mem_info = process.memory_info()
        sys_mem = psutil.virtual_memory()
    except psutil.Error as e:
        logger.warning(f"Failed to get memory stats: {e}")
        return None

    return MemoryStats(
        process_rss_mb=mem_info.rss / (1024**2),
        process_vms_mb=mem_info.vms / (1024**2),
        system_total_gb=sys_mem.total / (1024**3),
        system_available_gb=sys_mem.available / (1024**3),
        system_percent=sys_mem.percent,
    )


def cache_budget_bytes(requested_mb: Optional[int] = None, fraction: float = 0.5) -> int:
    """
    Memory budget for the transposition cache.

    Args:
        requested_mb: Explicit budget; capped at the RAM currently available
        fraction: Share of available RAM to use when no budget is given

    Returns:
        Budget in bytes
    """
    stats = get_memory_stats()
    available = int(stats.system_available_gb * 1024**3) if stats else None

    if requested_mb is not None:
        budget = requested_mb * 1024**2
        if available is not None and budget > available:
            logger.warning(
                f"Requested {requested_mb}MB cache but only "
                f"{stats.system_available_gb:.1f}GB available, capping"
            )
            budget = available
        return budget

    if available is None:
        return 256 * 1024**2
    return int(available * fraction)


def log_memory_status() -> None:
    """Log current memory status."""
    stats = get_memory_stats()
    if stats is None:
        logger.info("Memory stats unavailable")
        return

    logger.info(
        f"Memory: Process={stats.process_rss_mb:.0f}MB, "
        f"System={stats.system_available_gb:.1f}GB available "
        f"({stats.system_percent:.0f}% used)"
    )
