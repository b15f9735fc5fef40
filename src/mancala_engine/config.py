"""Engine defaults, overridable from the command line."""

from dataclasses import dataclass
from typing import Optional

# A depth-13 search from the opening takes minutes in Python; interactive
# play starts shallower
PLAY_DEPTH = 9


@dataclass
class EngineConfig:
    num_pits: int = 6
    num_seeds: int = 6
    depth: int = 13  # plies
    cache_entries: Optional[int] = None  # None sizes the cache from available RAM
    cache_memory_mb: Optional[int] = None  # overrides cache_entries when set
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {self.depth}")
        if self.num_pits < 1 or self.num_seeds < 1:
            raise ValueError(
                f"Need at least one pit and one seed, got Kalah({self.num_pits},{self.num_seeds})"
            )
        if self.cache_entries is not None and self.cache_entries < 1:
            raise ValueError(f"Cache needs at least one entry, got {self.cache_entries}")
        if self.cache_memory_mb is not None and self.cache_memory_mb < 1:
            raise ValueError(f"Cache memory must be at least 1MB, got {self.cache_memory_mb}")

    @classmethod
    def from_args(cls, args) -> "EngineConfig":
        """Build a config from parsed CLI arguments, keeping defaults for missing ones."""
        cfg = cls()
        for name in ("num_pits", "num_seeds", "depth", "cache_entries", "cache_memory_mb", "log_level"):
            value = getattr(args, name, None)
            if value is not None:
                setattr(cfg, name, value)
        cfg.__post_init__()
        return cfg
