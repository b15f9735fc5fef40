"""Adversarial search over Kalah positions."""

from .alphabeta import (
    AlphaBetaSolver,
    MoveChoice,
    SearchResult,
    search,
    NEG_INF,
    POS_INF,
)
from .cache import Bound, CacheEntry, TranspositionCache

__all__ = [
    "AlphaBetaSolver",
    "MoveChoice",
    "SearchResult",
    "search",
    "NEG_INF",
    "POS_INF",
    "Bound",
    "CacheEntry",
    "TranspositionCache",
]
