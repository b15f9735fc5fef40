"""
Depth-limited minimax search with alpha-beta pruning.

Works forwards from a position over the tree produced by children_of(),
memoizing results in a TranspositionCache. Scores are always from Player 1's
perspective: Player 1 maximizes, Player 2 minimizes.
"""

import logging
import time
from typing import NamedTuple, Optional, Tuple

from ..core import (
    GameState,
    Player,
    children_of,
    evaluate,
    is_terminal,
)
from .cache import Bound, CacheEntry, TranspositionCache

logger = logging.getLogger(__name__)

NEG_INF = float("-inf")
POS_INF = float("inf")


class SearchResult(NamedTuple):
    """Score of a position and the index of its best child in children_of()."""

    score: int
    best_index: int


class MoveChoice(NamedTuple):
    """The engine's chosen move at the root."""

    score: int
    path: Tuple[int, ...]
    state: GameState
    index: int


class AlphaBetaSolver:
    """
    Minimax search with alpha-beta pruning and a transposition cache.

    The cache is keyed by (state, remaining depth, maximizing) and every
    entry is tagged exact, lower bound or upper bound, so reusing it never
    changes the result of a full-window search.
    """

    def __init__(self, cache: Optional[TranspositionCache] = None, use_cache: bool = True):
        """
        Initialize solver.

        Args:
            cache: Cache to read and populate; a fresh one is created if omitted.
                Reusing one cache across the moves of a game is safe.
            use_cache: Disable to search without any memoization
        """
        if use_cache:
            self.cache = cache if cache is not None else TranspositionCache()
        else:
            self.cache = None
        self.nodes = 0
        self.cutoffs = 0

    def reset_stats(self) -> None:
        self.nodes = 0
        self.cutoffs = 0

    def search(
        self,
        state: GameState,
        depth: int,
        alpha: float = NEG_INF,
        beta: float = POS_INF,
        maximizing: bool = True,
    ) -> SearchResult:
        """
        Search a position to a fixed number of plies.

        A ply is one entry of children_of(), so an extra-turn chain costs a
        single ply. Among equally scored children the first enumerated wins.

        Args:
            state: Position to search
            depth: Remaining plies
            alpha: Lower bound of the search window
            beta: Upper bound of the search window
            maximizing: True if the side to move maximizes the score

        Returns:
            SearchResult(score, best_index)
        """
        if depth < 0:
            raise ValueError(f"Search depth must be non-negative, got {depth}")

        key = (state, depth, maximizing)
        if self.cache is not None:
            entry = self.cache.get(key)
            if entry is not None and self._usable(entry, alpha, beta):
                return SearchResult(entry.score, entry.best_index)

        self.nodes += 1

        if depth == 0 or is_terminal(state):
            result = SearchResult(evaluate(state), 0)
            self._store(key, result, Bound.EXACT)
            return result

        alpha_orig, beta_orig = alpha, beta
        best_index = 0

        if maximizing:
            best_score = NEG_INF
            for i, child in enumerate(children_of(state)):
                score, _ = self.search(child.state, depth - 1, alpha, beta, False)
                if score > best_score:
                    best_score = score
                    best_index = i
                alpha = max(alpha, score)
                if beta <= alpha:
                    self.cutoffs += 1
                    break
        else:
            best_score = POS_INF
            for i, child in enumerate(children_of(state)):
                score, _ = self.search(child.state, depth - 1, alpha, beta, True)
                if score < best_score:
                    best_score = score
                    best_index = i
                beta = min(beta, score)
                if beta <= alpha:
                    self.cutoffs += 1
                    break

        if best_score <= alpha_orig:
            bound = Bound.UPPER
        elif best_score >= beta_orig:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT

        result = SearchResult(best_score, best_index)
        self._store(key, result, bound)
        return result

    def choose_move(self, state: GameState, depth: int) -> MoveChoice:
        """
        Pick the best move for the side to move.

        Args:
            state: Current position (must not be terminal)
            depth: Plies to search

        Returns:
            MoveChoice with the score, the pit path to play and the resulting state
        """
        if depth < 1:
            raise ValueError(f"Need at least one ply to choose a move, got {depth}")

        children = children_of(state)
        if not children:
            raise ValueError("Cannot choose a move in a terminal position")

        self.reset_stats()
        start = time.time()
        maximizing = state.player == Player.ONE
        score, best_index = self.search(state, depth, NEG_INF, POS_INF, maximizing)
        elapsed = time.time() - start

        chosen = children[best_index]
        logger.debug(
            f"Searched depth {depth} for {state.player}: {self.nodes:,} nodes, "
            f"{self.cutoffs:,} cutoffs in {elapsed:.2f}s"
        )
        if self.cache is not None:
            stats = self.cache.stats()
            logger.debug(
                f"Cache: {stats['entries']:,} entries, "
                f"hit rate {stats['hit_rate']:.1%}, {stats['evictions']:,} evictions"
            )

        return MoveChoice(score=score, path=chosen.path, state=chosen.state, index=best_index)

    @staticmethod
    def _usable(entry: CacheEntry, alpha: float, beta: float) -> bool:
        """Whether a cached entry settles the node under the current window."""
        if entry.bound is Bound.EXACT:
            return True
        if entry.bound is Bound.LOWER:
            return entry.score >= beta
        return entry.score <= alpha

    def _store(self, key, result: SearchResult, bound: Bound) -> None:
        if self.cache is not None:
            self.cache.put(key, CacheEntry(result.score, result.best_index, bound))


def search(
    state: GameState,
    depth: int,
    alpha: float = NEG_INF,
    beta: float = POS_INF,
    maximizing: bool = True,
    cache: Optional[TranspositionCache] = None,
) -> SearchResult:
    """
    Convenience wrapper around AlphaBetaSolver.search().

    Pass the same cache between calls to reuse earlier results.
    """
    return AlphaBetaSolver(cache=cache).search(state, depth, alpha, beta, maximizing)
