"""Tests for alpha-beta search and its transposition cache."""

import random

import pytest

from mancala_engine.core import (
    GameState,
    Player,
    children_of,
    create_starting_state,
    evaluate,
    is_terminal,
)
from mancala_engine.solver import (
    AlphaBetaSolver,
    Bound,
    SearchResult,
    TranspositionCache,
    search,
)


def plain_minimax(state, depth, maximizing):
    """Unpruned, uncached reference: (score, index of first best child)."""
    if depth == 0 or is_terminal(state):
        return evaluate(state), 0

    values = [plain_minimax(child.state, depth - 1, not maximizing)[0] for child in children_of(state)]
    best = max(values) if maximizing else min(values)
    return best, values.index(best)


def _positions(count: int = 8, seed: int = 21):
    """Start position plus positions reached by random play."""
    rng = random.Random(seed)
    positions = [create_starting_state()]
    state = create_starting_state()
    while len(positions) < count:
        if is_terminal(state):
            state = create_starting_state()
            continue
        state = rng.choice(children_of(state)).state
        if not is_terminal(state):
            positions.append(state)
    return positions


def test_depth_zero_is_evaluation():
    state = create_starting_state()
    assert search(state, 0) == SearchResult(evaluate(state), 0)


def test_terminal_is_leaf():
    board = (0, 0, 0, 0, 0, 0, 20, 3, 3, 3, 3, 3, 3, 10)
    state = GameState(num_pits=6, board=board, player=Player.ONE)

    assert search(state, 5) == SearchResult(evaluate(state), 0)


def test_negative_depth_rejected():
    with pytest.raises(ValueError):
        search(create_starting_state(), -1)


def test_depth_one_from_start():
    """Pit 1 keeps the most seeds on Player 1's side after one ply."""
    state = create_starting_state()

    result = search(state, 1)

    assert result == SearchResult(-4, 5)
    assert children_of(state)[result.best_index].path == (1,)


def test_tie_break_prefers_first_child():
    """Two captures of empty pits score the same; the lower pit wins."""
    board = (1, 0, 0, 1, 0, 0, 0, 5, 0, 0, 0, 0, 0, 0)
    state = GameState(num_pits=6, board=board, player=Player.ONE)

    children = children_of(state)
    assert [evaluate(child.state) for child in children] == [-6, -6]

    result = search(state, 1)
    assert result == SearchResult(-6, 0)
    assert children[result.best_index].path == (0,)


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_matches_unpruned_minimax(depth):
    for state in _positions():
        maximizing = state.player is Player.ONE
        expected = plain_minimax(state, depth, maximizing)

        cached = AlphaBetaSolver().search(state, depth, maximizing=maximizing)
        uncached = AlphaBetaSolver(use_cache=False).search(state, depth, maximizing=maximizing)

        assert tuple(cached) == expected
        assert tuple(uncached) == expected


def test_matches_unpruned_minimax_deeper_from_start():
    state = create_starting_state()
    expected = plain_minimax(state, 4, True)

    assert tuple(AlphaBetaSolver().search(state, 4)) == expected


def test_pruning_happens():
    solver = AlphaBetaSolver(use_cache=False)
    solver.search(create_starting_state(), 4)

    assert solver.cutoffs > 0


def test_repeated_search_is_identical():
    cache = TranspositionCache()
    state = _positions()[3]

    first = search(state, 4, cache=cache)
    entries = len(cache)
    second = search(state, 4, cache=cache)

    assert first == second
    assert len(cache) == entries


def test_cache_reused_across_depths():
    """A shallow search must not leak its values into a deeper one."""
    for state in _positions(5, seed=8):
        solver = AlphaBetaSolver()
        solver.search(state, 1)
        solver.search(state, 2)

        fresh = AlphaBetaSolver(use_cache=False).search(state, 3)
        assert solver.search(state, 3) == fresh


def test_cache_reused_across_windows():
    """Bounds stored under a narrow window don't change a full-window result."""
    for state in _positions(5, seed=13):
        solver = AlphaBetaSolver()
        solver.search(state, 3, alpha=-2, beta=2)
        solver.search(state, 3, alpha=10, beta=12)

        fresh = AlphaBetaSolver(use_cache=False).search(state, 3)
        assert solver.search(state, 3) == fresh


def test_narrow_window_stores_bounds():
    cache = TranspositionCache()
    state = create_starting_state()

    # True depth-2 value is far outside this window, so the root fails
    search(state, 2, alpha=1000, beta=1001, cache=cache)

    root = cache.get((state, 2, True))
    assert root is not None
    assert root.bound is Bound.UPPER


def test_choose_move_from_start():
    solver = AlphaBetaSolver()

    choice = solver.choose_move(create_starting_state(), 1)

    assert choice.path == (1,)
    assert choice.score == -4
    assert choice.index == 5
    assert choice.state.player is Player.TWO
    assert solver.nodes > 0


def test_choose_move_for_player_two_minimizes():
    state = children_of(create_starting_state())[5].state  # after Player 1 plays pit 1
    solver = AlphaBetaSolver()

    choice = solver.choose_move(state, 2)

    expected_score, expected_index = plain_minimax(state, 2, False)
    assert choice.score == expected_score
    assert choice.index == expected_index
    assert choice.path == children_of(state)[expected_index].path


def test_choose_move_terminal_rejected():
    board = (0, 0, 0, 0, 0, 0, 20, 3, 3, 3, 3, 3, 3, 10)
    state = GameState(num_pits=6, board=board, player=Player.TWO)

    with pytest.raises(ValueError):
        AlphaBetaSolver().choose_move(state, 3)


def test_choose_move_needs_a_ply():
    with pytest.raises(ValueError):
        AlphaBetaSolver().choose_move(create_starting_state(), 0)


def test_cache_shared_across_a_game():
    """Reusing one cache for consecutive moves gives the same choices as fresh caches."""
    shared = AlphaBetaSolver()
    state = create_starting_state()

    for _ in range(6):
        if is_terminal(state):
            break
        choice = shared.choose_move(state, 3)
        fresh = AlphaBetaSolver().choose_move(state, 3)
        assert choice == fresh
        state = choice.state
