"""
Move generation with extra-turn chains flattened into composite moves.

Every entry returned by children_of() is a position where control has passed
to the other side, or where the game is over.
"""

from typing import List, NamedTuple, Tuple

from .game_state import GameState
from .rules import apply_move, generate_legal_moves, grants_extra_turn, is_terminal


class Child(NamedTuple):
    """A successor position and the pits played to reach it."""

    state: GameState
    path: Tuple[int, ...]


def children_of(state: GameState) -> List[Child]:
    """
    Enumerate successor positions for the side to move.

    Pits are tried in ascending order, which is also the tie-break order the
    search relies on. A move landing in the mover's own store is expanded
    recursively with the originating pit prepended to each path, unless the
    move ended the game.

    Args:
        state: Position to expand

    Returns:
        List of Child(state, path); empty if the position is terminal
    """
    if is_terminal(state):
        return []

    children = []
    for move in generate_legal_moves(state):
        next_state, landing = apply_move(state, move)

        if grants_extra_turn(state, landing) and not is_terminal(next_state):
            for grandchild in children_of(next_state):
                children.append(Child(grandchild.state, (move,) + grandchild.path))
        else:
            children.append(Child(next_state, (move,)))

    return children
