"""Core game state representation and rules."""

from .game_state import GameState, Player
from .moves import Child, children_of
from .rules import (
    IllegalMoveError,
    create_starting_state,
    generate_legal_moves,
    validate_move,
    apply_move,
    grants_extra_turn,
    is_terminal,
    evaluate,
    evaluate_terminal,
    get_game_result,
    get_opposite_pit,
)

__all__ = [
    "GameState",
    "Player",
    "Child",
    "children_of",
    "IllegalMoveError",
    "create_starting_state",
    "generate_legal_moves",
    "validate_move",
    "apply_move",
    "grants_extra_turn",
    "is_terminal",
    "evaluate",
    "evaluate_terminal",
    "get_game_result",
    "get_opposite_pit",
]
