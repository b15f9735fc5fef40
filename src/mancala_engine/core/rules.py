"""
Kalah game rules implementation.

Implements standard Kalah rules:
- Counter-clockwise sowing, skipping the opponent's store
- Capture when the last seed lands in an empty own pit
- Extra turn when landing in own store
- Game ends when one side is empty

Rules are applied in a fixed order: sow, then capture, then turn update.
"""

from typing import List, Optional, Tuple
from .game_state import GameState, Player


class IllegalMoveError(ValueError):
    """Raised when a move names a pit the side to move cannot play."""

    def __init__(self, state: GameState, move: int, reason: str):
        self.state = state
        self.move = move
        self.reason = reason
        super().__init__(f"Illegal move {move} for {state.player}: {reason}")


def create_starting_state(
    num_pits: int = 6, num_seeds: int = 6, player: Player = Player.ONE
) -> GameState:
    """
    Create the initial game state.

    Args:
        num_pits: Number of pits per player
        num_seeds: Initial seeds per pit
        player: Side that moves first

    Returns:
        Starting GameState
    """
    if num_pits < 1 or num_seeds < 1:
        raise ValueError(
            f"Need at least one pit and one seed, got Kalah({num_pits},{num_seeds})"
        )

    board = [num_seeds] * num_pits  # P1 pits
    board.append(0)  # P1 store
    board.extend([num_seeds] * num_pits)  # P2 pits
    board.append(0)  # P2 store

    return GameState(num_pits=num_pits, board=tuple(board), player=player)


def get_opposite_pit(pit_idx: int, num_pits: int) -> int:
    """
    Get the opposite pit index for capture rule.

    Formula: opposite_of(pit_i) = (2 * num_pits) - pit_i

    Args:
        pit_idx: Pit index
        num_pits: Number of pits per player

    Returns:
        Opposite pit index
    """
    p1_store = num_pits
    p2_store = 2 * num_pits + 1

    if pit_idx == p1_store or pit_idx == p2_store:
        raise ValueError(f"Cannot get opposite of store {pit_idx}")
    if not 0 <= pit_idx < p2_store:
        raise ValueError(f"Pit {pit_idx} is off the board")

    return (2 * num_pits) - pit_idx


def generate_legal_moves(state: GameState) -> List[int]:
    """
    Generate all legal moves for the current player.

    A move is legal if the chosen pit:
    - Belongs to the current player
    - Contains at least one seed

    Args:
        state: Current game state

    Returns:
        List of legal pit indices in ascending order
    """
    return [pit for pit in state.get_player_pits(state.player) if state.board[pit] > 0]


def validate_move(state: GameState, move: int) -> None:
    """
    Check that a move is playable, raising IllegalMoveError otherwise.

    Args:
        state: Current game state
        move: Pit index to move from
    """
    if move not in state.get_player_pits(state.player):
        raise IllegalMoveError(state, move, "not one of the mover's pits")
    if state.board[move] == 0:
        raise IllegalMoveError(state, move, "pit is empty")


def apply_move(state: GameState, move: int) -> Tuple[GameState, int]:
    """
    Apply a move and return the resulting state and landing position.

    1. Pick up all seeds from chosen pit
    2. Sow counter-clockwise, one seed per position, skipping opponent's store
    3. If last seed lands in an own pit that was empty: capture it together
       with the opposite pit's seeds (even if the opposite pit is empty)
    4. If last seed lands in own store: extra turn, otherwise turn passes

    Args:
        state: Current game state
        move: Pit index to move from

    Returns:
        (new GameState, index where the last seed landed)

    Raises:
        IllegalMoveError: if the pit isn't the mover's or is empty
    """
    validate_move(state, move)

    board = list(state.board)
    current_player = state.player

    # Pick up seeds
    seeds_in_hand = board[move]
    board[move] = 0

    opponent_store = state.get_player_store(current_player.opponent)
    own_store = state.get_player_store(current_player)
    current_pos = move

    # Sow seeds
    while seeds_in_hand > 0:
        current_pos = (current_pos + 1) % len(board)

        if current_pos == opponent_store:
            continue

        board[current_pos] += 1
        seeds_in_hand -= 1

    # Capture
    if current_pos in state.get_player_pits(current_player) and board[current_pos] == 1:
        opposite_pit = get_opposite_pit(current_pos, state.num_pits)
        board[own_store] += board[opposite_pit] + 1
        board[opposite_pit] = 0
        board[current_pos] = 0

    # Turn update
    next_player = current_player if current_pos == own_store else current_player.opponent

    return (
        GameState(num_pits=state.num_pits, board=tuple(board), player=next_player),
        current_pos,
    )


def grants_extra_turn(state: GameState, landing_idx: int) -> bool:
    """True if a move by the side to move in `state` ending at `landing_idx` moves again."""
    return landing_idx == state.get_player_store(state.player)


def is_terminal(state: GameState) -> bool:
    """
    Check if the game has ended.

    Game ends when one player's side (all pits) is empty.

    Args:
        state: Game state to check

    Returns:
        True if game is over
    """
    p1_empty = all(state.board[pit] == 0 for pit in state.get_player_pits(Player.ONE))
    p2_empty = all(state.board[pit] == 0 for pit in state.get_player_pits(Player.TWO))

    return p1_empty or p2_empty


def evaluate(state: GameState) -> int:
    """
    Heuristic score from Player 1's perspective.

    Each side counts twice its store plus pits; the same formula is used for
    terminal and mid-game positions regardless of whose turn it is.
    """
    return 2 * state.side_total(Player.ONE) - 2 * state.side_total(Player.TWO)


def evaluate_terminal(state: GameState) -> int:
    """
    Evaluate terminal state value.

    When game ends, remaining seeds on each side go to that player's store.
    Value = P1_store - P2_store

    Args:
        state: Terminal game state

    Returns:
        Game value from P1's perspective (positive = P1 wins, negative = P2 wins, 0 = tie)
    """
    if not is_terminal(state):
        raise ValueError("Cannot evaluate non-terminal state")

    return state.side_total(Player.ONE) - state.side_total(Player.TWO)


def get_game_result(state: GameState) -> Optional[str]:
    """
    Get human-readable game result.

    Args:
        state: Game state

    Returns:
        Result string or None if not terminal
    """
    if not is_terminal(state):
        return None

    value = evaluate_terminal(state)

    if value > 0:
        return f"Player 1 wins by {value}"
    elif value < 0:
        return f"Player 2 wins by {-value}"
    else:
        return "Tie game"
