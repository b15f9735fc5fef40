"""
Game state representation.

A Kalah game state consists of:
- Board positions (pits + stores)
- Side to move

States are immutable values: every transition builds a new GameState, so
states can be shared between search branches and used directly as cache keys.
"""

from enum import IntEnum
from typing import List, Tuple
from dataclasses import dataclass


class Player(IntEnum):
    """Side to move (0 = P1, 1 = P2)."""

    ONE = 0
    TWO = 1

    @property
    def opponent(self) -> "Player":
        return Player(1 - self)

    def __str__(self) -> str:
        return f"Player {self.value + 1}"


@dataclass(frozen=True)
class GameState:
    """
    Immutable game state representation.

    Board layout for num_pits=6:
          P2 Pits (12-7)
       [12][11][10][9][8][7]
    [13]                    [6]  <- Stores
       [0] [1] [2] [3][4][5]
          P1 Pits (0-5)

    Indices:
    - P1 pits: 0 to num_pits-1
    - P1 store: num_pits
    - P2 pits: num_pits+1 to 2*num_pits
    - P2 store: 2*num_pits+1
    """

    num_pits: int  # Number of pits per player
    board: Tuple[int, ...]  # Seeds in each position (immutable)
    player: Player  # Side to move

    def __post_init__(self) -> None:
        """Validate state invariants."""
        expected_size = 2 * self.num_pits + 2  # pits + stores
        if len(self.board) != expected_size:
            raise ValueError(
                f"Board size {len(self.board)} doesn't match expected {expected_size}"
            )
        if self.player not in (0, 1):
            raise ValueError(f"Invalid player {self.player}, must be 0 or 1")
        if any(seeds < 0 for seeds in self.board):
            raise ValueError("Negative seed count not allowed")

        # Normalise plain ints and lists so equality/hashing stay structural
        object.__setattr__(self, "player", Player(self.player))
        object.__setattr__(self, "board", tuple(self.board))

    @property
    def p1_store_idx(self) -> int:
        """Index of player 1's store."""
        return self.num_pits

    @property
    def p2_store_idx(self) -> int:
        """Index of player 2's store."""
        return 2 * self.num_pits + 1

    @property
    def total_seeds(self) -> int:
        """Total seeds on the board."""
        return sum(self.board)

    def get_player_pits(self, player: int) -> List[int]:
        """Get pit indices for a player."""
        if player == Player.ONE:
            return list(range(self.num_pits))
        else:
            return list(range(self.num_pits + 1, 2 * self.num_pits + 1))

    def get_player_store(self, player: int) -> int:
        """Get store index for a player."""
        return self.p1_store_idx if player == Player.ONE else self.p2_store_idx

    def side_total(self, player: int) -> int:
        """Seeds on a player's side: their pits plus their store."""
        pits = sum(self.board[pit] for pit in self.get_player_pits(player))
        return pits + self.board[self.get_player_store(player)]

    def __str__(self) -> str:
        """Human-readable board representation."""
        p2_pits = list(reversed(self.board[self.num_pits + 1 : 2 * self.num_pits + 1]))
        p1_pits = list(self.board[: self.num_pits])
        p1_store = self.board[self.p1_store_idx]
        p2_store = self.board[self.p2_store_idx]

        # Format board
        pit_width = 3
        p2_str = " ".join(f"{s:>{pit_width}}" for s in p2_pits)
        p1_str = " ".join(f"{s:>{pit_width}}" for s in p1_pits)
        store_width = len(p2_str)

        board_str = f"""
      {p2_str}
[{p2_store:>2}] {' ' * store_width} [{p1_store:>2}]
      {p1_str}

{self.player}'s turn
"""
        return board_str
