"""
Rich-based board rendering and game output.

Player 2's row is printed on top from pit 13 down to 7, Player 1's row below
from 0 up to 6, each with its pit indices so a human can pick a move.
"""

import logging
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core import GameState, Player

console = Console()
logger = logging.getLogger(__name__)

PLAYER_STYLES = {Player.ONE: "green", Player.TWO: "red"}


def render_board(state: GameState) -> Table:
    """Build a rich table for a position."""
    n = state.num_pits
    p2_positions = list(range(2 * n + 1, n, -1))  # P2 store, then P2 pits right to left
    p1_positions = list(range(0, n + 1))  # P1 pits left to right, then P1 store

    table = Table(show_header=False, box=None, padding=(0, 1))
    for _ in range(n + 2):
        table.add_column(justify="right")

    p1_style = PLAYER_STYLES[Player.ONE]
    p2_style = PLAYER_STYLES[Player.TWO]

    table.add_row(*[Text(str(i), style="dim") for i in p2_positions], "")
    table.add_row(*[Text(str(state.board[i]), style=f"bold {p2_style}") for i in p2_positions], "")
    table.add_row("", *[Text(str(state.board[i]), style=f"bold {p1_style}") for i in p1_positions])
    table.add_row("", *[Text(str(i), style="dim") for i in p1_positions])

    return table


class GameDisplay:
    """Console output for an interactive game."""

    def log(self, message: str, style: str = ""):
        """Log a message using rich console."""
        console.print(message, style=style)

    def log_info(self, message: str):
        console.print(f"[blue]ℹ[/blue] {message}")

    def log_warning(self, message: str):
        console.print(f"[yellow]⚠[/yellow]  {message}")

    def log_error(self, message: str):
        console.print(f"[red]✗[/red] {message}")

    def show_header(self, title: str, num_pits: int, num_seeds: int, depth: int):
        """Show game header."""
        console.rule(f"[bold blue]{title}[/bold blue]")
        console.print(f"Variant: Kalah({num_pits},{num_seeds})")
        console.print(f"Search depth: {depth} plies")
        console.print()

    def show_board(self, state: GameState):
        console.print(render_board(state))
        style = PLAYER_STYLES[state.player]
        console.print(f"[{style}]{state.player}[/{style}] to move")
        console.print()

    def show_engine_move(self, path: Sequence[int], score: int, nodes: Optional[int] = None):
        moves = " -> ".join(str(pit) for pit in path)
        line = f"Engine plays [bold]{moves}[/bold] (score {score:+d})"
        if nodes is not None:
            line += f" [dim]{nodes:,} nodes[/dim]"
        console.print(line)

    def show_result(self, result: str, final: GameState):
        console.rule("[bold]Game over[/bold]")
        console.print(render_board(final))
        console.print(f"[bold]{result}[/bold]")

    def prompt(self, message: str) -> str:
        return console.input(message)


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
