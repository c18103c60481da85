"""
Contract for whoever computes the moves of the computer-controlled side.

The session only needs "give me a move for this team on this board". How that move is found (search, heuristics,
a network call) is none of the rule engine's business.
"""

import random
from typing import Optional, Protocol

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Team


class Opponent(Protocol):
    def compute_move(self, board: Board, team: Team) -> Optional[Move]:
        """Propose a move for `team`. None if there is nothing to propose. Must not mutate the board."""
        ...


class RandomOpponent:
    """Picks any valid move, uniformly. Pass a seed for reproducible games."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def compute_move(self, board: Board, team: Team) -> Optional[Move]:
        valid_moves = board.generate_valid_moves(team)
        if not valid_moves:
            return None
        return self._rng.choice(valid_moves)
