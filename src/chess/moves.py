"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the move sets for each piece type.

Moves generated here are pseudo-legal: we never look at whether a move leaves your own king hanging.
That is consistent with the win condition (the king must actually be captured), see Board.does_team_lose().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import DEFAULT_TEAM_FLAGS, BoardSquare, PieceType, Team, TeamFlag
from src.chess.square import Square, Vector


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def square_at(self, square: Square) -> BoardSquare: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made: linear index of the origin and of the destination"""

    from_index: int
    to_index: int

    @classmethod
    def from_squares(cls, from_square: Square, to_square: Square) -> Self:
        return cls(from_square.index, to_square.index)

    @property
    def from_square(self) -> Square:
        return Square.from_index(self.from_index)

    @property
    def to_square(self) -> Square:
        return Square.from_index(self.to_index)


# --- DIRECTIONS ---
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (-1, 0), (1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
KING_DELTAS: list[Vector] = [
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
]
KNIGHT_DELTAS: list[Vector] = [
    (1, 2),
    (2, 1),
    (-1, 2),
    (-2, 1),
    (1, -2),
    (2, -1),
    (-1, -2),
    (-2, -1),
]

# Starting rank (0-based) of the pawns, and the direction they move in. White moves UP the board, Black moves DOWN.
PAWN_START_RANK: dict[Team, int] = {Team.WHITE: 1, Team.BLACK: 6}
PAWN_DIRECTION: dict[Team, int] = {Team.WHITE: 1, Team.BLACK: -1}


# --- DESTINATION FILTER ---
def is_valid_square(
    target: Optional[Square],
    team: Team,
    team_flag: TeamFlag,
    board: Board,
) -> bool:
    """
    Can a piece of `team` land on `target`?
    ---

    * off the board (None): never
    * empty square: only if the flag allows NONE
    * opponent's piece: only if the flag allows ENEMY
    * own piece: never (FRIEND exists as a flag, but no movement rule asks for it)
    """
    if target is None:
        return False

    occupant = board.square_at(target)
    if occupant.team == Team.NONE:
        return bool(team_flag & TeamFlag.NONE)
    if occupant.team != team:
        return bool(team_flag & TeamFlag.ENEMY)
    return False


def add_move_if_valid(
    origin: Square,
    target: Optional[Square],
    board: Board,
    moves: list[Move],
    team_flag: TeamFlag = DEFAULT_TEAM_FLAGS,
) -> None:
    team = board.square_at(origin).team
    if target is not None and is_valid_square(target, team, team_flag, board):
        moves.append(Move.from_squares(origin, target))


# --- MOVEMENT RULES ---
def raycasting_move(square: Square, board: Board, directions: list[Vector]) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    We define move directions and walk along them one step at a time until we hit another piece or
    the edge of the board.

    An occupied square ends the ray. It is the last reachable square on the ray if it holds an opponent's piece (capture),
    and not reachable at all if it holds one of your own pieces.
    """
    team = board.square_at(square).team

    moves: list[Move] = []
    for direction in directions:
        target = square + direction
        while target is not None and board.square_at(target).team != team:
            add_move_if_valid(square, target, board, moves)
            if not board.square_at(target).is_empty:
                break
            target = target + direction
    return moves


def single_step_move(
    square: Square,
    board: Board,
    deltas: list[Vector],
    team_flag: TeamFlag = DEFAULT_TEAM_FLAGS,
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights that just can move a single step along a direction"""
    moves: list[Move] = []
    for delta in deltas:
        add_move_if_valid(square, square + delta, board, moves, team_flag)
    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, but only onto an empty square (it cannot take forward).
    - can move by two from its starting rank, again only onto an empty square.
    - takes diagonally forward, and ONLY takes (a diagonal step onto an empty square is not allowed).

    NOTE: the square jumped over by the double step is not checked. Known simplification of this rule set.
    NOTE: no en passant, no promotion.
    """
    team = board.square_at(square).team
    direction = PAWN_DIRECTION[team]

    moves: list[Move] = []
    front = square.step(0, direction)
    add_move_if_valid(square, front, board, moves, TeamFlag.NONE)

    if square.rank == PAWN_START_RANK[team]:
        add_move_if_valid(square, square.step(0, 2 * direction), board, moves, TeamFlag.NONE)

    if front is not None:
        add_move_if_valid(square, front.left(), board, moves, TeamFlag.ENEMY)
        add_move_if_valid(square, front.right(), board, moves, TeamFlag.ENEMY)
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    diagonal_moves = candidate_bishop_moves(square, board)
    return horizontal_and_vertical_moves + diagonal_moves


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """The king can move by a single square at the time."""
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.KING: candidate_king_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.PAWN: candidate_pawn_moves,
}
