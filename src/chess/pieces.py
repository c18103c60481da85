"""Defines the piece types, the teams, and what a single square of the board holds"""

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Self

from src.core.exceptions import InvalidSquareError


class PieceType(Enum):
    NONE = auto()
    KING = auto()
    QUEEN = auto()
    ROOK = auto()
    KNIGHT = auto()
    BISHOP = auto()
    PAWN = auto()


class Team(Enum):
    WHITE = auto()
    BLACK = auto()
    NONE = auto()


class TeamFlag(Flag):
    """
    Which occupancy states are acceptable destinations for a move.
    ex) a pawn push only accepts NONE, a rook slide accepts ENEMY | NONE.
    """

    NONE = 1
    FRIEND = 2
    ENEMY = 4


DEFAULT_TEAM_FLAGS = TeamFlag.ENEMY | TeamFlag.NONE

PLAYING_TEAMS: tuple[Team, Team] = (Team.WHITE, Team.BLACK)


def opponent(team: Team) -> Team:
    """Only defined for the two playing teams"""
    return Team.BLACK if team == Team.WHITE else Team.WHITE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Back rank from the a-file to the h-file, identical for both teams
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True)
class BoardSquare:
    """What occupies a square: a piece kind and the team owning it. An empty square is (NONE, NONE)."""

    piece: PieceType = PieceType.NONE
    team: Team = Team.NONE

    def __post_init__(self):
        # NOTE: nobody owns an empty square, and an occupied square always has an owner
        if (self.piece == PieceType.NONE) != (self.team == Team.NONE):
            raise InvalidSquareError(
                f"Piece {self.piece.name} cannot be owned by team {self.team.name}."
            )

    @property
    def is_empty(self) -> bool:
        return self.piece == PieceType.NONE

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        team = Team.WHITE if character.isupper() else Team.BLACK
        piece = FEN_TO_PIECE[character.lower()]
        return cls(piece, team)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.piece].upper()
            if self.team == Team.WHITE
            else PIECE_TO_FEN[self.piece].lower()
        )


EMPTY_SQUARE = BoardSquare(PieceType.NONE, Team.NONE)
