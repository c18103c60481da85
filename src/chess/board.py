"""The Game board implements all rules that affect the `position` (in chess: the configuration of pieces on the board)"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.moves import MOVEMENT_RULES, CandidateMovesFn, Move
from src.chess.pieces import BACK_RANK, EMPTY_SQUARE, BoardSquare, PieceType, Team
from src.chess.square import BOARD_SIZE, NUM_SQUARES, Square
from src.core.exceptions import InvalidFENError

logger = logging.getLogger(__name__)


@dataclass
class Board:
    """
    Flat list of 64 squares, indexed by Square.index (a1 = 0, h1 = 7, a8 = 56, h8 = 63).

    Starts out without squares. The first reset() allocates them, later resets clear them in place.
    """

    squares: Optional[list[BoardSquare]] = None

    @classmethod
    def starting_position(cls) -> Self:
        board = cls()
        board.reset()
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using a board diagram.

        That is, we supply the first part of the FEN string that denotes the board position
        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        fen_by_ranks = fen_str.strip().split("/")
        if len(fen_by_ranks) != BOARD_SIZE:
            raise InvalidFENError(
                f"Board diagram needs {BOARD_SIZE} ranks, got {len(fen_by_ranks)}: {fen_str!r}"
            )

        board = cls()
        board.clear()
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_SIZE - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character in "12345678":
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue

                if character.lower() not in "pnbrqk" or file >= BOARD_SIZE:
                    raise InvalidFENError(
                        f"Cannot place {character!r} on rank {rank + 1}: {fen_one_rank!r}"
                    )
                board.squares[Square(file, rank).index] = BoardSquare.from_fen(character)  # type: ignore[index]
                file += 1

            if file != BOARD_SIZE:
                raise InvalidFENError(
                    f"Rank {rank + 1} does not describe {BOARD_SIZE} squares: {fen_one_rank!r}"
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_SIZE - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_SIZE):
            occupant = self.square_at(Square(file, rank))

            if not occupant.is_empty:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(occupant.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def __str__(self) -> str:
        """Board diagram for log output. 8th rank on top, '.' for an empty square"""
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = [
                "." if occupant.is_empty else occupant.to_fen()
                for occupant in (
                    self.square_at(Square(file, rank)) for file in range(BOARD_SIZE)
                )
            ]
            rows.append(" ".join(row))
        return "\n".join(rows)

    # --- SQUARE ACCESS ---
    def square_at(self, square: Square) -> BoardSquare:
        """NOTE: callers must have handled 'off the board' already. Off-board squares are never passed in here."""
        return self.squares[square.index]  # type: ignore[index]

    def set_square(self, square: Square, piece: PieceType, team: Team) -> None:
        self.squares[square.index] = BoardSquare(piece, team)  # type: ignore[index]

    def locate_team(self, team: Team) -> list[Square]:
        return [
            Square.from_index(index)
            for index, occupant in enumerate(self.squares or [])
            if occupant.team == team
        ]

    def clear(self) -> None:
        """Empty every square. Allocates the squares the first time around, afterwards reuses the same list."""
        if self.squares is None:
            self.squares = [EMPTY_SQUARE for _ in range(NUM_SQUARES)]
            return

        for index in range(len(self.squares)):
            self.squares[index] = EMPTY_SQUARE

    def reset(self) -> None:
        """Standard starting position: White on ranks 1-2, Black on ranks 7-8"""
        self.clear()
        for team, back_rank, pawn_rank in [
            (Team.WHITE, 0, 1),
            (Team.BLACK, BOARD_SIZE - 1, BOARD_SIZE - 2),
        ]:
            for file, piece in enumerate(BACK_RANK):
                self.set_square(Square(file, back_rank), piece, team)
                self.set_square(Square(file, pawn_rank), PieceType.PAWN, team)

    # --- MOVE GENERATION / VALIDATION ---
    def generate_valid_moves(self, team: Team) -> list[Move]:
        """
        Full scan of the board: every square owned by `team` gets its movement rule applied.

        NOTE: moves are pseudo-legal. No check detection. Duplicates cannot occur: every origin is visited once.
        """
        if team == Team.NONE:
            # empty squares do not move
            return []

        valid_moves: list[Move] = []
        for square in self.locate_team(team):
            piece = self.square_at(square).piece
            movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece]
            valid_moves.extend(movement_rule(square, self))
        logger.debug("Generated %d moves for %s", len(valid_moves), team.name)
        return valid_moves

    def is_valid_move(self, team: Team, move: Move) -> bool:
        """Regenerates the whole move set every time. Cheap enough on an 8x8 board."""
        return move in self.generate_valid_moves(team)

    def play_unsafe_move(self, move: Move) -> None:
        """
        Update the position on the board: relocate the piece, empty the origin.

        NOTE: no checks at all. Whatever stood on the destination is overwritten.
        Only call this with a move that passed is_valid_move().
        """
        self.squares[move.to_index] = self.squares[move.from_index]  # type: ignore[index]
        self.squares[move.from_index] = EMPTY_SQUARE  # type: ignore[index]

    def does_team_lose(self, team: Team) -> bool:
        """
        Approximation of checkmate: you lose once your king has been captured.
        """
        return not any(
            occupant.team == team and occupant.piece == PieceType.KING
            for occupant in self.squares or []
        )
