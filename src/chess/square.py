"""
A square on the board, and the coordinate arithmetic on it.

(placed in its own module as multiple other modules need to import it)

Squares are 0-based: file 0 is the a-file, rank 0 is White's back rank. The board itself is a flat list,
so every Square also has a linear index: file + rank * BOARD_SIZE.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8. Kept as a constant so the arithmetic below reads clearly
BOARD_SIZE = 8
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE

Vector = tuple[int, int]


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_index(cls, index: int) -> Square:
        """Linear index 0-63 to (file, rank)."""
        if not 0 <= index < NUM_SQUARES:
            raise InvalidSquareError(
                f"Square index {index} outside of the board (0-{NUM_SQUARES - 1})."
            )
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    @property
    def index(self) -> int:
        return self.file + self.rank * BOARD_SIZE

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_SIZE) and (0 <= self.rank < BOARD_SIZE)

    def step(self, df: int, dr: int) -> Optional[Square]:
        """
        Move along a vector.
        ---

        Returns None (off the board) when the new file or rank leaves the board.
        NOTE: never wrap around. A rook sliding off the h-file must not reappear on the a-file of the next rank,
        which is exactly what would happen if we did the arithmetic on the linear index instead.
        """
        target = Square(self.file + df, self.rank + dr)
        return target if target.is_within_bounds() else None

    def __add__(self, vector: Vector) -> Optional[Square]:
        df, dr = vector
        return self.step(df, dr)

    def left(self) -> Optional[Square]:
        return self.step(-1, 0)

    def right(self) -> Optional[Square]:
        return self.step(1, 0)

    def up(self) -> Optional[Square]:
        """Towards Black's side of the board (increasing rank)"""
        return self.step(0, 1)

    def down(self) -> Optional[Square]:
        """Towards White's side of the board (decreasing rank)"""
        return self.step(0, -1)
