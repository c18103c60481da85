"""
Type definitions used across layers
"""

from enum import StrEnum

# --- Team and PieceType here are the transport-safe (string) versions. The domain versions, including the
# --- "nothing on this square" members, live in src/chess/pieces.py
# --- NOTE Same names are used on purpose. The imports show which versions are used in what part of the code


class Team(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class EventKind(StrEnum):
    """The two notification channels a session publishes on."""

    TURN_CHANGED = "turn_changed"
    SCORE_UPDATED = "score_updated"
