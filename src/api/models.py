"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import EventKind, PieceType, Team

TeamName = str
Score = int

NUM_SQUARES = 64
NUM_RANKS = 8


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    starting_position: Optional[str] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        ranks = value.strip().split("/")
        if len(ranks) != NUM_RANKS:
            raise InvalidRequestError(
                f"Board diagram must contain {NUM_RANKS} '/'-separated ranks."
            )
        return value.strip()


class GetSessionRequest(BaseModel):
    session_id: UUID


class ValidMovesRequest(BaseModel):
    session_id: UUID
    team: Optional[Team] = None


class PlayTurnRequest(BaseModel):
    session_id: UUID
    from_index: int
    to_index: int

    @field_validator(*["from_index", "to_index"])
    @classmethod
    def validate_index(cls, value: int) -> int:
        if not 0 <= value < NUM_SQUARES:
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a square index (0-{NUM_SQUARES - 1})."
            )
        return value


class OpponentTurnRequest(BaseModel):
    session_id: UUID


class NewGameRequest(BaseModel):
    session_id: UUID
    reset_score: bool = True


class DeleteSessionRequest(BaseModel):
    session_id: UUID


# --- RESPONSE MODELS ---
class EventModel(BaseModel):
    """One notification fired while handling the request"""

    kind: EventKind
    is_white_to_move: Optional[bool] = None
    white_score: Optional[Score] = None
    black_score: Optional[Score] = None


class MoveModel(BaseModel):
    from_index: int
    to_index: int


class SquareModel(BaseModel):
    index: int
    piece: PieceType
    team: Team


class SessionResponse(BaseModel):
    session_id: UUID
    team_to_move: Team
    is_white_to_move: bool
    scores: dict[TeamName, Score]
    position: str
    pieces: list[SquareModel]
    events: list[EventModel] = []


class ValidMovesResponse(BaseModel):
    session_id: UUID
    team: Team
    moves: list[MoveModel]
