"""Orchestration of communication from API layer to business logic and storage layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateSessionRequest,
    DeleteSessionRequest,
    EventModel,
    GetSessionRequest,
    MoveModel,
    NewGameRequest,
    OpponentTurnRequest,
    PlayTurnRequest,
    SessionResponse,
    SquareModel,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.chess.board import Board
from src.chess.game import GameSession
from src.chess.moves import Move
from src.chess.opponent import Opponent, RandomOpponent
from src.chess.pieces import Team as DomainTeam
from src.core.exceptions import SessionNotFoundError
from src.core.models import SessionModel
from src.core.shared_types import EventKind, PieceType, Team
from src.db.repository import SessionRepository

logger = logging.getLogger(__name__)


class EventRecorder:
    """Listens on both channels of a GameSession and keeps what it heard, in order."""

    def __init__(self) -> None:
        self.events: list[EventModel] = []

    def attach(self, session: GameSession) -> None:
        session.subscribe_turn_changed(self.on_turn_changed)
        session.subscribe_score_updated(self.on_score_updated)

    def on_turn_changed(self, is_white_to_move: bool) -> None:
        self.events.append(
            EventModel(kind=EventKind.TURN_CHANGED, is_white_to_move=is_white_to_move)
        )

    def on_score_updated(self, white_score: int, black_score: int) -> None:
        self.events.append(
            EventModel(
                kind=EventKind.SCORE_UPDATED,
                white_score=white_score,
                black_score=black_score,
            )
        )


class ChessService:
    """Orchestration of layers for the chess game."""

    def __init__(
        self, repository: SessionRepository, opponent: Opponent | None = None
    ) -> None:
        self.repo = repository
        self.opponent = opponent or RandomOpponent()

    # -- API routes logic ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Start a new session: fresh scores, White to move. Optionally from a given board diagram."""

        session = GameSession()
        recorder = EventRecorder()
        recorder.attach(session)
        session.start()

        if request.starting_position is not None:
            session.board = Board.from_fen(request.starting_position)

        # Store the SessionModel in the repository
        stored_session, session_id = self.repo.create_session(session.to_model())
        logger.info("Created session %s", session_id)

        return self._create_session_response(session_id, stored_session, recorder)

    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        """
        Retrieve current session state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        session_model = self._fetch_session(request.session_id)
        return self._create_session_response(request.session_id, session_model)

    def valid_moves(self, request: ValidMovesRequest) -> ValidMovesResponse:
        """Retrieve the set of valid moves (for the side to move, unless a team is given)."""

        session = GameSession.from_model(self._fetch_session(request.session_id))
        team = DomainTeam[request.team.name] if request.team else session.team_turn
        moves = session.valid_moves(team)
        return ValidMovesResponse(
            session_id=request.session_id,
            team=Team[team.name],
            moves=[
                MoveModel(from_index=move.from_index, to_index=move.to_index)
                for move in moves
            ],
        )

    def play_turn(self, request: PlayTurnRequest) -> SessionResponse:
        """
        Propose a move for the side to move.

        NOTE: an invalid move is not an error. The response simply shows the unchanged state and no events.
        """
        session = GameSession.from_model(self._fetch_session(request.session_id))
        recorder = EventRecorder()
        recorder.attach(session)

        session.play_turn(Move(request.from_index, request.to_index))

        after_turn = session.to_model()
        self.repo.update_session(request.session_id, after_turn)
        return self._create_session_response(request.session_id, after_turn, recorder)

    def play_opponent_turn(self, request: OpponentTurnRequest) -> SessionResponse:
        """Let the computer-controlled opponent move for the side to move."""
        session = GameSession.from_model(self._fetch_session(request.session_id))
        recorder = EventRecorder()
        recorder.attach(session)

        session.play_opponent_turn(self.opponent)

        after_turn = session.to_model()
        self.repo.update_session(request.session_id, after_turn)
        return self._create_session_response(request.session_id, after_turn, recorder)

    def new_game(self, request: NewGameRequest) -> SessionResponse:
        """Back to the starting position, keeping or wiping the scores."""
        session = GameSession.from_model(self._fetch_session(request.session_id))
        recorder = EventRecorder()
        recorder.attach(session)

        if request.reset_score:
            session.start()
        else:
            session.prepare_game(reset_score=False)

        restarted = session.to_model()
        self.repo.update_session(request.session_id, restarted)
        return self._create_session_response(request.session_id, restarted, recorder)

    def delete_session(self, request: DeleteSessionRequest) -> None:
        """Handle a request to delete a session record."""
        if self.repo.delete_session(request.session_id) is None:
            raise SessionNotFoundError(f"Session with session_id={request.session_id} not found.")
        logger.info("Deleted session %s", request.session_id)

    # -- Internal helpers --
    def _create_session_response(
        self,
        session_id: UUID,
        model: SessionModel,
        recorder: EventRecorder | None = None,
    ) -> SessionResponse:
        """Convert info in SessionModel to a SessionResponse (for session with given ID.)"""
        board = Board.from_fen(model.position)
        pieces = [
            SquareModel(
                index=index,
                piece=PieceType[occupant.piece.name],
                team=Team[occupant.team.name],
            )
            for index, occupant in enumerate(board.squares or [])
            if not occupant.is_empty
        ]
        team_to_move = Team(model.team_to_move)
        return SessionResponse(
            session_id=session_id,
            team_to_move=team_to_move,
            is_white_to_move=team_to_move == Team.WHITE,
            scores=model.scores,
            position=model.position,
            pieces=pieces,
            events=recorder.events if recorder else [],
        )

    def _fetch_session(self, session_id: UUID) -> SessionModel:
        """Attempt to find the session in the repository and raise error if it fails."""
        session_model = self.repo.get_session(session_id)
        if session_model is None:
            raise SessionNotFoundError(f"Session with {session_id=} not found.")
        return session_model
