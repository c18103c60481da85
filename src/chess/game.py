"""
The GameSession will be the entrypoint into the domain layer for the service layer (and for any other host:
a UI loop, a test, an engine match).
It is responsible for orchestrating everything required to play a turn: validate the move, apply it, check whether the
game is over, keep score, and tell whoever is listening.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Self

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.opponent import Opponent
from src.chess.pieces import PLAYING_TEAMS, BoardSquare, Team, opponent
from src.chess.square import Square
from src.core.exceptions import GameStateError
from src.core.models import SessionModel

logger = logging.getLogger(__name__)

# --- Event definitions ---
TurnChangedCallback = Callable[[bool], None]  # is_white_to_move
ScoreUpdatedCallback = Callable[[int, int], None]  # white_score, black_score


@dataclass
class GameEvents:
    """Observable callbacks. Multiple listeners per channel, called synchronously in the order they subscribed."""

    on_turn_changed: list[TurnChangedCallback] = field(default_factory=list)
    on_score_updated: list[ScoreUpdatedCallback] = field(default_factory=list)


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE / HOST ---

    board: Board = field(default_factory=Board)
    team_turn: Team = Team.WHITE
    scores: Optional[dict[Team, int]] = None
    events: GameEvents = field(default_factory=GameEvents)

    @classmethod
    def from_model(cls, model: SessionModel) -> Self:
        """Define how to construct a session from the information the Service layer actually has"""
        board = Board.from_fen(model.position)
        team_name = model.team_to_move.upper()
        if team_name not in (team.name for team in PLAYING_TEAMS):
            raise GameStateError(
                f"Invalid team to move: {model.team_to_move!r}. Pick one from white,black"
            )
        team_turn = Team[team_name]
        scores = {team: model.scores.get(team.name.lower(), 0) for team in PLAYING_TEAMS}
        return cls(board=board, team_turn=team_turn, scores=scores)

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""
        return SessionModel(
            position=self.board.to_fen(),
            team_to_move=self.team_turn.name.lower(),
            scores={team.name.lower(): self.get_score(team) for team in PLAYING_TEAMS},
        )

    # --- OBSERVERS ---
    def subscribe_turn_changed(self, callback: TurnChangedCallback) -> None:
        self.events.on_turn_changed.append(callback)

    def subscribe_score_updated(self, callback: ScoreUpdatedCallback) -> None:
        self.events.on_score_updated.append(callback)

    # --- GAME FLOW ---
    def start(self) -> None:
        """Fresh game with the scores wiped, and let every listener know the starting turn and score."""
        self.prepare_game(reset_score=True)
        self._notify_turn_changed()
        self._notify_score_updated()

    def prepare_game(self, reset_score: bool = True) -> None:
        """
        Starting position, White to move.
        The score slots are always created the first time, even if the caller asked to keep the score.
        """
        self.board.reset()
        self.team_turn = Team.WHITE
        if self.scores is None or reset_score:
            self.scores = {team: 0 for team in PLAYING_TEAMS}

    def play_turn(self, move: Move) -> None:
        """
        Attempt a move for the side to move
        -----

        1. an invalid move is silently ignored: no state change, no notification
        2. apply the move
        3. opponent lost their king? --> credit the mover, new game (scores preserved)
           otherwise --> opponent to move
        4. tell the listeners who is to move now
        """
        if not self.board.is_valid_move(self.team_turn, move):
            logger.debug(
                "Rejected move %d -> %d for %s",
                move.from_index,
                move.to_index,
                self.team_turn.name,
            )
            return

        self.board.play_unsafe_move(move)
        logger.info(
            "%s played %d -> %d", self.team_turn.name, move.from_index, move.to_index
        )

        other_team = opponent(self.team_turn)
        if self.board.does_team_lose(other_team):
            self._credit_win(self.team_turn)
            self.prepare_game(reset_score=False)
        else:
            self.team_turn = other_team

        self._notify_turn_changed()

    def play_opponent_turn(self, opponent_engine: Opponent) -> None:
        """Ask the opponent collaborator for a move for the side to move, and play it like any other proposal."""
        move = opponent_engine.compute_move(self.board, self.team_turn)
        if move is None:
            logger.warning("Opponent produced no move for %s", self.team_turn.name)
            return
        self.play_turn(move)

    # --- READ-ONLY QUERIES ---
    def is_player_turn(self) -> bool:
        """The (human) player has the white pieces"""
        return self.team_turn == Team.WHITE

    def get_square(self, index: int) -> BoardSquare:
        return self.board.square_at(Square.from_index(index))

    def get_score(self, team: Team) -> int:
        if self.scores is None:
            raise GameStateError("Scores are not available before the game is prepared.")
        if team not in self.scores:
            raise GameStateError(f"No score is kept for team {team.name}.")
        return self.scores[team]

    def valid_moves(self, team: Optional[Team] = None) -> list[Move]:
        """Valid moves of the given team (the side to move by default). For collaborators that want to show destinations."""
        return self.board.generate_valid_moves(team or self.team_turn)

    # -- PRIVATE HELPERS ---
    def _credit_win(self, team: Team) -> None:
        assert self.scores is not None
        self.scores[team] += 1
        logger.info(
            "%s captured the king. Score white %d - black %d",
            team.name,
            self.scores[Team.WHITE],
            self.scores[Team.BLACK],
        )
        self._notify_score_updated()

    def _notify_turn_changed(self) -> None:
        is_white_to_move = self.is_player_turn()
        for callback in self.events.on_turn_changed:
            callback(is_white_to_move)

    def _notify_score_updated(self) -> None:
        white_score = self.get_score(Team.WHITE)
        black_score = self.get_score(Team.BLACK)
        for callback in self.events.on_score_updated:
            callback(white_score, black_score)
