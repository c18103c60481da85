"""Unit tests for /src/chess/game.py"""

from unittest.mock import Mock, call

import pytest

from src.chess.game import (
    Board,
    BoardSquare,
    GameSession,
    Move,
    SessionModel,
    Team,
)
from src.chess.pieces import PieceType
from src.core.exceptions import GameStateError, InvalidSquareError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
# White king on e2 (index 12), black king right next to it on d3 (index 19)
KINGS_ONLY = "8/8/8/8/8/3k4/4K3/8"
E2_E4 = Move(12, 28)


@pytest.fixture
def session() -> GameSession:
    """Prepared session in the starting position, White to move, 0-0"""
    game = GameSession()
    game.prepare_game()
    return game


@pytest.fixture
def kings_only_session(session: GameSession) -> GameSession:
    session.board = Board.from_fen(KINGS_ONLY)
    return session


@pytest.fixture
def listeners(session: GameSession) -> tuple[Mock, Mock]:
    on_turn = Mock()
    on_score = Mock()
    session.subscribe_turn_changed(on_turn)
    session.subscribe_score_updated(on_score)
    return on_turn, on_score


# -- PREPARING A GAME --
def test_prepare_game(session: GameSession) -> None:
    assert session.board == Board.starting_position()
    assert session.team_turn == Team.WHITE
    assert session.is_player_turn()
    assert session.get_score(Team.WHITE) == 0
    assert session.get_score(Team.BLACK) == 0


def test_first_prepare_creates_scores_even_without_reset() -> None:
    game = GameSession()
    game.prepare_game(reset_score=False)
    assert game.scores == {Team.WHITE: 0, Team.BLACK: 0}


def test_prepare_game_keeps_or_wipes_scores(session: GameSession) -> None:
    session.scores = {Team.WHITE: 3, Team.BLACK: 1}
    session.prepare_game(reset_score=False)
    assert session.scores == {Team.WHITE: 3, Team.BLACK: 1}

    session.prepare_game(reset_score=True)
    assert session.scores == {Team.WHITE: 0, Team.BLACK: 0}


def test_score_before_prepare() -> None:
    with pytest.raises(GameStateError):
        GameSession().get_score(Team.WHITE)


def test_no_score_for_no_team(session: GameSession) -> None:
    with pytest.raises(GameStateError):
        session.get_score(Team.NONE)


def test_start_announces_turn_and_score(
    session: GameSession, listeners: tuple[Mock, Mock]
) -> None:
    on_turn, on_score = listeners
    session.scores = {Team.WHITE: 2, Team.BLACK: 2}
    session.start()
    on_turn.assert_called_once_with(True)
    on_score.assert_called_once_with(0, 0)


# -- PLAYING TURNS --
def test_white_opens_with_e4(session: GameSession, listeners: tuple[Mock, Mock]) -> None:
    on_turn, on_score = listeners
    session.play_turn(E2_E4)

    assert session.team_turn == Team.BLACK
    assert not session.is_player_turn()
    assert session.board.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
    on_turn.assert_called_once_with(False)
    on_score.assert_not_called()


def test_white_opens_with_e3(session: GameSession, listeners: tuple[Mock, Mock]) -> None:
    """Single pawn push e2-e3 (12 -> 20)"""
    on_turn, _ = listeners
    session.play_turn(Move(12, 20))

    assert session.team_turn == Team.BLACK
    assert session.get_square(20) == BoardSquare(PieceType.PAWN, Team.WHITE)
    assert session.get_square(12) == BoardSquare()
    on_turn.assert_called_once_with(False)


def test_turns_alternate(session: GameSession, listeners: tuple[Mock, Mock]) -> None:
    on_turn, _ = listeners
    session.play_turn(E2_E4)
    session.play_turn(Move(52, 36))  # e7-e5
    session.play_turn(Move(6, 21))  # Ng1-f3
    assert session.team_turn == Team.BLACK
    assert on_turn.call_args_list == [call(False), call(True), call(False)]


@pytest.mark.parametrize(
    "move",
    [
        Move(52, 36),  # black pawn while white is to move
        Move(27, 35),  # empty origin
        Move(12, 36),  # too far
        Move(0, 8),  # onto own piece
    ],
)
def test_invalid_move_is_silently_ignored(
    session: GameSession, listeners: tuple[Mock, Mock], move: Move
) -> None:
    on_turn, on_score = listeners
    session.play_turn(move)

    assert session.board == Board.starting_position()
    assert session.team_turn == Team.WHITE
    assert session.scores == {Team.WHITE: 0, Team.BLACK: 0}
    on_turn.assert_not_called()
    on_score.assert_not_called()


def test_empty_origin_is_invalid_for_everyone(session: GameSession) -> None:
    move = Move(27, 35)
    for team in (Team.WHITE, Team.BLACK, Team.NONE):
        assert not session.board.is_valid_move(team, move)


def test_play_turn_before_prepare_is_ignored() -> None:
    game = GameSession()
    game.play_turn(E2_E4)
    assert game.board.squares is None
    assert game.team_turn == Team.WHITE


# -- WINNING --
def test_capturing_the_king_wins(
    kings_only_session: GameSession, listeners: tuple[Mock, Mock]
) -> None:
    """White takes the black king: point for White, new game, White to move, score kept"""
    on_turn, on_score = listeners
    capture = Move(12, 19)

    kings_only_session.play_turn(capture)

    assert kings_only_session.get_score(Team.WHITE) == 1
    assert kings_only_session.get_score(Team.BLACK) == 0
    assert kings_only_session.board == Board.starting_position()
    assert kings_only_session.team_turn == Team.WHITE
    on_score.assert_called_once_with(1, 0)
    on_turn.assert_called_once_with(True)


def test_score_notified_before_turn() -> None:
    """Order of notifications on a win: score first, then the new turn"""
    game = GameSession()
    game.prepare_game()
    game.board = Board.from_fen(KINGS_ONLY)

    observer = Mock()
    game.subscribe_turn_changed(observer.turn)
    game.subscribe_score_updated(observer.score)
    game.play_turn(Move(12, 19))
    assert observer.mock_calls == [call.score(1, 0), call.turn(True)]


def test_black_can_win_too(kings_only_session: GameSession) -> None:
    kings_only_session.team_turn = Team.BLACK
    kings_only_session.scores = {Team.WHITE: 4, Team.BLACK: 2}
    kings_only_session.play_turn(Move(19, 12))
    assert kings_only_session.scores == {Team.WHITE: 4, Team.BLACK: 3}
    assert kings_only_session.team_turn == Team.WHITE
    assert kings_only_session.board == Board.starting_position()


def test_capturing_other_pieces_does_not_win(session: GameSession) -> None:
    session.board = Board.from_fen("4k3/8/8/3q4/4P3/8/8/4K3")
    session.play_turn(Move(28, 35))  # exd5
    assert session.team_turn == Team.BLACK
    assert session.get_score(Team.WHITE) == 0
    assert session.board.to_fen() == "4k3/8/8/3P4/8/8/8/4K3"


# -- QUERIES --
def test_get_square(session: GameSession) -> None:
    assert session.get_square(4) == BoardSquare(PieceType.KING, Team.WHITE)
    assert session.get_square(60) == BoardSquare(PieceType.KING, Team.BLACK)
    assert session.get_square(30) == BoardSquare()
    with pytest.raises(InvalidSquareError):
        session.get_square(64)


def test_valid_moves_default_to_side_to_move(session: GameSession) -> None:
    assert session.valid_moves() == session.board.generate_valid_moves(Team.WHITE)
    session.play_turn(E2_E4)
    assert session.valid_moves() == session.board.generate_valid_moves(Team.BLACK)
    assert session.valid_moves(Team.WHITE) == session.board.generate_valid_moves(Team.WHITE)


# -- OPPONENT COLLABORATOR --
def test_play_opponent_turn(session: GameSession) -> None:
    session.play_turn(E2_E4)
    opponent = Mock()
    opponent.compute_move.return_value = Move(52, 36)
    session.play_opponent_turn(opponent)

    opponent.compute_move.assert_called_once_with(session.board, Team.BLACK)
    assert session.team_turn == Team.WHITE


def test_opponent_without_move(session: GameSession, listeners: tuple[Mock, Mock]) -> None:
    on_turn, _ = listeners
    opponent = Mock()
    opponent.compute_move.return_value = None
    session.play_opponent_turn(opponent)
    assert session.team_turn == Team.WHITE
    on_turn.assert_not_called()


def test_opponent_gets_no_special_treatment(session: GameSession) -> None:
    """An invalid proposal of the opponent is ignored like any other"""
    opponent = Mock()
    opponent.compute_move.return_value = Move(52, 36)  # black move while white is to move
    session.play_opponent_turn(opponent)
    assert session.board == Board.starting_position()


# -- CONVERSION --
def test_model_roundtrip(session: GameSession) -> None:
    session.play_turn(E2_E4)
    session.scores = {Team.WHITE: 5, Team.BLACK: 7}
    model = session.to_model()
    assert model == SessionModel(
        position="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR",
        team_to_move="black",
        scores={"white": 5, "black": 7},
    )
    rebuilt = GameSession.from_model(model)
    assert rebuilt.board == session.board
    assert rebuilt.team_turn == Team.BLACK
    assert rebuilt.to_model() == model


def test_from_model_invalid_team() -> None:
    model = SessionModel(position=STARTING_POSITION, team_to_move="none", scores={})
    with pytest.raises(GameStateError):
        GameSession.from_model(model)
