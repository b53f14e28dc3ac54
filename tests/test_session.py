import numpy as np
import pytest

from weiqi.core import GamePhase, Point, Stone, Winner, point_key
from weiqi.session import GamePhaseError, GameSession


def corner_capture_session() -> GameSession:
    session = GameSession(board_size=9)
    session.play(1, 0)  # black
    session.play(0, 0)  # white
    return session


def test_new_session_starts_with_black_on_empty_board() -> None:
    session = GameSession(board_size=13)

    assert session.turn == Stone.BLACK
    assert session.phase == GamePhase.PLAYING
    assert session.board.shape == (13, 13)
    assert not session.board.any()


def test_invalid_board_size_raises() -> None:
    with pytest.raises(ValueError):
        GameSession(board_size=7)


def test_play_records_history_and_credits_captures() -> None:
    session = corner_capture_session()

    result = session.play(0, 1)

    assert result.valid
    assert result.captured_count == 1
    assert session.captures.black == 1
    assert session.captures.white == 0
    assert session.board[0, 0] == Stone.EMPTY
    assert session.turn == Stone.WHITE
    assert session.last_move == Point(0, 1)
    assert len(session.history) == 3
    assert not session.history[0].any()
    assert session.history[2][0, 0] == Stone.WHITE
    assert session.message == "Captured 1 stones!"


def test_illegal_move_leaves_state_untouched() -> None:
    session = corner_capture_session()
    board_before = session.board

    result = session.play(1, 0)

    assert not result.valid
    assert session.board is board_before
    assert session.turn == Stone.BLACK
    assert len(session.history) == 2
    assert session.message == result.message


def test_two_passes_enter_scoring_and_moves_are_rejected() -> None:
    session = GameSession()
    session.play(4, 4)
    session.pass_turn()
    assert session.phase == GamePhase.PLAYING
    assert session.last_move is None

    session.pass_turn()

    assert session.phase == GamePhase.SCORING
    with pytest.raises(GamePhaseError):
        session.play(3, 3)
    assert session.legal_moves() == []


def test_stone_between_passes_resets_the_counter() -> None:
    session = GameSession()
    session.pass_turn()
    session.play(4, 4)
    session.pass_turn()

    assert session.phase == GamePhase.PLAYING
    assert session.consecutive_passes == 1


def test_scoring_flow_with_dead_stones() -> None:
    session = GameSession()
    for x in range(9):
        session.play(x, 2)  # black wall on row 2
        if x < 8:
            session.play(x, 6)
        else:
            session.pass_turn()
    session.play(8, 6)  # black stone stranded in white's area
    session.pass_turn()
    session.pass_turn()
    assert session.phase == GamePhase.SCORING

    dead = session.toggle_dead(8, 6)
    assert dead == {point_key(8, 6, 9)}
    score = session.finish_scoring()

    assert session.phase == GamePhase.ENDED
    assert session.is_over
    assert score.white.captures == 1
    assert score is session.score


def test_resignation_ends_game_with_fixed_score() -> None:
    session = GameSession()
    session.play(2, 2)

    score = session.resign()

    assert session.resigned == Stone.WHITE
    assert session.phase == GamePhase.ENDED
    assert score.winner == Winner.BLACK
    assert score.black.total == 100
    assert score.white.total == 0
    with pytest.raises(GamePhaseError):
        session.resign()


def test_undo_restores_board_captures_and_turn() -> None:
    session = corner_capture_session()
    session.play(0, 1)
    session.pass_turn()

    assert session.undo()

    assert session.board[0, 0] == Stone.WHITE
    assert session.board[1, 0] == Stone.EMPTY
    assert session.captures.black == 0
    assert session.turn == Stone.BLACK
    assert len(session.history) == 2


def test_undo_on_fresh_session_is_noop() -> None:
    session = GameSession()

    assert not session.undo()


def test_resume_play_clears_dead_marks() -> None:
    session = GameSession()
    session.play(4, 4)
    session.pass_turn()
    session.pass_turn()
    session.toggle_dead(4, 4)

    session.resume_play()

    assert session.phase == GamePhase.PLAYING
    assert not session.dead_stones
    assert session.consecutive_passes == 0


def test_legal_action_mask_marks_pass_and_excludes_occupied() -> None:
    session = GameSession()
    session.play(4, 4)

    mask = session.legal_action_mask()

    assert mask.shape == (82,)
    assert mask[-1] == 1
    assert mask[point_key(4, 4, 9)] == 0
    assert np.count_nonzero(mask) == 81


def test_undo_restores_previous_last_move() -> None:
    session = GameSession()
    session.play(2, 2)
    session.play(6, 6)

    session.undo()

    assert session.last_move == Point(2, 2)
    assert session.turn == Stone.WHITE

    session.undo()
    assert session.last_move is None
