from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

import numpy as np

from weiqi.core import (
    KOMI,
    BoardArray,
    Captures,
    GamePhase,
    MoveResult,
    Point,
    ScoreResult,
    Stone,
    action_space_size,
    attempt_move,
    calculate_final_score,
    encode_move,
    enumerate_legal_moves,
    freeze_board,
    initialize_board,
    render_board,
    resignation_score,
    toggle_dead_group,
)

logger = logging.getLogger(__name__)


class GamePhaseError(ValueError):
    pass


@dataclass
class GameSession:
    board_size: int = 9
    komi: float = KOMI
    board: BoardArray = field(init=False)
    turn: Stone = field(init=False, default=Stone.BLACK)
    captures: Captures = field(init=False, default_factory=Captures)
    history: List[BoardArray] = field(init=False, default_factory=list)
    capture_history: List[Tuple[Captures, Stone, Optional[Point]]] = field(init=False, default_factory=list)
    last_move: Optional[Point] = field(init=False, default=None)
    phase: GamePhase = field(init=False, default=GamePhase.PLAYING)
    consecutive_passes: int = field(init=False, default=0)
    dead_stones: FrozenSet[int] = field(init=False, default_factory=frozenset)
    score: Optional[ScoreResult] = field(init=False, default=None)
    resigned: Optional[Stone] = field(init=False, default=None)
    move_count: int = field(init=False, default=0)
    message: str = field(init=False, default="Game started. Black to move.")

    def __post_init__(self) -> None:
        self.board = freeze_board(initialize_board(self.board_size))

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.ENDED

    def play(self, x: int, y: int) -> MoveResult:
        self._require(GamePhase.PLAYING, "play a stone")
        player = self.turn
        result = attempt_move(self.board, x, y, player)
        if not result.valid:
            self.message = result.message or "Invalid move"
            logger.debug("Rejected %s at (%d,%d): %s", player.label, x, y, self.message)
            return result

        self.history.append(self.board)
        self.capture_history.append((self.captures, player, self.last_move))
        self.board = result.board
        self.captures = self.captures.add(player, result.captured_count)
        self.consecutive_passes = 0
        self.last_move = Point(x, y)
        self.turn = player.opponent
        self.move_count += 1
        self.message = f"Captured {result.captured_count} stones!" if result.captured_count else ""
        logger.debug("%s played (%d,%d), captured %d", player.label, x, y, result.captured_count)
        return result

    def pass_turn(self) -> None:
        self._require(GamePhase.PLAYING, "pass")
        player = self.turn
        self.consecutive_passes += 1
        self.last_move = None
        self.turn = player.opponent
        self.move_count += 1
        if self.consecutive_passes >= 2:
            self.phase = GamePhase.SCORING
            self.message = "Both passed. Mark dead stones, then calculate the score."
            logger.info("Both players passed after %d moves; entering scoring", self.move_count)
        else:
            self.message = f"{player.label.capitalize()} passed. {self.turn.label.capitalize()} to move."

    def resign(self, player: Optional[Stone] = None) -> ScoreResult:
        if self.phase == GamePhase.ENDED:
            raise GamePhaseError("Game is already over.")
        loser = Stone(player) if player is not None else self.turn
        self.resigned = loser
        self.score = resignation_score(loser, self.captures, self.komi)
        self.phase = GamePhase.ENDED
        self.message = f"{loser.label.capitalize()} resigned. {self.score.winner.value.capitalize()} wins."
        logger.info(self.message)
        return self.score

    def toggle_dead(self, x: int, y: int) -> FrozenSet[int]:
        self._require(GamePhase.SCORING, "mark dead stones")
        self.dead_stones = toggle_dead_group(self.board, self.dead_stones, x, y)
        return self.dead_stones

    def finish_scoring(self) -> ScoreResult:
        self._require(GamePhase.SCORING, "calculate the score")
        self.score = calculate_final_score(self.board, self.dead_stones, self.captures, self.komi)
        self.phase = GamePhase.ENDED
        self.message = f"Game over. Winner: {self.score.winner.value.upper()}"
        logger.info(
            "Final score black=%.1f white=%.1f winner=%s",
            self.score.black.total,
            self.score.white.total,
            self.score.winner.value,
        )
        return self.score

    def resume_play(self) -> None:
        """Leave the scoring phase and continue playing, clearing dead marks."""
        self._require(GamePhase.SCORING, "resume play")
        self.phase = GamePhase.PLAYING
        self.consecutive_passes = 0
        self.dead_stones = frozenset()
        self.message = f"Play resumed. {self.turn.label.capitalize()} to move."

    def undo(self) -> bool:
        """Take back the last stone placement. Passes are not recorded in history."""
        if self.phase != GamePhase.PLAYING or not self.history:
            return False
        self.board = self.history.pop()
        self.captures, self.turn, self.last_move = self.capture_history.pop()
        self.consecutive_passes = 0
        self.move_count = max(0, self.move_count - 1)
        self.message = "Move undone."
        return True

    def legal_moves(self) -> List[Point]:
        if self.phase != GamePhase.PLAYING:
            return []
        return enumerate_legal_moves(self.board, self.turn)

    def legal_action_mask(self) -> np.ndarray:
        """Mask over points plus a trailing pass; empty outside the playing phase."""
        mask = np.zeros(action_space_size(self.board_size), dtype=np.int8)
        if self.phase != GamePhase.PLAYING:
            return mask
        for point in self.legal_moves():
            mask[encode_move(point, self.board_size)] = 1
        mask[-1] = 1
        return mask

    def render(self) -> str:
        return render_board(self.board)

    def _require(self, phase: GamePhase, action: str) -> None:
        if self.phase != phase:
            raise GamePhaseError(f"Cannot {action} during the {self.phase.value} phase.")
