from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from weiqi.core import (
    DEFAULT_BOARD_SIZE,
    KOMI,
    GamePhase,
    Winner,
    action_space_size,
    decode_move,
)
from weiqi.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor
from weiqi.session import GameSession


class WeiqiEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        board_size: int = DEFAULT_BOARD_SIZE,
        komi: float = KOMI,
        max_moves: Optional[int] = None,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.board_size = board_size
        self.komi = komi
        self._max_moves = max_moves if max_moves is not None else 4 * board_size * board_size
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, board_size, board_size)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(action_space_size(board_size))

        self._session = GameSession(board_size=board_size, komi=komi)

    @property
    def session(self) -> GameSession:
        return self._session

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        if options and "max_moves" in options:
            self._max_moves = int(options["max_moves"])
        self._session = GameSession(board_size=self.board_size, komi=self.komi)
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        legal_mask = self.legal_action_mask()
        if not legal_mask[action_index]:
            if self._enforce_legal:
                raise ValueError("Illegal action provided and enforce_legal_actions=True.")
            action_index = self.action_space.n - 1

        point = decode_move(int(action_index), self.board_size)
        if point is None:
            self._session.pass_turn()
        else:
            self._session.play(point.x, point.y)

        terminated = False
        if self._session.phase == GamePhase.SCORING:
            self._session.finish_scoring()
            terminated = True
        truncated = not terminated and self._session.move_count >= self._max_moves

        reward = self._compute_reward() if terminated else 0.0
        return self._build_observation(), reward, terminated, truncated, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        return self._session.legal_action_mask()

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._session.render()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._session), "aux": build_aux_vector(self._session)}

    def _build_info(self) -> Dict[str, object]:
        info: Dict[str, object] = {"legal_action_mask": self.legal_action_mask()}
        if self._session.score is not None:
            info["score"] = self._session.score.as_dict()
        return info

    def _compute_reward(self) -> float:
        winner = self._session.score.winner
        if winner == Winner.BLACK:
            return 1.0
        if winner == Winner.WHITE:
            return -1.0
        return 0.0
