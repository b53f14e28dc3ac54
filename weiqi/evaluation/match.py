from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from weiqi.agents import Policy, select_action
from weiqi.core import Stone, Winner
from weiqi.env import WeiqiEnv


@dataclass
class EvaluationResult:
    games_played: int
    black_wins: int
    white_wins: int
    draws: int
    average_length: float

    def winrate_black(self) -> float:
        return self.black_wins / max(1, self.games_played)

    def winrate_white(self) -> float:
        return self.white_wins / max(1, self.games_played)


def evaluate_policies(
    policy_black: Policy,
    policy_white: Policy,
    *,
    episodes: int,
    env_factory: Optional[Callable[[], WeiqiEnv]] = None,
    temperature: float = 1.0,
    rng: Optional[np.random.Generator] = None,
) -> EvaluationResult:
    """Play ``episodes`` games between two policies.

    Games cut off by the environment's move limit count as draws.
    """
    env_factory = env_factory or WeiqiEnv
    rng = rng or np.random.default_rng()

    black_wins = 0
    white_wins = 0
    draws = 0
    total_moves = 0

    for _ in range(episodes):
        env = env_factory()
        obs, info = env.reset()
        terminated = False
        truncated = False

        while not (terminated or truncated):
            session = env.session
            legal_mask = info["legal_action_mask"]
            policy = policy_black if session.turn == Stone.BLACK else policy_white
            probs = policy.act(session, legal_mask) * legal_mask
            if probs.sum() <= 0:
                probs = legal_mask.astype(np.float32)
            action_index = select_action(probs, temperature, rng)
            obs, reward, terminated, truncated, info = env.step(action_index)

        total_moves += env.session.move_count
        score = env.session.score
        if score is not None and score.winner == Winner.BLACK:
            black_wins += 1
        elif score is not None and score.winner == Winner.WHITE:
            white_wins += 1
        else:
            draws += 1

    return EvaluationResult(
        games_played=episodes,
        black_wins=black_wins,
        white_wins=white_wins,
        draws=draws,
        average_length=total_moves / max(1, episodes),
    )
