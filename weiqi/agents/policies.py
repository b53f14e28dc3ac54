from __future__ import annotations

from typing import Optional

import numpy as np

from weiqi.core import decode_move
from weiqi.session import GameSession

from .suggestion import MoveSuggestion, SuggestionRequest


class Policy:
    """Policy interface producing move probabilities over the legal mask."""

    def act(self, session: GameSession, legal_mask: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def act(self, session: GameSession, legal_mask: np.ndarray) -> np.ndarray:
        logits = legal_mask.astype(np.float64)
        if logits.sum() == 0:
            return logits.astype(np.float32)
        probs = logits / logits.sum()
        return probs.astype(np.float32, copy=True)


class RuleBasedPolicy(Policy):
    """Prefers points near the centre and only passes when nothing else is legal."""

    def __init__(self, rng: Optional[np.random.Generator] = None, sharpness: float = 1.0) -> None:
        self.rng = rng or np.random.default_rng()
        self.sharpness = sharpness

    def act(self, session: GameSession, legal_mask: np.ndarray) -> np.ndarray:
        result = np.zeros_like(legal_mask, dtype=np.float32)
        size = session.board_size
        indices = [int(idx) for idx in np.flatnonzero(legal_mask) if idx != size * size]
        if not indices:
            if legal_mask[-1]:
                result[-1] = 1.0
            return result

        centre = np.array([(size - 1) / 2.0, (size - 1) / 2.0])
        scores = []
        for idx in indices:
            point = decode_move(idx, size)
            scores.append(-self.sharpness * np.linalg.norm(np.array([point.x, point.y]) - centre))

        scores = np.array(scores)
        scores -= scores.max()
        probs = np.exp(scores)
        probs /= probs.sum()
        result[indices] = probs
        return result


def select_action(probabilities: np.ndarray, temperature: float, rng: np.random.Generator) -> int:
    if probabilities.sum() <= 0:
        raise ValueError("Policy produced zero probability over legal actions.")
    probs = probabilities.astype(np.float64, copy=True)
    probs /= probs.sum()
    if temperature <= 1e-6:
        return int(np.argmax(probs))
    adjusted = probs ** (1.0 / temperature)
    adjusted /= adjusted.sum()
    return int(rng.choice(len(adjusted), p=adjusted))


class PolicySuggester:
    """Adapts a :class:`Policy` to the move-suggestion callable interface."""

    def __init__(
        self,
        policy: Policy,
        *,
        temperature: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.policy = policy
        self.temperature = temperature
        self.rng = rng or np.random.default_rng()

    def __call__(self, request: SuggestionRequest) -> MoveSuggestion:
        session = GameSession(board_size=request.board_size, komi=request.komi)
        session.board = request.board
        session.turn = request.player
        session.captures = request.captures
        session.last_move = request.last_move
        legal_mask = session.legal_action_mask()
        probs = self.policy.act(session, legal_mask) * legal_mask
        if probs.sum() <= 0:
            return MoveSuggestion.pass_move("No legal move.")
        index = select_action(probs, self.temperature, self.rng)
        point = decode_move(index, request.board_size)
        if point is None:
            return MoveSuggestion.pass_move(type(self.policy).__name__)
        return MoveSuggestion.play(point, type(self.policy).__name__)
