"""Turn and phase bookkeeping around the rules engine."""

from .game import GamePhaseError, GameSession

__all__ = ["GamePhaseError", "GameSession"]
