"""Weiqi (Go) rules engine with game session, move suggestion and evaluation helpers."""

from . import core, session, config, agents, features, env, evaluation
from .core import (
    KOMI,
    Captures,
    Point,
    ScoreResult,
    Stone,
    Winner,
    attempt_move,
    calculate_final_score,
    find_group,
    initialize_board,
)
from .config import AIConfig, Difficulty, GameConfig, load_config
from .session import GamePhaseError, GameSession
from .agents import (
    FallbackChain,
    MoveSuggestion,
    PolicySuggester,
    RandomPolicy,
    RuleBasedPolicy,
    parse_suggestion,
)
from .env import WeiqiEnv
from .evaluation import EvaluationResult, evaluate_policies

__all__ = [
    "core",
    "session",
    "config",
    "agents",
    "features",
    "env",
    "evaluation",
    "KOMI",
    "Captures",
    "Point",
    "ScoreResult",
    "Stone",
    "Winner",
    "attempt_move",
    "calculate_final_score",
    "find_group",
    "initialize_board",
    "AIConfig",
    "Difficulty",
    "GameConfig",
    "load_config",
    "GamePhaseError",
    "GameSession",
    "FallbackChain",
    "MoveSuggestion",
    "PolicySuggester",
    "RandomPolicy",
    "RuleBasedPolicy",
    "parse_suggestion",
    "WeiqiEnv",
    "EvaluationResult",
    "evaluate_policies",
]
