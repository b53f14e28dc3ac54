"""Move suggestion: policies, collaborator output parsing and the fallback chain."""

from .suggestion import MoveSuggestion, SuggestionParseError, SuggestionRequest, parse_suggestion
from .prompt import RESPONSE_SCHEMA, PromptSuggester, board_to_text, build_prompt, system_instruction, to_human_coord
from .policies import Policy, PolicySuggester, RandomPolicy, RuleBasedPolicy, select_action
from .fallback import (
    FallbackChain,
    ResolvedMove,
    SuggestionTimeout,
    Tier,
    play_suggested_move,
    request_for,
    request_with_timeout,
)

__all__ = [
    "MoveSuggestion",
    "SuggestionParseError",
    "SuggestionRequest",
    "parse_suggestion",
    "RESPONSE_SCHEMA",
    "PromptSuggester",
    "board_to_text",
    "build_prompt",
    "system_instruction",
    "to_human_coord",
    "Policy",
    "PolicySuggester",
    "RandomPolicy",
    "RuleBasedPolicy",
    "select_action",
    "FallbackChain",
    "ResolvedMove",
    "SuggestionTimeout",
    "Tier",
    "play_suggested_move",
    "request_for",
    "request_with_timeout",
]
