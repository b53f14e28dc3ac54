"""Core rules engine for Weiqi: board model, groups, moves and scoring."""

from .state import (
    BoardArray,
    Captures,
    ColorScore,
    GamePhase,
    Group,
    MoveResult,
    Point,
    ScoreResult,
    Stone,
    Winner,
)
from .board import (
    BOARD_SIZES,
    DEFAULT_BOARD_SIZE,
    KOMI,
    action_space_size,
    board_from_rows,
    copy_board,
    count_stones,
    decode_move,
    encode_move,
    freeze_board,
    in_bounds,
    initialize_board,
    neighbors,
    point_from_key,
    point_key,
    render_board,
)
from .rules import (
    OCCUPIED_MESSAGE,
    OFF_BOARD_MESSAGE,
    SUICIDE_MESSAGE,
    attempt_move,
    enumerate_legal_moves,
    find_group,
    first_legal_move,
    is_legal_move,
)
from .scoring import (
    RESIGNATION_WIN_TOTAL,
    TerritoryMap,
    calculate_final_score,
    resignation_score,
    score_regions,
    toggle_dead_group,
)

__all__ = [
    "BoardArray",
    "Captures",
    "ColorScore",
    "GamePhase",
    "Group",
    "MoveResult",
    "Point",
    "ScoreResult",
    "Stone",
    "Winner",
    "BOARD_SIZES",
    "DEFAULT_BOARD_SIZE",
    "KOMI",
    "action_space_size",
    "board_from_rows",
    "copy_board",
    "count_stones",
    "decode_move",
    "encode_move",
    "freeze_board",
    "in_bounds",
    "initialize_board",
    "neighbors",
    "point_from_key",
    "point_key",
    "render_board",
    "OCCUPIED_MESSAGE",
    "OFF_BOARD_MESSAGE",
    "SUICIDE_MESSAGE",
    "attempt_move",
    "enumerate_legal_moves",
    "find_group",
    "first_legal_move",
    "is_legal_move",
    "RESIGNATION_WIN_TOTAL",
    "TerritoryMap",
    "calculate_final_score",
    "resignation_score",
    "score_regions",
    "toggle_dead_group",
]
