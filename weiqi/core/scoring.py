from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Set, Tuple

from .board import KOMI, copy_board, neighbors, point_from_key
from .rules import find_group
from .state import BoardArray, Captures, ColorScore, Point, ScoreResult, Stone, Winner

RESIGNATION_WIN_TOTAL = 100


@dataclass(frozen=True)
class TerritoryMap:
    black: FrozenSet[Point]
    white: FrozenSet[Point]
    neutral: FrozenSet[Point]


def remove_dead_stones(board: BoardArray, dead_stones: AbstractSet[int]) -> Tuple[BoardArray, int, int]:
    """Return the scoring view plus the number of dead black and white stones."""
    size = board.shape[0]
    scoring_board = copy_board(board)
    dead_black = 0
    dead_white = 0
    for key in dead_stones:
        if not 0 <= key < size * size:
            continue
        point = point_from_key(key, size)
        stone = int(board[point.y, point.x])
        if stone == Stone.BLACK:
            dead_black += 1
        elif stone == Stone.WHITE:
            dead_white += 1
        scoring_board[point.y, point.x] = Stone.EMPTY
    return scoring_board, dead_black, dead_white


def classify_regions(scoring_board: BoardArray) -> TerritoryMap:
    """Partition every empty point into black, white or neutral territory."""
    size = scoring_board.shape[0]
    black: Set[Point] = set()
    white: Set[Point] = set()
    neutral: Set[Point] = set()
    visited: Set[Point] = set()

    for y in range(size):
        for x in range(size):
            start = Point(x, y)
            if scoring_board[y, x] != Stone.EMPTY or start in visited:
                continue
            region = [start]
            borders: Set[int] = set()
            visited.add(start)
            queue = deque([start])
            while queue:
                current = queue.popleft()
                for neighbor in neighbors(scoring_board, current.x, current.y):
                    content = int(scoring_board[neighbor.y, neighbor.x])
                    if content != Stone.EMPTY:
                        borders.add(content)
                    elif neighbor not in visited:
                        visited.add(neighbor)
                        region.append(neighbor)
                        queue.append(neighbor)

            if borders == {int(Stone.BLACK)}:
                black.update(region)
            elif borders == {int(Stone.WHITE)}:
                white.update(region)
            else:
                neutral.update(region)

    return TerritoryMap(frozenset(black), frozenset(white), frozenset(neutral))


def score_regions(board: BoardArray, dead_stones: AbstractSet[int] = frozenset()) -> TerritoryMap:
    scoring_board, _, _ = remove_dead_stones(board, dead_stones)
    return classify_regions(scoring_board)


def decide_winner(black_total: float, white_total: float) -> Winner:
    if black_total > white_total:
        return Winner.BLACK
    if white_total > black_total:
        return Winner.WHITE
    return Winner.DRAW


def calculate_final_score(
    board: BoardArray,
    dead_stones: AbstractSet[int],
    captures: Captures,
    komi: float = KOMI,
) -> ScoreResult:
    """Score a finished game.

    Dead stones are lifted off a scoring copy of the board and credited to
    the opponent as captures. Each empty region bordered by exactly one
    colour is that colour's territory; the rest is neutral. White adds komi.
    """
    scoring_board, dead_black, dead_white = remove_dead_stones(board, dead_stones)
    territory = classify_regions(scoring_board)

    black_captures = captures.black + dead_white
    white_captures = captures.white + dead_black
    black_total = float(len(territory.black) + black_captures)
    white_total = float(len(territory.white) + white_captures) + komi

    return ScoreResult(
        black=ColorScore(territory=len(territory.black), captures=black_captures, total=black_total),
        white=ColorScore(territory=len(territory.white), captures=white_captures, total=white_total, komi=komi),
        winner=decide_winner(black_total, white_total),
    )


def resignation_score(resigning_player: Stone, captures: Captures, komi: float = KOMI) -> ScoreResult:
    winner = Winner.of(Stone(resigning_player).opponent)
    black_total = float(RESIGNATION_WIN_TOTAL if winner == Winner.BLACK else 0)
    white_total = float(RESIGNATION_WIN_TOTAL if winner == Winner.WHITE else 0)
    return ScoreResult(
        black=ColorScore(territory=0, captures=captures.black, total=black_total),
        white=ColorScore(territory=0, captures=captures.white, total=white_total, komi=komi),
        winner=winner,
    )


def toggle_dead_group(board: BoardArray, dead_stones: AbstractSet[int], x: int, y: int) -> FrozenSet[int]:
    """Mark or unmark the whole group at ``(x, y)`` as dead.

    The clicked stone decides the direction: if it is already marked the
    group is revived, otherwise the group is marked. Empty points are a no-op.
    """
    size = board.shape[0]
    group = find_group(board, x, y)
    if not group.stones:
        return frozenset(dead_stones)
    keys = {stone.key(size) for stone in group.stones}
    if Point(x, y).key(size) in dead_stones:
        return frozenset(dead_stones) - keys
    return frozenset(dead_stones) | keys
