from __future__ import annotations

from collections import deque
from typing import List, Optional, Set

from .board import copy_board, empty_points, freeze_board, in_bounds, neighbors
from .state import BoardArray, Group, MoveResult, Point, Stone

OCCUPIED_MESSAGE = "Point is already occupied."
SUICIDE_MESSAGE = "Suicide move is not allowed."
OFF_BOARD_MESSAGE = "Point is off the board."
EMPTY_PLAYER_MESSAGE = "Player must be black or white."


def find_group(board: BoardArray, x: int, y: int) -> Group:
    """Flood-fill the group containing ``(x, y)`` and collect its liberties.

    An empty (or off-board) seed yields an empty group rather than an error.
    """
    if not in_bounds(board, x, y):
        return Group()
    color_value = int(board[y, x])
    if color_value == Stone.EMPTY:
        return Group()

    start = Point(x, y)
    stones: Set[Point] = {start}
    liberties: Set[Point] = set()
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in neighbors(board, current.x, current.y):
            occupant = int(board[neighbor.y, neighbor.x])
            if occupant == Stone.EMPTY:
                liberties.add(neighbor)
            elif occupant == color_value and neighbor not in stones:
                stones.add(neighbor)
                queue.append(neighbor)
    return Group(Stone(color_value), frozenset(stones), frozenset(liberties))


def attempt_move(board: BoardArray, x: int, y: int, player: Stone) -> MoveResult:
    """Try to place ``player`` at ``(x, y)``.

    Opponent groups left without liberties are removed before the placed
    stone's own liberties are checked, so a move that captures is never
    suicide. The input board is not modified; a legal move returns a new
    read-only board.
    """
    player = Stone(player)
    if player == Stone.EMPTY:
        return MoveResult(valid=False, message=EMPTY_PLAYER_MESSAGE)
    if not in_bounds(board, x, y):
        return MoveResult(valid=False, message=OFF_BOARD_MESSAGE)
    if board[y, x] != Stone.EMPTY:
        return MoveResult(valid=False, message=OCCUPIED_MESSAGE)

    new_board = copy_board(board)
    new_board[y, x] = player
    opponent = player.opponent

    captured: List[Point] = []
    for neighbor in neighbors(new_board, x, y):
        # A group already removed through another neighbour reads as empty here.
        if new_board[neighbor.y, neighbor.x] != opponent:
            continue
        group = find_group(new_board, neighbor.x, neighbor.y)
        if group.liberties:
            continue
        for stone in group.stones:
            new_board[stone.y, stone.x] = Stone.EMPTY
        captured.extend(sorted(group.stones, key=lambda p: (p.y, p.x)))

    own_group = find_group(new_board, x, y)
    if not own_group.liberties:
        return MoveResult(valid=False, message=SUICIDE_MESSAGE)

    return MoveResult(
        valid=True,
        board=freeze_board(new_board),
        captured_count=len(captured),
        captured=tuple(captured),
    )


def is_legal_move(board: BoardArray, x: int, y: int, player: Stone) -> bool:
    return attempt_move(board, x, y, player).valid


def enumerate_legal_moves(board: BoardArray, player: Stone) -> List[Point]:
    legal = [point for point in empty_points(board) if is_legal_move(board, point.x, point.y, player)]
    legal.sort(key=lambda p: (p.y, p.x))
    return legal


def first_legal_move(board: BoardArray, player: Stone) -> Optional[Point]:
    for point in empty_points(board):
        if is_legal_move(board, point.x, point.y, player):
            return point
    return None
