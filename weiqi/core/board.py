from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .state import BoardArray, Point, Stone

BOARD_SIZES: Tuple[int, ...] = (9, 13, 19)
DEFAULT_BOARD_SIZE = 9
KOMI = 6.5
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

_SYMBOLS = {int(Stone.EMPTY): ".", int(Stone.BLACK): "X", int(Stone.WHITE): "O"}
_PARSE = {".": Stone.EMPTY, "+": Stone.EMPTY, "X": Stone.BLACK, "B": Stone.BLACK, "O": Stone.WHITE, "W": Stone.WHITE}


def initialize_board(size: int = DEFAULT_BOARD_SIZE) -> BoardArray:
    """Return an empty ``size`` x ``size`` board, indexed ``board[y, x]``."""
    if size not in BOARD_SIZES:
        raise ValueError(f"Unsupported board size {size}; expected one of {BOARD_SIZES}.")
    return np.zeros((size, size), dtype=np.int8)


def copy_board(board: BoardArray) -> BoardArray:
    # np.array always allocates, and the copy is writeable even if the source was frozen.
    return np.array(board, dtype=np.int8, copy=True)


def freeze_board(board: BoardArray) -> BoardArray:
    board.setflags(write=False)
    return board


def in_bounds(board: BoardArray, x: int, y: int) -> bool:
    size = board.shape[0]
    return 0 <= x < size and 0 <= y < size


def neighbors(board: BoardArray, x: int, y: int) -> List[Point]:
    result: List[Point] = []
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if in_bounds(board, nx, ny):
            result.append(Point(nx, ny))
    return result


def point_key(x: int, y: int, size: int) -> int:
    return y * size + x


def point_from_key(key: int, size: int) -> Point:
    return Point(key % size, key // size)


def board_from_rows(rows: Sequence[str]) -> BoardArray:
    """Build a board from ASCII rows (``X`` black, ``O`` white, ``.`` empty).

    Whitespace inside a row is ignored so rows may be written as ``"X . O"``.
    Any square size is accepted, which keeps small test positions readable.
    """
    cleaned = ["".join(row.split()) for row in rows]
    size = len(cleaned)
    if size == 0 or any(len(row) != size for row in cleaned):
        raise ValueError("Board rows must form a non-empty square.")
    board = np.zeros((size, size), dtype=np.int8)
    for y, row in enumerate(cleaned):
        for x, symbol in enumerate(row.upper()):
            if symbol not in _PARSE:
                raise ValueError(f"Unknown board symbol {symbol!r} at ({x},{y}).")
            board[y, x] = _PARSE[symbol]
    return board


def render_board(board: BoardArray) -> str:
    rows = []
    for y in range(board.shape[0]):
        rows.append(" ".join(_SYMBOLS[int(cell)] for cell in board[y]))
    return "\n".join(rows)


def count_stones(board: BoardArray, color: Stone) -> int:
    return int(np.count_nonzero(board == int(color)))


def empty_points(board: BoardArray) -> Iterable[Point]:
    # Column-major to match the fallback scan order (x outer, y inner).
    size = board.shape[0]
    for x in range(size):
        for y in range(size):
            if board[y, x] == Stone.EMPTY:
                yield Point(x, y)


def action_space_size(size: int) -> int:
    # One action per point plus a trailing pass.
    return size * size + 1


def encode_move(point: Optional[Point], size: int) -> int:
    if point is None:
        return size * size
    if not (0 <= point.x < size and 0 <= point.y < size):
        raise ValueError(f"Point {point.as_tuple()} is off a {size}x{size} board.")
    return point_key(point.x, point.y, size)


def decode_move(index: int, size: int) -> Optional[Point]:
    if not 0 <= index < action_space_size(size):
        raise ValueError("Action index out of range.")
    if index == size * size:
        return None
    return point_from_key(index, size)
