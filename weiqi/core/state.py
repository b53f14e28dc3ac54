from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import FrozenSet, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

BoardArray = NDArray[np.int8]


class Stone(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "Stone":
        if self == Stone.BLACK:
            return Stone.WHITE
        if self == Stone.WHITE:
            return Stone.BLACK
        raise ValueError("Empty point has no opponent.")

    @property
    def label(self) -> str:
        return self.name.lower()


class Winner(Enum):
    BLACK = "black"
    WHITE = "white"
    DRAW = "draw"

    @staticmethod
    def of(player: Stone) -> "Winner":
        return Winner.BLACK if player == Stone.BLACK else Winner.WHITE


class GamePhase(Enum):
    PLAYING = "playing"
    SCORING = "scoring"
    ENDED = "ended"


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def key(self, size: int) -> int:
        return self.y * size + self.x

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Group:
    color: Stone = Stone.EMPTY
    stones: FrozenSet[Point] = frozenset()
    liberties: FrozenSet[Point] = frozenset()

    def __len__(self) -> int:
        return len(self.stones)


@dataclass(frozen=True)
class MoveResult:
    valid: bool
    board: Optional[BoardArray] = field(default=None, compare=False)
    captured_count: int = 0
    captured: Tuple[Point, ...] = field(default_factory=tuple)
    message: Optional[str] = None


@dataclass(frozen=True)
class Captures:
    black: int = 0
    white: int = 0

    def add(self, player: Stone, count: int) -> "Captures":
        if count < 0:
            raise ValueError("Capture count cannot be negative.")
        if player == Stone.BLACK:
            return Captures(self.black + count, self.white)
        return Captures(self.black, self.white + count)


@dataclass(frozen=True)
class ColorScore:
    territory: int
    captures: int
    total: float
    komi: float = 0.0


@dataclass(frozen=True)
class ScoreResult:
    black: ColorScore
    white: ColorScore
    winner: Winner

    def as_dict(self) -> dict:
        return {
            "black": {
                "territory": self.black.territory,
                "captures": self.black.captures,
                "total": self.black.total,
            },
            "white": {
                "territory": self.white.territory,
                "captures": self.white.captures,
                "komi": self.white.komi,
                "total": self.white.total,
            },
            "winner": self.winner.value,
        }
