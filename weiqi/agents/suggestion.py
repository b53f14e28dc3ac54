from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from weiqi.config import Difficulty
from weiqi.core import KOMI, BoardArray, Captures, Point, Stone

REQUIRED_KEYS = ("x", "y", "pass", "resign")


class SuggestionParseError(ValueError):
    pass


@dataclass(frozen=True)
class MoveSuggestion:
    x: int = 0
    y: int = 0
    pass_: bool = False
    resign: bool = False
    thought: str = ""

    @property
    def point(self) -> Optional[Point]:
        if self.pass_ or self.resign:
            return None
        return Point(self.x, self.y)

    def with_note(self, note: str) -> "MoveSuggestion":
        thought = f"{self.thought} ({note})" if self.thought else note
        return MoveSuggestion(self.x, self.y, self.pass_, self.resign, thought)

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "pass": self.pass_, "resign": self.resign, "thought": self.thought}

    @staticmethod
    def play(point: Point, thought: str = "") -> "MoveSuggestion":
        return MoveSuggestion(point.x, point.y, False, False, thought)

    @staticmethod
    def pass_move(thought: str = "") -> "MoveSuggestion":
        return MoveSuggestion(0, 0, True, False, thought)


@dataclass
class SuggestionRequest:
    """Everything the move-suggestion collaborator is given."""

    board: BoardArray
    captures: Captures = field(default_factory=Captures)
    last_move: Optional[Point] = None
    player: Stone = Stone.WHITE
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    komi: float = KOMI
    cancel_event: threading.Event = field(default_factory=threading.Event, repr=False)

    @property
    def board_size(self) -> int:
        return int(self.board.shape[0])

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise SuggestionParseError(f"'{key}' must be a boolean, got {value!r}.")


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SuggestionParseError(f"'{key}' must be an integer, got {value!r}.")
    if isinstance(value, float) and not value.is_integer():
        raise SuggestionParseError(f"'{key}' must be an integer, got {value!r}.")
    return int(value)


def parse_suggestion(payload: Union[str, bytes, Mapping[str, Any], MoveSuggestion], size: int) -> MoveSuggestion:
    """Parse structured collaborator output into a :class:`MoveSuggestion`.

    Only the shape is checked here (types, ranges, pass/resign exclusivity);
    legality on the current board is the rules engine's job.
    """
    if isinstance(payload, MoveSuggestion):
        data: Mapping[str, Any] = payload.as_dict()
    elif isinstance(payload, (str, bytes)):
        if not payload:
            raise SuggestionParseError("Empty suggestion payload.")
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise SuggestionParseError(f"Suggestion is not valid JSON: {exc}") from exc
    else:
        data = payload
    if not isinstance(data, Mapping):
        raise SuggestionParseError("Suggestion must be a JSON object.")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise SuggestionParseError(f"Suggestion is missing keys: {missing}")

    pass_ = _as_bool(data["pass"], "pass")
    resign = _as_bool(data["resign"], "resign")
    if pass_ and resign:
        raise SuggestionParseError("Suggestion cannot both pass and resign.")
    x = _as_int(data["x"], "x")
    y = _as_int(data["y"], "y")
    if not (pass_ or resign) and not (0 <= x < size and 0 <= y < size):
        raise SuggestionParseError(f"Coordinates ({x},{y}) are off a {size}x{size} board.")

    thought = data.get("thought") or ""
    if not isinstance(thought, str):
        thought = str(thought)
    return MoveSuggestion(x=x, y=y, pass_=pass_, resign=resign, thought=thought)
