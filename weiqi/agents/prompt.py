"""Text rendering of a position for a language-model move suggester."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from weiqi.config import Difficulty
from weiqi.core import BoardArray, Point, Stone

from .suggestion import SuggestionRequest

_CELL = {int(Stone.EMPTY): ".", int(Stone.BLACK): "X", int(Stone.WHITE): "O"}

SYSTEM_BASE = "You are an expert Go (Weiqi/Baduk) AI. You are playing as {color} ({symbol})."
SYSTEM_STYLE: Dict[Difficulty, str] = {
    Difficulty.NOVICE: " Play casually. Make minor mistakes occasionally. Do not be aggressive.",
    Difficulty.INTERMEDIATE: " Play a solid game. Focus on standard joseki and good shape.",
    Difficulty.MASTER: " Play at a professional, master level. Calculate liberties and territory deeply.",
}
SYSTEM_FORMAT = (
    "\nIMPORTANT: You must output JSON. Coordinates are 0-indexed: "
    "x (column, 0 is Left), y (row, 0 is Top)."
)
RETRY_SUFFIX = "\n\n(Previous attempt timed out. Provide a valid move immediately.)"
FALLBACK_SYSTEM = "You are a fallback Go AI. Play a valid move instantly."

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "x": {"type": "integer", "description": "0-indexed column coordinate"},
        "y": {"type": "integer", "description": "0-indexed row coordinate"},
        "pass": {"type": "boolean", "description": "True if passing the turn"},
        "resign": {"type": "boolean", "description": "True if resigning the game"},
        "thought": {"type": "string", "description": "Strategic reasoning for the move"},
    },
    "required": ["x", "y", "pass", "resign", "thought"],
}


def column_letter(x: int) -> str:
    # Go boards skip the letter I.
    return chr(ord("A") + x + (1 if x >= 8 else 0))


def to_human_coord(x: int, y: int, size: int) -> str:
    return f"{column_letter(x)}{size - y}"


def board_to_text(board: BoardArray) -> str:
    size = board.shape[0]
    lines = [f"Board Size: {size}x{size}"]
    lines.append("   " + " ".join(column_letter(x) for x in range(size)))
    for y in range(size):
        cells = " ".join(_CELL[int(cell)] for cell in board[y])
        lines.append(f"{size - y:>2} {cells}")
    return "\n".join(lines)


def system_instruction(player: Stone, difficulty: Difficulty) -> str:
    symbol = "X" if player == Stone.BLACK else "O"
    return SYSTEM_BASE.format(color=player.label.upper(), symbol=symbol) + SYSTEM_STYLE[difficulty] + SYSTEM_FORMAT


def describe_last_move(last_move: Optional[Point], size: int, mover: Stone) -> str:
    if last_move is None:
        return f"{mover.label.capitalize()} just started or passed."
    human = to_human_coord(last_move.x, last_move.y, size)
    return f"{mover.label.capitalize()} played at {human} (internal: x={last_move.x}, y={last_move.y})."


def build_prompt(request: SuggestionRequest) -> str:
    size = request.board_size
    mover = request.player.opponent
    return "\n".join(
        [
            "Current Board State:",
            board_to_text(request.board),
            "",
            f"Captures -> Black: {request.captures.black}, White: {request.captures.white}",
            f"Komi: {request.komi} (Points added to White's final score)",
            f"Last Move: {describe_last_move(request.last_move, size, mover)}",
            "",
            "Analyze the board.",
            "1. Identify weak groups.",
            "2. Find the biggest move on the board.",
            "3. Ensure the move is valid (not suicide, not on top of another stone).",
            "4. If there are no good moves or the game is clearly over, you may Pass.",
            "5. If victory is impossible, set 'resign' to true.",
            "",
            f"Output strict JSON with keys x, y (0 to {size - 1}), pass, resign, thought.",
        ]
    )


class PromptSuggester:
    """Turns a text-generation callable into a move suggester.

    ``generate(prompt, system_instruction, schema)`` is expected to return the
    model's raw JSON text; transport and authentication live in the callable.
    """

    def __init__(
        self,
        generate: Callable[[str, str, Mapping[str, Any]], str],
        *,
        fast: bool = False,
    ) -> None:
        self.generate = generate
        self.fast = fast

    def __call__(self, request: SuggestionRequest) -> str:
        prompt = build_prompt(request)
        if self.fast:
            return self.generate(prompt + RETRY_SUFFIX, FALLBACK_SYSTEM, RESPONSE_SCHEMA)
        return self.generate(prompt, system_instruction(request.player, request.difficulty), RESPONSE_SCHEMA)
