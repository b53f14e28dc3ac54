from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from weiqi.core import BOARD_SIZES, DEFAULT_BOARD_SIZE, KOMI


class Difficulty(Enum):
    NOVICE = "novice"
    INTERMEDIATE = "intermediate"
    MASTER = "master"

    @property
    def description(self) -> str:
        return DIFFICULTY_DESCRIPTIONS[self]


DIFFICULTY_DESCRIPTIONS = {
    Difficulty.NOVICE: "Fast, makes mistakes. Good for learning.",
    Difficulty.INTERMEDIATE: "Balanced gameplay. Standard challenge.",
    Difficulty.MASTER: "High-level reasoning with a longer thinking budget.",
}


@dataclass
class AIConfig:
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    primary_timeout_s: float = 9.5
    secondary_timeout_s: float = 5.0
    deterministic_fallback: bool = True
    max_workers: int = 2

    def __post_init__(self) -> None:
        if not isinstance(self.difficulty, Difficulty):
            self.difficulty = Difficulty(str(self.difficulty).lower())
        if self.primary_timeout_s <= 0 or self.secondary_timeout_s <= 0:
            raise ValueError("AI timeouts must be positive.")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1.")


@dataclass
class GameConfig:
    board_size: int = DEFAULT_BOARD_SIZE
    komi: float = KOMI
    human_color: str = "black"
    max_moves: Optional[int] = None
    ai: AIConfig = field(default_factory=AIConfig)

    def __post_init__(self) -> None:
        if self.board_size not in BOARD_SIZES:
            raise ValueError(f"board_size must be one of {BOARD_SIZES}, got {self.board_size}.")
        if self.human_color not in ("black", "white"):
            raise ValueError("human_color must be 'black' or 'white'.")
        if self.max_moves is not None and self.max_moves <= 0:
            raise ValueError("max_moves must be positive when set.")
        if isinstance(self.ai, Mapping):
            self.ai = AIConfig(**_known_keys(AIConfig, self.ai))


def _known_keys(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return dict(data)


def config_from_dict(data: Mapping[str, Any]) -> GameConfig:
    return GameConfig(**_known_keys(GameConfig, data))


def load_config(path: Union[str, Path, None]) -> GameConfig:
    """Load a :class:`GameConfig` from YAML; a missing path gives the defaults."""
    if path is None:
        return GameConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return GameConfig()
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(cfg, Mapping):
        raise ValueError(f"Config file {cfg_path} must contain a mapping.")
    return config_from_dict(cfg)
