from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from weiqi.config import AIConfig, Difficulty
from weiqi.core import MoveResult, Point, attempt_move, first_legal_move
from weiqi.session import GameSession

from .suggestion import MoveSuggestion, SuggestionParseError, SuggestionRequest, parse_suggestion

logger = logging.getLogger(__name__)

Suggester = Callable[[SuggestionRequest], Union[MoveSuggestion, str, Mapping[str, Any]]]


class SuggestionTimeout(TimeoutError):
    pass


class Tier(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    DETERMINISTIC = "deterministic"
    PASS = "pass"


@dataclass(frozen=True)
class ResolvedMove:
    suggestion: MoveSuggestion
    tier: Tier

    @property
    def point(self) -> Optional[Point]:
        return self.suggestion.point

    @property
    def is_pass(self) -> bool:
        return self.suggestion.pass_

    @property
    def is_resign(self) -> bool:
        return self.suggestion.resign


def request_with_timeout(
    suggester: Suggester,
    request: SuggestionRequest,
    timeout_s: float,
    *,
    executor: Optional[Executor] = None,
) -> MoveSuggestion:
    """Run ``suggester`` with a deadline and parse its answer.

    On timeout the future is cancelled and the request's cancel event is set,
    so a cooperative suggester can stop early. Parse errors propagate as
    :class:`SuggestionParseError`.
    """
    owns_executor = executor is None
    pool = executor or ThreadPoolExecutor(max_workers=1)
    future = pool.submit(suggester, request)
    try:
        raw = future.result(timeout=timeout_s)
    except FutureTimeoutError as exc:
        request.cancel_event.set()
        future.cancel()
        raise SuggestionTimeout(f"No suggestion within {timeout_s:.2f}s") from exc
    finally:
        if owns_executor:
            pool.shutdown(wait=False, cancel_futures=True)
    return parse_suggestion(raw, request.board_size)


class FallbackChain:
    """Primary suggester, then a fast secondary, then a deterministic legal move, then pass.

    Whatever a suggester returns is re-validated with :func:`attempt_move`
    exactly like a human move; a resignation is accepted as-is.
    """

    def __init__(
        self,
        primary: Optional[Suggester],
        secondary: Optional[Suggester] = None,
        *,
        config: Optional[AIConfig] = None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.config = config or AIConfig()
        self._executors: Dict[Tier, ThreadPoolExecutor] = {}
        self._lock = threading.Lock()

    def _pool(self, tier: Tier) -> ThreadPoolExecutor:
        # Tiers never share workers.
        with self._lock:
            if tier not in self._executors:
                self._executors[tier] = ThreadPoolExecutor(
                    max_workers=self.config.max_workers,
                    thread_name_prefix=f"weiqi-{tier.value}",
                )
            return self._executors[tier]

    def _tiers(self) -> List[Tuple[Tier, Suggester, float]]:
        tiers = []
        if self.primary is not None:
            tiers.append((Tier.PRIMARY, self.primary, self.config.primary_timeout_s))
        if self.secondary is not None:
            tiers.append((Tier.SECONDARY, self.secondary, self.config.secondary_timeout_s))
        return tiers

    def resolve(self, request: SuggestionRequest) -> ResolvedMove:
        for tier, suggester, timeout_s in self._tiers():
            attempt = replace(request, cancel_event=threading.Event())
            try:
                suggestion = request_with_timeout(suggester, attempt, timeout_s, executor=self._pool(tier))
            except SuggestionTimeout as exc:
                logger.warning("%s suggester timed out: %s", tier.value, exc)
                continue
            except SuggestionParseError as exc:
                logger.warning("%s suggester returned malformed output: %s", tier.value, exc)
                continue
            except Exception:
                logger.warning("%s suggester failed", tier.value, exc_info=True)
                continue

            if suggestion.resign or suggestion.pass_:
                return ResolvedMove(suggestion, tier)
            check = attempt_move(request.board, suggestion.x, suggestion.y, request.player)
            if check.valid:
                note = "Fast Fallback" if tier == Tier.SECONDARY else None
                return ResolvedMove(suggestion.with_note(note) if note else suggestion, tier)
            logger.warning(
                "%s suggester proposed illegal move (%d,%d): %s",
                tier.value,
                suggestion.x,
                suggestion.y,
                check.message,
            )

        if self.config.deterministic_fallback:
            point = first_legal_move(request.board, request.player)
            if point is not None:
                return ResolvedMove(MoveSuggestion.play(point, "Fallback move."), Tier.DETERMINISTIC)
        return ResolvedMove(MoveSuggestion.pass_move("No usable suggestion, passing."), Tier.PASS)

    def close(self) -> None:
        with self._lock:
            for executor in self._executors.values():
                executor.shutdown(wait=False, cancel_futures=True)
            self._executors.clear()

    def __enter__(self) -> "FallbackChain":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def request_for(session: GameSession, difficulty: Difficulty = Difficulty.INTERMEDIATE) -> SuggestionRequest:
    return SuggestionRequest(
        board=session.board,
        captures=session.captures,
        last_move=session.last_move,
        player=session.turn,
        difficulty=difficulty,
        komi=session.komi,
    )


def play_suggested_move(
    session: GameSession,
    chain: FallbackChain,
    difficulty: Difficulty = Difficulty.INTERMEDIATE,
) -> Tuple[ResolvedMove, Optional[MoveResult]]:
    """Ask the chain for a move for the side to play and apply it to ``session``."""
    resolved = chain.resolve(request_for(session, difficulty))
    if resolved.is_resign:
        session.resign(session.turn)
        return resolved, None
    if resolved.is_pass:
        session.pass_turn()
        return resolved, None
    result = session.play(resolved.suggestion.x, resolved.suggestion.y)
    if resolved.suggestion.thought:
        session.message = f"AI: \"{resolved.suggestion.thought}\""
    return resolved, result
