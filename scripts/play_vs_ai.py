#!/usr/bin/env python3
"""Play Weiqi against an AI policy via the console, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from weiqi import FallbackChain, GameSession, PolicySuggester, RandomPolicy, RuleBasedPolicy, load_config
from weiqi.agents import play_suggested_move
from weiqi.core import GamePhase, Stone, point_from_key


def format_status(session: GameSession) -> str:
    return (
        f"Turn: {session.turn.label}  Captures B={session.captures.black} W={session.captures.white}"
        f"  Phase: {session.phase.value}"
    )


def prompt_human_move(session: GameSession) -> Dict:
    while True:
        raw = input("Your move as 'x y', 'p' to pass, 'r' to resign, 'u' to undo, 'q' to quit: ").strip().lower()
        if raw in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        if raw == "p":
            return {"action": "pass"}
        if raw == "r":
            return {"action": "resign"}
        if raw == "u":
            return {"action": "undo", "count": 2}
        parts = raw.split()
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            print("Enter two numbers, e.g. '4 4'.")
            continue
        x, y = int(parts[0]), int(parts[1])
        result = session.play(x, y)
        if result.valid:
            return {"action": "play", "x": x, "y": y, "applied": True}
        print(result.message)


def prompt_dead_stones(session: GameSession) -> None:
    print("Both passed. Enter 'x y' to toggle a dead group, empty line to finish.")
    while True:
        raw = input("Dead group: ").strip()
        if not raw:
            return
        parts = raw.split()
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            print("Enter two numbers, e.g. '2 3'.")
            continue
        dead = session.toggle_dead(int(parts[0]), int(parts[1]))
        marked = sorted(point_from_key(key, session.board_size).as_tuple() for key in dead)
        print(f"Dead stones: {marked}")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, ensure_ascii=False, indent=2))
    print(f"Saved game log to {path}.")


def apply_logged_move(session: GameSession, entry: Dict) -> None:
    action = entry["action"]
    if action == "play":
        result = session.play(entry["x"], entry["y"])
        if not result.valid:
            raise ValueError(f"Logged move {entry} is illegal: {result.message}")
    elif action == "pass":
        session.pass_turn()
    elif action == "resign":
        session.resign(Stone[entry["color"].upper()])
    elif action == "undo":
        for _ in range(entry.get("count", 1)):
            session.undo()
    else:
        raise ValueError(f"Unknown logged action {action!r}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    moves = data.get("moves", [])
    session = GameSession(board_size=metadata.get("board_size", 9), komi=metadata.get("komi", 6.5))
    if verbose:
        print("Starting replay.")
        print(session.render())
    for entry in moves:
        apply_logged_move(session, entry)
        if verbose:
            print(f"{entry.get('actor', 'unknown')} ({entry.get('color', '?')}): {entry['action']}")
            print(session.render())
    if session.phase == GamePhase.SCORING:
        for key in data.get("dead_stones", []):
            point = point_from_key(int(key), session.board_size)
            if int(key) not in session.dead_stones:
                session.toggle_dead(point.x, point.y)
        session.finish_scoring()
    summary = {
        "result": session.score.winner.value if session.score else None,
        "moves": len(moves),
        "board": session.board.tolist(),
        "captures": {"black": session.captures.black, "white": session.captures.white},
        "score": session.score.as_dict() if session.score else None,
    }
    if verbose:
        print("Replay finished.")
        print(f"Result: {summary['result']}")
    return summary


def build_chain(args: argparse.Namespace, config) -> FallbackChain:
    # Suggesters may run concurrently, so none share a generator.
    primary_rng = np.random.default_rng(args.seed)
    secondary_rng = np.random.default_rng(None if args.seed is None else args.seed + 1)
    primary_policy = RandomPolicy(primary_rng) if args.policy == "random" else RuleBasedPolicy(primary_rng)
    primary = PolicySuggester(primary_policy, temperature=args.temperature, rng=primary_rng)
    secondary = PolicySuggester(RandomPolicy(secondary_rng), temperature=1.0, rng=secondary_rng)
    return FallbackChain(primary, secondary, config=config.ai)


def play_interactive(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    board_size = args.board_size or config.board_size
    session = GameSession(board_size=board_size, komi=config.komi)
    human = Stone[(args.human_color or config.human_color).upper()]
    log_records: List[Dict] = []

    with build_chain(args, config) as chain:
        while session.phase == GamePhase.PLAYING:
            print()
            print(session.render())
            print(format_status(session))
            color = session.turn
            if color == human:
                move = prompt_human_move(session)
                actor = "human"
                if move["action"] == "pass":
                    session.pass_turn()
                elif move["action"] == "resign":
                    session.resign(color)
                elif move["action"] == "undo":
                    # Take back the AI reply as well as the human move.
                    undone = sum(1 for _ in range(move["count"]) if session.undo())
                    if not undone:
                        print("Nothing to undo.")
                        continue
                    move["count"] = undone
            else:
                resolved, _ = play_suggested_move(session, chain, config.ai.difficulty)
                actor = "ai"
                suggestion = resolved.suggestion
                if resolved.is_resign:
                    move = {"action": "resign"}
                elif resolved.is_pass:
                    move = {"action": "pass"}
                else:
                    move = {"action": "play", "x": suggestion.x, "y": suggestion.y}
                print(f"AI ({resolved.tier.value}): {move} {suggestion.thought}")
            move.pop("applied", None)
            log_records.append({"move_index": len(log_records), "actor": actor, "color": color.label, **move})
            if config.max_moves is not None and session.move_count >= config.max_moves:
                print("Move limit reached.")
                break

    if session.phase == GamePhase.SCORING:
        print(session.render())
        prompt_dead_stones(session)
        session.finish_scoring()

    print("\nFinal board:")
    print(session.render())
    print(session.message)
    if session.score is not None:
        print(json.dumps(session.score.as_dict(), indent=2))

    if args.log_file:
        metadata = {
            "board_size": board_size,
            "komi": config.komi,
            "human_color": human.label,
            "policy": args.policy,
            "temperature": args.temperature,
            "result": session.score.winner.value if session.score else None,
        }
        log_data = {"metadata": metadata, "moves": log_records, "dead_stones": sorted(session.dead_stones)}
        save_log(log_data, Path(args.log_file))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play Weiqi in the console against an AI policy.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--board-size", type=int, choices=[9, 13, 19])
    parser.add_argument("--human-color", choices=["black", "white"])
    parser.add_argument("--policy", choices=["rule", "random"], default="rule")
    parser.add_argument("--temperature", type=float, default=0.5)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
