#!/usr/bin/env python3
"""Play two baseline policies against each other and report win rates."""

import argparse
import json
import logging

import numpy as np
from tqdm.auto import trange

from weiqi import WeiqiEnv, load_config
from weiqi.agents import RandomPolicy, RuleBasedPolicy
from weiqi.evaluation import evaluate_policies


def make_policy(name: str, seed: int):
    rng = np.random.default_rng(seed)
    return RandomPolicy(rng) if name == "random" else RuleBasedPolicy(rng)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--episodes", type=int, default=20)
    parser.add_argument("--black", choices=["random", "rule"], default="rule")
    parser.add_argument("--white", choices=["random", "rule"], default="random")
    parser.add_argument("--temperature", type=float, default=1.0)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    config = load_config(args.config)

    def env_factory() -> WeiqiEnv:
        return WeiqiEnv(board_size=config.board_size, komi=config.komi, max_moves=config.max_moves)

    policy_black = make_policy(args.black, args.seed)
    policy_white = make_policy(args.white, args.seed + 1)
    rng = np.random.default_rng(args.seed)

    totals = {"games": 0, "black_wins": 0, "white_wins": 0, "draws": 0, "moves": 0.0}
    for _ in trange(args.episodes, desc="Games"):
        result = evaluate_policies(
            policy_black,
            policy_white,
            episodes=1,
            env_factory=env_factory,
            temperature=args.temperature,
            rng=rng,
        )
        totals["games"] += result.games_played
        totals["black_wins"] += result.black_wins
        totals["white_wins"] += result.white_wins
        totals["draws"] += result.draws
        totals["moves"] += result.average_length

    games = max(1, totals["games"])
    output = {
        "games": totals["games"],
        "black_wins": totals["black_wins"],
        "white_wins": totals["white_wins"],
        "draws": totals["draws"],
        "average_length": totals["moves"] / games,
        "black_winrate": totals["black_wins"] / games,
        "white_winrate": totals["white_wins"] / games,
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
