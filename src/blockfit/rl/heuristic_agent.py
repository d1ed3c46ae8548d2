from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import gymnasium as gym

import blockfit.env  # noqa: F401
from blockfit.engine import find_best_move, format_grid


logger = logging.getLogger(__name__)


def play_episode(env: gym.Env, seed: Optional[int] = None, max_steps: int = 10_000) -> Dict[str, float]:
    """Play one game choosing every move with the hint heuristic."""
    obs, info = env.reset(seed=seed)
    game = env.unwrapped.game
    total_reward = 0.0
    steps = 0
    while steps < max_steps:
        move = find_best_move(game.grid, game.current_pieces, game.config.heuristic)
        if move is None:
            break
        action = (move.piece_index, move.anchor.row, move.anchor.col)
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        steps += 1
        if terminated or truncated:
            break
    stats = game.get_game_stats()
    stats["reward"] = total_reward
    return stats


def run_heuristic(episodes: int = 5, seed: int = 0, max_steps: int = 10_000,
                  show_board: bool = False) -> List[Dict[str, float]]:
    env = gym.make("BlockFit-10x10-v0", render_mode="ansi")
    results: List[Dict[str, float]] = []
    try:
        for ep in range(episodes):
            stats = play_episode(env, seed=seed + ep, max_steps=max_steps)
            results.append(stats)
            logger.debug("episode %d stats: %s", ep, stats)
            print(f"Episode {ep + 1}/{episodes} score={stats['final_score']} "
                  f"lines={stats['lines_cleared']} pieces={stats['pieces_placed']}")
            if show_board:
                print(format_grid(env.unwrapped.game.grid))
    finally:
        env.close()
    if results:
        avg_score = sum(r["final_score"] for r in results) / len(results)
        avg_lines = sum(r["lines_cleared"] for r in results) / len(results)
        print(f"Heuristic agent average score: {avg_score:.1f}  average lines: {avg_lines:.1f}")
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play BlockFit with the hint heuristic")
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--max-steps", type=int, default=10_000)
    p.add_argument("--show-board", action="store_true")
    p.add_argument("--log-level", default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_heuristic(args.episodes, args.seed, args.max_steps, args.show_board)


if __name__ == "__main__":  # pragma: no cover
    main()
