from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfit.engine import format_grid
from blockfit.game import BlockFitGame, GameConfig


def _compute_action_mask(game: BlockFitGame) -> np.ndarray:
    size = game.grid.size
    k = game.config.hand_size
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for piece_idx, row, col in game.get_valid_actions():
        if 0 <= piece_idx < k:
            mask[piece_idx, row, col] = True
    return mask


class BlockFitEnv(gym.Env):
    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = BlockFitGame(config)
        self.render_mode = render_mode

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "cells": 0.05,      # per cell placed
            "lines": 10.0,      # per line cleared
            "lines_sq": 5.0,    # extra for multiple lines (quadratic)
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.game.config.board_size
        k = self.game.config.hand_size
        self.piece_extent = self.game.config.catalog.max_extent()

        # Observation space: occupancy grid and padded piece masks (all zeros for a used slot)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=0, high=1, shape=(k, self.piece_extent, self.piece_extent), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (piece_idx, row, col)
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._last_obs: Optional[Dict[str, Any]] = None
        # Counts every step, rejected placements included
        self.elapsed_steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.hand_size
        s = self.piece_extent
        grid = self.game.grid.occupancy().astype(np.int8)
        pieces = np.zeros((k, s, s), dtype=np.int8)
        for i, piece in enumerate(self.game.current_pieces[:k]):
            h, w = piece.shape.shape
            pieces[i, :h, :w] = piece.shape
        return {
            "grid": grid,
            "pieces": pieces,
            "pieces_remaining": len(self.game.current_pieces),
        }

    def _get_info(self) -> Dict[str, Any]:
        hint = self.game.hint()
        return {
            "action_mask": _compute_action_mask(self.game),
            "valid_actions": self.game.get_valid_actions(),
            "score": self.game.score,
            "steps": self.game.step_count,
            "hint": (hint.piece_index, hint.anchor.row, hint.anchor.col) if hint is not None else None,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self.elapsed_steps = 0
        obs = self._get_obs()
        info = self._get_info()
        self._last_obs = obs
        return obs, info

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        piece_idx, row, col = map(int, action)
        self.elapsed_steps += 1

        cells_in_piece = 0
        if 0 <= piece_idx < len(self.game.current_pieces):
            cells_in_piece = self.game.current_pieces[piece_idx].cell_count

        success, gained, lines = self.game.place_piece(piece_idx, row, col)

        reward_components: Dict[str, float] = {}
        if success:
            reward_components["cells"] = self.reward_weights["cells"] * float(cells_in_piece)
            reward_components["lines"] = self.reward_weights["lines"] * float(lines)
            reward_components["lines_sq"] = self.reward_weights["lines_sq"] * float(lines * lines)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        reward_components["step"] = self.step_penalty
        terminated = bool(self.game.game_over)
        truncated = not terminated and self.elapsed_steps >= self.game.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(gained if success else 0.0)
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray | str]:
        if self.render_mode == "ansi":
            return format_grid(self.game.grid)
        grid = self._last_obs["grid"] if self._last_obs is not None else self.game.grid.occupancy()
        if self.render_mode == "rgb_array":
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
