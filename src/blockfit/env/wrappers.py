from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .blockfit_env import _compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Expose the (piece, row, col) action as one Discrete index.

    Index = (piece * size + row) * size + col. `get_action_mask()` gives the
    matching flat mask of length hand_size * size * size.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        k, rows, cols = map(int, env.action_space.nvec)
        assert rows == cols, "board must be square"
        self.k = k
        self.size = rows
        self.n = int(k * self.size * self.size)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int, int]:
        col = idx % self.size
        idx //= self.size
        row = idx % self.size
        piece = idx // self.size
        return int(piece), int(row), int(col)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        mask3d = _compute_action_mask(self.env.unwrapped.game)
        return mask3d.reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """Swap a blocked placement for a random legal one before stepping.

    Needs a flat Discrete action space and a `get_action_mask()` below it.
    When no placement is legal the action is passed through unchanged.
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete) and hasattr(self.env, "get_action_mask"):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    # Mask comes from the flatten wrapper underneath
    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        raise AttributeError(f"{type(self.env).__name__} has no action mask")
