"""Gymnasium environment for BlockFit."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default BlockFit placement environment
register(
    id="BlockFit-10x10-v0",
    entry_point="blockfit.env.blockfit_env:BlockFitEnv",
)

__all__ = ["BlockFit-10x10-v0"]
