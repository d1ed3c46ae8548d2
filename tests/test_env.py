import gymnasium as gym
import numpy as np

import blockfit.env  # noqa: F401
from blockfit.env.blockfit_env import BlockFitEnv
from blockfit.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from blockfit.game import GameConfig
from blockfit.rl.heuristic_agent import play_episode

from conftest import make_piece


def test_registered_env_reset_and_step():
    env = gym.make("BlockFit-10x10-v0")
    obs, info = env.reset(seed=0)
    assert obs["grid"].shape == (10, 10)
    assert obs["pieces"].shape == (3, 5, 5)
    assert obs["pieces_remaining"] == 3
    assert env.observation_space.contains(obs)
    assert info["action_mask"].shape == (3, 10, 10)
    assert info["hint"] is not None

    action = info["valid_actions"][0]
    obs, reward, terminated, truncated, info = env.step(action)
    assert reward > 0
    assert not terminated and not truncated
    assert obs["grid"].sum() > 0
    env.close()


def test_invalid_action_is_penalised():
    env = BlockFitEnv()
    env.reset(seed=1)
    env.game.current_pieces = [make_piece([[1, 1]]), make_piece([[1]]), make_piece([[1]])]
    obs, reward, terminated, truncated, info = env.step((0, 0, 9))
    assert reward == -0.1
    assert info["reward_components"] == {"invalid": -0.1, "step": 0.0}
    assert info["engine_score_delta"] == 0.0
    assert obs["pieces_remaining"] == 3


def test_rejected_actions_count_towards_truncation():
    env = BlockFitEnv(GameConfig(max_episode_steps=3))
    env.reset(seed=1)
    env.game.current_pieces = [make_piece([[1, 1]]), make_piece([[1, 1]]), make_piece([[1, 1]])]
    results = [env.step((0, 0, 9))[3] for _ in range(3)]
    assert results == [False, False, True]
    assert env.game.step_count == 0
    env.reset(seed=1)
    assert env.elapsed_steps == 0


def test_line_clear_reward():
    env = BlockFitEnv()
    env.reset(seed=1)
    for c in range(9):
        env.game.grid.cells[0, c] = "x"
    env.game.current_pieces = [make_piece([[1]]), make_piece([[1]]), make_piece([[1]])]
    _, reward, _, _, info = env.step((0, 0, 9))
    assert info["reward_components"]["lines"] == 10.0
    assert reward == 0.05 + 10.0 + 5.0
    assert info["engine_score_delta"] == 2200.0


def test_render_modes():
    env = BlockFitEnv(render_mode="ansi")
    env.reset(seed=0)
    text = env.render()
    assert text.count("\n") == 9
    env = BlockFitEnv(render_mode="rgb_array")
    env.reset(seed=0)
    assert env.render().shape == (120, 120, 3)


def test_flatten_wrapper_mask_and_actions():
    env = FlattenDiscreteActionWrapper(BlockFitEnv())
    env.reset(seed=2)
    assert env.action_space.n == 300
    assert env._unflatten(1 * 100 + 2 * 10 + 3) == (1, 2, 3)
    mask = env.get_action_mask()
    assert mask.shape == (300,)
    game = env.unwrapped.game
    expected = {p * 100 + r * 10 + c for p, r, c in game.get_valid_actions()}
    assert set(np.flatnonzero(mask).tolist()) == expected


def test_resample_wrapper_fixes_invalid_action():
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(BlockFitEnv()))
    env.reset(seed=3)
    game = env.unwrapped.game
    game.grid.cells[0, 0] = "x"
    _, reward, _, _, info = env.step(0)
    assert "invalid" not in info["reward_components"]
    assert game.total_pieces_placed == 1


def test_heuristic_agent_episode():
    env = gym.make("BlockFit-10x10-v0")
    stats = play_episode(env, seed=0, max_steps=15)
    assert 0 < stats["pieces_placed"] <= 15
    assert stats["final_score"] >= 0
    env.close()
