"""
Tests for the Arena gymnasium environment
"""

import numpy as np
import pytest

from arena.environment import ArenaEnv, REL_STRAIGHT
from arena.players import RandomPlayer


class TestArenaEnv:
    """Test cases for ArenaEnv"""

    def test_spaces(self):
        """Test action and observation spaces"""
        env = ArenaEnv()
        assert env.action_space.n == 3
        assert env.observation_space.shape == (16,)

    def test_reset(self):
        """Test reset builds a game with the learner first"""
        env = ArenaEnv(opponents=[RandomPlayer(seed=i) for i in range(3)])
        obs, info = env.reset(seed=42)

        assert isinstance(obs, np.ndarray)
        assert obs.shape == (16,)
        assert obs.dtype == np.float32
        assert env.learner.snake_id == 2
        assert info['snake_length'] == 2
        assert info['alive']
        assert info['opponents_alive'] == 3

    def test_step(self):
        """Test a step returns the gymnasium tuple"""
        env = ArenaEnv(opponents=[RandomPlayer(seed=0)])
        env.reset(seed=42)

        obs, reward, terminated, truncated, info = env.step(REL_STRAIGHT)

        assert obs.shape == (16,)
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert info['steps'] == 1

    def test_wall_collision(self):
        """Test going straight ends in a wall with the death reward"""
        env = ArenaEnv(height=12, width=12, food_count=1)
        env.reset(seed=42)

        terminated = False
        for _ in range(30):
            obs, reward, terminated, truncated, info = env.step(REL_STRAIGHT)
            if terminated:
                break

        assert terminated
        assert reward == env.reward_death
        assert not info['alive']
        assert np.all(obs == 0)

    def test_step_after_done_raises(self):
        """Test stepping a finished episode"""
        env = ArenaEnv(height=12, width=12, max_steps=1)
        env.reset(seed=1)
        env.step(REL_STRAIGHT)

        with pytest.raises(RuntimeError):
            env.step(REL_STRAIGHT)

    def test_max_steps_truncation(self):
        """Test episodes are cut at max_steps"""
        env = ArenaEnv(height=30, width=30, max_steps=3)
        env.reset(seed=5)

        truncated = terminated = False
        for _ in range(3):
            _, _, terminated, truncated, _ = env.step(REL_STRAIGHT)
            if terminated:
                break

        assert truncated or terminated

    def test_reproducibility(self):
        """Test same seed produces the same start"""
        env1 = ArenaEnv(opponents=[RandomPlayer(seed=1)])
        env2 = ArenaEnv(opponents=[RandomPlayer(seed=1)])

        obs1, _ = env1.reset(seed=42)
        obs2, _ = env2.reset(seed=42)

        assert np.array_equal(obs1, obs2)
        assert np.array_equal(env1.game.board.grid, env2.game.board.grid)

    def test_render_ansi(self):
        """Test text rendering"""
        env = ArenaEnv(height=8, width=10, food_count=1, render_mode='ansi')
        env.reset(seed=0)
        text = env.render()

        assert len(text.splitlines()) == 8
        assert '2' in text


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
