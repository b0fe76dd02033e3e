"""
Arena Environment - Gymnasium Compatible

Puts a single learner in an arena Game next to scripted opponents:
- Relative action space (3): STRAIGHT, LEFT, RIGHT
- Observation: egocentric vision vector plus the life signal
- Opponents are ordinary Players and keep playing while the learner lives
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Optional, Sequence, Tuple

from arena.config import GameConfig
from arena.game import Game, MAX_AGENT_ID
from arena.moves import Action, Move
from arena.players import Player
from arena.policy import encode_observation
from arena.render import render_board


# Relative action ids mapped onto move score indices
REL_STRAIGHT = 0
REL_LEFT = 1
REL_RIGHT = 2

ACTION_TO_MOVE = {
    REL_STRAIGHT: Action.STRAIGHT,
    REL_LEFT: Action.LEFT,
    REL_RIGHT: Action.RIGHT,
}


class _LearnerPlayer(Player):
    """Replays whatever action the environment was last given"""

    def __init__(self):
        super().__init__()
        self.action = REL_STRAIGHT

    def decide(self, view) -> Move:
        return Move.for_action(ACTION_TO_MOVE[self.action], self.snake_id)


class ArenaEnv(gym.Env):
    """
    Single-learner arena environment

    Observation:
        float32 vector of length vision_depth * 5 + 1

    Actions:
        0 = STRAIGHT, 1 = LEFT, 2 = RIGHT

    Reward:
        - Food: +10
        - Death: -10
        - Step penalty: -0.01
    """

    metadata = {'render_modes': ['human', 'ansi']}

    def __init__(
        self,
        height: int = 20,
        width: int = 20,
        opponents: Optional[Sequence[Player]] = None,
        food_count: int = 3,
        max_steps: int = 1000,
        reward_food: float = 10.0,
        reward_death: float = -10.0,
        reward_step: float = -0.01,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None
    ):
        super().__init__()

        self.height = height
        self.width = width
        self.opponents = list(opponents) if opponents else []
        self.food_count = food_count
        self.max_steps = max_steps
        self.config = config or GameConfig()
        self.render_mode = render_mode

        self.reward_food = reward_food
        self.reward_death = reward_death
        self.reward_step = reward_step

        self.action_space = spaces.Discrete(3)
        obs_dim = self.config.vision_depth * 5 + 1
        self.observation_space = spaces.Box(
            low=-1.0, high=float(MAX_AGENT_ID), shape=(obs_dim,), dtype=np.float32
        )

        self.learner = _LearnerPlayer()
        self.game: Optional[Game] = None
        self.steps = 0
        self.done = False

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[dict] = None
    ) -> Tuple[np.ndarray, Dict]:
        """Start a fresh game, learner gets the first snake id"""
        super().reset(seed=seed)

        self.learner.action = REL_STRAIGHT
        self.game = Game(
            self.height,
            self.width,
            [self.learner] + self.opponents,
            food_count=self.food_count,
            config=self.config,
            rng=self.np_random
        )
        self.steps = 0
        self.done = False

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play one arena round with the learner's action

        Returns:
            observation, reward, terminated, truncated, info
        """
        if self.done:
            raise RuntimeError("Episode is done. Call reset() to start a new episode.")

        snake_id = self.learner.snake_id
        prev_length = self.game.player_len(snake_id)

        self.learner.action = int(action)
        self.game.play_round()
        self.steps += 1

        terminated = not self.game.alive(snake_id)
        if terminated:
            reward = self.reward_death
        elif self.game.player_len(snake_id) > prev_length:
            reward = self.reward_food
        else:
            reward = self.reward_step

        truncated = self.steps >= self.max_steps
        self.done = terminated or truncated

        if self.render_mode == 'human':
            self.render()

        return self._get_observation(), float(reward), terminated, truncated, self._get_info()

    def _get_observation(self) -> np.ndarray:
        snake_id = self.learner.snake_id
        if not self.game.alive(snake_id):
            return np.zeros(self.observation_space.shape, dtype=np.float32)
        view = self.game.view()
        return encode_observation(view.vision(snake_id), view.life(snake_id))

    def _get_info(self) -> Dict:
        snake_id = self.learner.snake_id
        return {
            'steps': self.steps,
            'snake_length': self.game.player_len(snake_id),
            'alive': self.game.alive(snake_id),
            'opponents_alive': sum(1 for sid in self.game.agents if sid != snake_id),
        }

    def render(self):
        if self.game is None:
            return None
        text = render_board(self.game.board.grid)
        if self.render_mode == 'ansi':
            return text
        print(text)
        print(f"Steps: {self.steps}, Length: {self.game.player_len(self.learner.snake_id)}")
        return None
