"""
Life / Hunger Mechanic

Every plain move costs a little life. Running out of life costs one body
segment and refills life; a snake that cannot spare a segment starves.
"""

import logging

from arena.board import Board, EMPTY
from arena.snake import MIN_LENGTH


logger = logging.getLogger(__name__)


class Hunger:
    """
    Life bookkeeping for AgentInfo-like objects

    The agent is expected to expose `snake`, `life`, `max_len` and `snake_id`.
    """

    def __init__(self, decrement: float = 0.02):
        self.decrement = decrement

    def starve(self, agent, board: Board) -> bool:
        """
        Apply one tick of hunger after a non-food move

        Returns:
            True if the agent starved to death
        """
        agent.life -= self.decrement
        if agent.life > 0:
            return False

        agent.life = 1.0
        tail = agent.snake.tail()
        dead = agent.snake.shrink()
        board.set(tail.y, tail.x, EMPTY)
        if dead:
            logger.debug(f"Snake {agent.snake_id} starved")
        else:
            logger.debug(f"Snake {agent.snake_id} shrank to {len(agent.snake)}")
        return dead

    def feed(self, agent):
        agent.life = 1.0
        agent.max_len = max(agent.max_len, len(agent.snake))

    def signal(self, agent) -> float:
        """
        Remaining reserves normalised to [0, 1]

        Counts spare segments plus the current life fraction, relative to the
        longest the snake has ever been.
        """
        spare = max(len(agent.snake) - MIN_LENGTH, 0)
        capacity = max(agent.max_len - MIN_LENGTH, 0) + 1
        return min(max((spare + agent.life) / capacity, 0.0), 1.0)
