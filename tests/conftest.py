"""
Shared fixtures for arena tests

Games place snakes and food randomly; these helpers rebuild an exact layout
on top of a constructed game so scenarios can be scripted.
"""

import numpy as np
import pytest

from arena.board import EMPTY, FOOD, WALL
from arena.moves import Action, Move
from arena.players import Player
from arena.snake import Position, Snake


class ScriptedPlayer(Player):
    """Plays a fixed list of actions, then goes straight"""

    def __init__(self, actions=None):
        super().__init__()
        self.actions = list(actions or [])

    def decide(self, view) -> Move:
        action = self.actions.pop(0) if self.actions else Action.STRAIGHT
        return Move.for_action(action, self.snake_id)


def _layout(game, snakes, food=()):
    """
    Replace every snake and food item on the board

    Args:
        snakes: dict snake_id -> list of (x, y), tail first
        food: iterable of (x, y)
    """
    for snake_id in game.agents:
        game.board.clear_tag(snake_id)
    game.board.clear_tag(FOOD)

    for snake_id, positions in snakes.items():
        snake = Snake([Position(*p) for p in positions])
        for p in snake:
            assert game.board.at(p.y, p.x) == EMPTY
            game.board.set(p.y, p.x, snake_id)
        agent = game.agents[snake_id]
        agent.snake = snake
        agent.max_len = len(snake)
        agent.life = 1.0

    for x, y in food:
        game.board.set(y, x, FOOD)


def _assert_consistent(game):
    """Board tags and snake bodies describe exactly the same cells"""
    for snake_id, agent in game.agents.items():
        body = [tuple(p) for p in agent.snake.positions]
        assert len(body) >= 2
        assert len(set(body)) == len(body)
        assert sorted(game.board.positions_of(snake_id)) == sorted(body)

    tags = set(int(t) for t in np.unique(game.board.grid)) - {EMPTY, WALL, FOOD}
    assert tags == set(game.agents)

    interior = game.board.grid[1:-1, 1:-1]
    assert not np.any(interior == WALL)


@pytest.fixture
def scripted():
    return ScriptedPlayer


@pytest.fixture
def layout():
    return _layout


@pytest.fixture
def assert_consistent():
    return _assert_consistent
