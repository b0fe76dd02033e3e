"""
Decision-makers

A player is anything that can be given an identifier and, once per tick,
turn a read-only GameView into a Move for that identifier:
- RandomPlayer: random scores, never picks a direction it can see is blocked
- HumanPlayer: keyboard input with a framerate timeout
- StraightPlayer: always goes straight
"""

import queue

import numpy as np
from typing import Optional

from arena.board import WALL
from arena.moves import Action, Move
from arena.vision import Ray, VisionSensor


class Player:
    """
    Base class/interface for decision-makers

    decide() is called from a worker thread during the collecting phase and
    must return within a bounded time.
    """

    def __init__(self):
        self.snake_id: Optional[int] = None

    def assign_id(self, snake_id: int):
        self.snake_id = snake_id

    def decide(self, view) -> Move:
        """
        Return this player's move for the current tick

        Args:
            view: GameView with vision(id), life(id) and a board snapshot
        """
        raise NotImplementedError


class StraightPlayer(Player):
    """Always keeps its heading"""

    def decide(self, view) -> Move:
        return Move.straight(self.snake_id)


class RandomPlayer(Player):
    """
    Uniform random scores, with blocked directions zeroed out

    Only the ring of cells touching the head is checked, so the player
    still walks into traps it cannot see.
    """

    def __init__(self, seed: Optional[int] = None):
        super().__init__()
        self.rng = np.random.default_rng(seed)

    def decide(self, view) -> Move:
        vision = view.vision(self.snake_id)
        sensor: VisionSensor = view.sensor

        scores = self.rng.random(3)
        for action, ray in (
            (Action.LEFT, Ray.LEFT),
            (Action.STRAIGHT, Ray.AHEAD),
            (Action.RIGHT, Ray.RIGHT),
        ):
            if vision[sensor.index(ray)] >= WALL:
                scores[action] = 0.0
        return Move(scores=scores.tolist(), snake_id=self.snake_id)


class HumanPlayer(Player):
    """
    Keyboard-driven player

    Keys are read from input_queue: 'a' turns left, 'w' goes straight,
    'd' turns right. When no key arrives within framerate seconds, or the
    key is anything else, the snake goes straight.
    """

    KEYS = {
        'a': Action.LEFT,
        'w': Action.STRAIGHT,
        'd': Action.RIGHT,
    }

    def __init__(self, input_queue: queue.Queue, framerate: float = 0.2):
        super().__init__()
        self.input_queue = input_queue
        self.framerate = framerate

    def decide(self, view) -> Move:
        try:
            key = self.input_queue.get(timeout=self.framerate)
        except queue.Empty:
            key = None
        action = self.KEYS.get(key, Action.STRAIGHT)
        return Move.for_action(action, self.snake_id)
