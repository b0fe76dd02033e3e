"""
Move Resolution

Turns a raw three-score decision into the absolute cell the head moves to.
Nothing here mutates the board or the snake.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from arena.snake import Position, Snake


class Action(IntEnum):
    """Score indices of a Move, relative to the current heading"""
    LEFT = 0
    STRAIGHT = 1
    RIGHT = 2


@dataclass
class Move:
    """One agent's decision for one tick"""
    scores: Sequence[float]
    snake_id: int

    @classmethod
    def for_action(cls, action: Action, snake_id: int) -> 'Move':
        scores = [0.0, 0.0, 0.0]
        scores[action] = 1.0
        return cls(scores=scores, snake_id=snake_id)

    @classmethod
    def straight(cls, snake_id: int) -> 'Move':
        return cls.for_action(Action.STRAIGHT, snake_id)


def choose_action(scores: Sequence[float]) -> Action:
    """
    Action with the strictly largest score

    Ties, vectors that are not exactly three long and NaN or non-numeric
    scores all fall back to STRAIGHT.
    """
    try:
        if len(scores) != 3:
            return Action.STRAIGHT
        left, straight, right = (float(s) for s in scores)
    except (TypeError, ValueError):
        return Action.STRAIGHT

    if any(math.isnan(s) for s in (left, straight, right)):
        return Action.STRAIGHT

    if left > straight and left > right:
        return Action.LEFT
    if right > straight and right > left:
        return Action.RIGHT
    return Action.STRAIGHT


def next_head(snake: Snake, move: Move) -> Position:
    """Cell the head would enter for this move"""
    direction = snake.direction()
    action = choose_action(move.scores)
    if action == Action.LEFT:
        direction = direction.turn_left()
    elif action == Action.RIGHT:
        direction = direction.turn_right()
    return snake.head().step(direction)
