"""
Egocentric Vision Sensor

Casts a fixed fan of rays from the snake's head, relative to its heading:

    [0] AHEAD       straight on
    [1] LEFT        90 degrees left
    [2] RIGHT       90 degrees right
    [3] AHEAD_LEFT  diagonal between ahead and left
    [4] AHEAD_RIGHT diagonal between ahead and right

Each ray is sampled at depths 1..depth. The output is depth-major, so the
first five values are the ring of cells touching the head and index 0 is
always the cell directly ahead, whatever the absolute heading.
"""

import numpy as np
from enum import IntEnum

from arena.board import Board, EMPTY, FOOD, WALL
from arena.snake import DELTAS, Snake


class Ray(IntEnum):
    AHEAD = 0
    LEFT = 1
    RIGHT = 2
    AHEAD_LEFT = 3
    AHEAD_RIGHT = 4


class VisionSensor:
    """
    Fixed-length egocentric view of the board

    Args:
        depth: number of cells sampled along each ray
        cap_blocked: report every wall or body tag as WALL instead of the raw tag
    """

    def __init__(self, depth: int = 3, cap_blocked: bool = True):
        self.depth = depth
        self.cap_blocked = cap_blocked

    @property
    def size(self) -> int:
        return len(Ray) * self.depth

    def index(self, ray: Ray, depth: int = 1) -> int:
        """Position of the (ray, depth) sample in the output vector"""
        return (depth - 1) * len(Ray) + int(ray)

    def ray_steps(self, snake: Snake):
        """Absolute (dx, dy) unit step for each ray, in Ray order"""
        heading = snake.direction()
        ahead = DELTAS[heading]
        left = DELTAS[heading.turn_left()]
        right = DELTAS[heading.turn_right()]
        return [
            ahead,
            left,
            right,
            (ahead[0] + left[0], ahead[1] + left[1]),
            (ahead[0] + right[0], ahead[1] + right[1]),
        ]

    def encode(self, board: Board, snake: Snake) -> np.ndarray:
        head = snake.head()
        steps = self.ray_steps(snake)

        vision = np.empty(self.size, dtype=np.int8)
        i = 0
        for d in range(1, self.depth + 1):
            for dx, dy in steps:
                tag = board.at(head.y + dy * d, head.x + dx * d)
                if self.cap_blocked and tag not in (EMPTY, FOOD):
                    tag = WALL
                vision[i] = tag
                i += 1
        return vision
