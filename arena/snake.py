"""
Snake body

A snake is the ordered list of cells it occupies, tail first and head last.
Its heading is never stored; it is derived from the last two segments.
"""

import numpy as np
from enum import IntEnum
from typing import Iterator, List, NamedTuple, Optional

from arena.board import Board, EMPTY
from arena.errors import PlacementError


MIN_LENGTH = 2


class Direction(IntEnum):
    """Cardinal headings, clockwise so that +1 is a right turn"""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def turn_left(self) -> 'Direction':
        return Direction((self - 1) % 4)

    def turn_right(self) -> 'Direction':
        return Direction((self + 1) % 4)


# (dx, dy) per heading, y grows southward
DELTAS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class Position(NamedTuple):
    x: int
    y: int

    def step(self, direction: Direction, distance: int = 1) -> 'Position':
        dx, dy = DELTAS[direction]
        return Position(self.x + dx * distance, self.y + dy * distance)


ORIGIN = Position(0, 0)


class Snake:
    """
    Body of one agent

    Attributes:
        positions: list of Position, tail at index 0, head at index -1
    """

    def __init__(self, positions: Optional[List[Position]] = None):
        self.positions = [Position(*p) for p in positions] if positions else []

    @classmethod
    def spawn(cls, board: Board, snake_id: int, rng: np.random.Generator) -> 'Snake':
        """
        Place a new two-segment snake heading east

        Looks for a random interior (x, y) with (x, y) and (x + 1, y) both
        empty and stamps both with snake_id.
        """
        for _ in range(board.placement_attempts):
            x, y = board.random_interior(rng)
            if board.at(y, x) == EMPTY and board.at(y, x + 1) == EMPTY:
                return cls._stamp(board, snake_id, x, y)

        free = board.grid == EMPTY
        pairs = np.argwhere(free[:, :-1] & free[:, 1:])
        if len(pairs) == 0:
            raise PlacementError(f"No room left to place snake {snake_id}")
        y, x = pairs[rng.integers(len(pairs))]
        return cls._stamp(board, snake_id, int(x), int(y))

    @classmethod
    def _stamp(cls, board: Board, snake_id: int, x: int, y: int) -> 'Snake':
        board.set(y, x, snake_id)
        board.set(y, x + 1, snake_id)
        return cls([Position(x, y), Position(x + 1, y)])

    def head(self) -> Position:
        if not self.positions:
            return ORIGIN
        return self.positions[-1]

    def tail(self) -> Position:
        if not self.positions:
            return ORIGIN
        return self.positions[0]

    def body(self) -> Position:
        """Segment right behind the head"""
        if len(self.positions) < 2:
            return ORIGIN
        return self.positions[-2]

    def direction(self) -> Direction:
        """Heading derived from head vs. the segment behind it"""
        head = self.head()
        body = self.body()
        if head.x == body.x:
            if head.y > body.y:
                return Direction.SOUTH
            return Direction.NORTH
        elif head.x > body.x:
            return Direction.EAST
        return Direction.WEST

    def move_to(self, new_head: Position, grew: bool):
        """Advance the head; the tail stays only when food was eaten"""
        self.positions.append(Position(*new_head))
        if not grew:
            self.positions.pop(0)

    def shrink(self) -> bool:
        """
        Drop the oldest tail segment

        Returns:
            True if the snake is now shorter than MIN_LENGTH
        """
        if self.positions:
            self.positions.pop(0)
        return len(self.positions) < MIN_LENGTH

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __repr__(self):
        return f"<Snake len={len(self)} head={tuple(self.head())} dir={self.direction().name}>"
