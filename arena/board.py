"""
Board - sparse tag grid

The board stores one small signed integer per cell:
- EMPTY (0): free cell
- WALL (1): permanent border
- FOOD (-1): food item
- >= FIRST_AGENT_ID: body segment of the agent with that identifier

Coordinates are (y, x) for grid access, matching numpy row/column order.
"""

import numpy as np
from typing import List, Tuple

from arena.errors import PlacementError


EMPTY = 0
WALL = 1
FOOD = -1
FIRST_AGENT_ID = 2


class Board:
    """
    Fixed-size grid with a solid wall border

    Dimensions never change after construction. Reads outside the grid
    report WALL so sensors never need their own bounds checks.
    """

    def __init__(self, height: int, width: int, placement_attempts: int = 10000):
        self.height = height
        self.width = width
        self.placement_attempts = placement_attempts

        self.grid = np.zeros((height, width), dtype=np.int8)
        self.grid[0, :] = WALL
        self.grid[-1, :] = WALL
        self.grid[:, 0] = WALL
        self.grid[:, -1] = WALL

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape

    def at(self, y: int, x: int) -> int:
        """Tag at (y, x), WALL for anything off the board"""
        if y < 0 or y >= self.height or x < 0 or x >= self.width:
            return WALL
        return int(self.grid[y, x])

    def set(self, y: int, x: int, tag: int):
        self.grid[y, x] = tag

    def random_interior(self, rng: np.random.Generator) -> Tuple[int, int]:
        """Uniform random (x, y) strictly inside the wall border"""
        x = int(rng.integers(1, self.width - 1))
        y = int(rng.integers(1, self.height - 1))
        return x, y

    def free_cells(self) -> np.ndarray:
        """(n, 2) array of (y, x) for every EMPTY cell"""
        return np.argwhere(self.grid == EMPTY)

    def place_food(self, rng: np.random.Generator) -> Tuple[int, int]:
        """
        Tag a random empty interior cell as FOOD

        Rejection-samples first; a crowded board falls back to picking
        among the enumerated empty cells.

        Returns:
            (x, y) of the new food item
        """
        for _ in range(self.placement_attempts):
            x, y = self.random_interior(rng)
            if self.grid[y, x] == EMPTY:
                self.grid[y, x] = FOOD
                return x, y

        free = self.free_cells()
        if len(free) == 0:
            raise PlacementError("No empty cell left for food")
        y, x = free[rng.integers(len(free))]
        self.grid[y, x] = FOOD
        return int(x), int(y)

    def count(self, tag: int) -> int:
        return int(np.count_nonzero(self.grid == tag))

    def positions_of(self, tag: int) -> List[Tuple[int, int]]:
        """All (x, y) cells carrying tag"""
        return [(int(x), int(y)) for y, x in np.argwhere(self.grid == tag)]

    def clear_tag(self, tag: int) -> int:
        """Reset every cell carrying tag to EMPTY, returns how many were cleared"""
        mask = self.grid == tag
        cleared = int(np.count_nonzero(mask))
        self.grid[mask] = EMPTY
        return cleared

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the grid"""
        grid = self.grid.copy()
        grid.flags.writeable = False
        return grid

    def frozen(self) -> 'Board':
        """Board over a read-only snapshot; any write raises ValueError"""
        board = Board.__new__(Board)
        board.height = self.height
        board.width = self.width
        board.placement_attempts = self.placement_attempts
        board.grid = self.snapshot()
        return board

    def __repr__(self):
        return f"<Board {self.height}x{self.width}, food={self.count(FOOD)}>"
