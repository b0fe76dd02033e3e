"""
Tests for Snake

Heading derivation, movement, shrinking and placement at birth
"""

import pytest

from arena.board import Board, EMPTY
from arena.errors import PlacementError
from arena.moves import Action, Move, next_head
from arena.snake import Direction, Position, Snake
from arena.utils import make_rng


class TestSnakeBody:
    """Test head, tail and heading"""

    def test_head_and_tail(self):
        """Test head is the last segment and tail the first"""
        s = Snake([(5, 5), (6, 5)])
        assert s.head() == Position(6, 5)
        assert s.tail() == Position(5, 5)
        assert s.body() == Position(5, 5)

    def test_empty_snake_sentinel(self):
        """Test an unborn snake reports (0, 0)"""
        s = Snake()
        assert s.head() == Position(0, 0)
        assert s.tail() == Position(0, 0)
        assert len(s) == 0

    @pytest.mark.parametrize("positions, direction", [
        ([(5, 5), (6, 5)], Direction.EAST),
        ([(6, 5), (5, 5)], Direction.WEST),
        ([(5, 6), (5, 5)], Direction.NORTH),
        ([(5, 5), (5, 6)], Direction.SOUTH),
    ])
    def test_direction(self, positions, direction):
        """Test heading comes from the last two segments"""
        assert Snake(positions).direction() == direction

    def test_turns_are_quarter_rotations(self):
        """Test left and right turns never reverse"""
        for d in Direction:
            assert d.turn_left().turn_right() == d
            assert (d.turn_left() - d) % 4 == 3
            assert (d.turn_right() - d) % 4 == 1


class TestSnakeMovement:
    """Test moving, growing and shrinking"""

    def test_walk_sequence(self):
        """Test a short walk keeps head, body and tail in step"""
        s = Snake([(5, 5), (6, 5)])

        s.move_to(next_head(s, Move.for_action(Action.STRAIGHT, 7)), grew=False)
        assert s.head() == Position(7, 5)
        assert s.body() == Position(6, 5)
        assert s.tail() == Position(6, 5)

        s.move_to(next_head(s, Move.for_action(Action.LEFT, 7)), grew=False)
        assert s.head() == Position(7, 4)
        assert s.body() == Position(7, 5)
        assert s.tail() == Position(7, 5)
        assert s.direction() == Direction.NORTH

    def test_grow_keeps_tail(self):
        """Test eating adds a segment and keeps the tail"""
        s = Snake([(5, 5), (6, 5)])
        s.move_to(Position(7, 5), grew=True)

        assert len(s) == 3
        assert s.tail() == Position(5, 5)
        assert s.head() == Position(7, 5)

    def test_shrink(self):
        """Test shrinking drops the tail and reports when too short"""
        s = Snake([(4, 5), (5, 5), (6, 5)])

        assert s.shrink() is False
        assert s.positions == [Position(5, 5), Position(6, 5)]

        assert s.shrink() is True
        assert len(s) == 1


class TestSnakeSpawn:
    """Test placement at birth"""

    def test_spawn_stamps_two_cells(self):
        """Test a new snake is two horizontal cells tagged with its id"""
        board = Board(10, 10)
        s = Snake.spawn(board, 7, make_rng(1))

        assert len(s) == 2
        assert s.head() == Position(s.tail().x + 1, s.tail().y)
        assert s.direction() == Direction.EAST
        for pos in s:
            assert board.at(pos.y, pos.x) == 7
        assert board.count(7) == 2

    def test_spawn_avoids_occupied_cells(self):
        """Test snakes never overlap each other"""
        board = Board(8, 8)
        rng = make_rng(5)
        for snake_id in range(2, 11):
            Snake.spawn(board, snake_id, rng)

        for snake_id in range(2, 11):
            assert board.count(snake_id) == 2

    def test_spawn_uses_last_free_pair(self):
        """Test the fallback search finds a lone free pair"""
        board = Board(6, 6, placement_attempts=2)
        board.grid[1:-1, 1:-1] = 9
        board.set(3, 2, EMPTY)
        board.set(3, 3, EMPTY)

        s = Snake.spawn(board, 4, make_rng(0))
        assert s.positions == [Position(2, 3), Position(3, 3)]

    def test_spawn_without_room_raises(self):
        """Test a board with no horizontal free pair is a placement error"""
        board = Board(6, 6, placement_attempts=2)
        board.grid[1:-1, 1:-1] = 9
        board.set(2, 2, EMPTY)
        board.set(3, 2, EMPTY)

        with pytest.raises(PlacementError):
            Snake.spawn(board, 4, make_rng(0))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
