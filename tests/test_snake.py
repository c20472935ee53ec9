"""Tests for directions, segments and the starting snake."""

import pytest

from enhanced_snake.snake import (
    INITIAL_DIRECTION,
    Direction,
    Segment,
    initial_snake,
    is_allowed,
    parse_direction,
)


class TestDirection:
    def test_unit_vectors(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        assert Direction.LEFT.value == (-1, 0)
        assert Direction.RIGHT.value == (1, 0)

    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.DOWN.opposite is Direction.UP
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.RIGHT.opposite is Direction.LEFT


class TestReversalFilter:
    @pytest.mark.parametrize("current", list(Direction))
    def test_reversal_rejected(self, current):
        assert not is_allowed(current, current.opposite)

    @pytest.mark.parametrize("current", list(Direction))
    def test_same_direction_allowed(self, current):
        assert is_allowed(current, current)

    def test_turns_allowed(self):
        assert is_allowed(Direction.RIGHT, Direction.UP)
        assert is_allowed(Direction.RIGHT, Direction.DOWN)
        assert is_allowed(Direction.UP, Direction.LEFT)


class TestParseDirection:
    def test_plain_names(self):
        assert parse_direction("up") is Direction.UP
        assert parse_direction("LEFT") is Direction.LEFT

    def test_key_names(self):
        assert parse_direction("ArrowDown") is Direction.DOWN
        assert parse_direction("ArrowRight") is Direction.RIGHT

    def test_unknown(self):
        assert parse_direction("sideways") is None
        assert parse_direction("") is None


class TestSegment:
    def test_moved(self):
        seg = Segment(5, 5, Direction.RIGHT)
        moved = seg.moved(Direction.UP)
        assert moved.cell == (5, 4)
        assert moved.direction is Direction.UP

    def test_segments_are_immutable(self):
        seg = Segment(1, 2)
        with pytest.raises(AttributeError):
            seg.x = 3

    def test_to_dict(self):
        assert Segment(3, 4, Direction.DOWN).to_dict() == {
            "x": 3, "y": 4, "direction": "DOWN",
        }


class TestInitialSnake:
    def test_fixed_start(self):
        assert initial_snake() == (
            Segment(10, 10, Direction.RIGHT),
            Segment(9, 10, Direction.RIGHT),
        )
        assert INITIAL_DIRECTION is Direction.RIGHT

    def test_returns_equal_values_each_time(self):
        assert initial_snake() == initial_snake()
