"""Tests for comment position parsing."""

import pytest

from ghr_core.utils.position import Position, PositionError, parse_position_arg


@pytest.mark.parametrize("arg", ["", "g", "G", "  g  "])
def test_global_positions(arg):
    pos = parse_position_arg(arg)
    assert pos.is_global
    assert pos.start is None and pos.end is None


def test_single_line():
    assert parse_position_arg("5") == Position("single", start=5, end=5)


def test_range():
    assert parse_position_arg("5-10") == Position("range", start=5, end=10)


def test_degenerate_range_is_single_line():
    assert parse_position_arg("7-7") == Position("single", start=7, end=7)


@pytest.mark.parametrize("arg", ["10-5", "0", "0-3", "abc", "5-", "-5", "1-2-3", "5 - 6"])
def test_invalid_positions(arg):
    with pytest.raises(PositionError):
        parse_position_arg(arg)


def test_position_error_is_value_error():
    with pytest.raises(ValueError):
        parse_position_arg("x")
