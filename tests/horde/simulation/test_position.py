# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tests for the Position value type and its "(x, y)" wire form."""

from __future__ import annotations

import pytest

from horde.errors import HordeError, PositionFormatError
from horde.simulation.position import Position


@pytest.mark.unit
class TestWireForm:
    def test_str(self):
        assert str(Position(4, 2)) == "(4, 2)"

    def test_parse(self):
        assert Position.parse("(4, 2)") == Position(4, 2)

    def test_parse_negative(self):
        assert Position.parse("(-3, 0)") == Position(-3, 0)

    def test_parse_inverts_str(self):
        p = Position(17, -9)
        assert Position.parse(str(p)) == p

    @pytest.mark.parametrize("text", [
        "4,2", "(4,2)", "(4, 2", "4, 2)", "", "(a, b)", "(4, 2) ",
        "(4, 2)\n", "(\uff14, 2)",
    ])
    def test_malformed_rejected(self, text):
        with pytest.raises(PositionFormatError):
            Position.parse(text)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            Position.parse("nope")
        assert issubclass(PositionFormatError, HordeError)

    def test_non_string_rejected(self):
        with pytest.raises(PositionFormatError):
            Position.parse(None)


@pytest.mark.unit
class TestGeometry:
    def test_manhattan(self):
        assert Position(2, 2).manhattan(Position(4, 5)) == 5

    def test_in_range_is_inclusive(self):
        assert Position(0, 0).in_range(Position(3, 2), 5)
        assert not Position(0, 0).in_range(Position(3, 3), 5)

    def test_adjacent_is_orthogonal(self):
        origin = Position(5, 5)
        assert origin.is_adjacent(Position(5, 6))
        assert origin.is_adjacent(Position(4, 5))
        assert not origin.is_adjacent(Position(6, 6))

    def test_orthogonal_neighbors(self):
        assert set(Position(1, 1).orthogonal_neighbors()) == {
            Position(1, 0), Position(1, 2), Position(0, 1), Position(2, 1),
        }

    def test_hashable_and_frozen(self):
        p = Position(1, 2)
        assert {p: "x"}[Position(1, 2)] == "x"
        with pytest.raises(AttributeError):
            p.x = 3  # type: ignore[misc]
