# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Position — immutable grid cell coordinate.

The textual form ``"(x, y)"`` is the wire format for position payloads
exchanged between agents.  ``Position.parse`` is strict: anything other
than a parenthesised pair separated by a literal ``", "`` is rejected.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from horde.errors import PositionFormatError

_WIRE_RE = re.compile(r"\((-?[0-9]+), (-?[0-9]+)\)")

# Orthogonal unit steps: up, down, left, right (never diagonals)
ORTHOGONAL_STEPS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    @classmethod
    def parse(cls, text: str) -> Position:
        """Parse the ``"(x, y)"`` wire form.

        Raises:
            PositionFormatError: on any other shape, e.g. ``"4,2"``.
        """
        if not isinstance(text, str):
            raise PositionFormatError(text)
        m = _WIRE_RE.fullmatch(text)
        if m is None:
            raise PositionFormatError(text)
        return cls(int(m.group(1)), int(m.group(2)))

    def translate(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def manhattan(self, other: Position) -> int:
        return abs(other.x - self.x) + abs(other.y - self.y)

    def in_range(self, other: Position, distance: int) -> bool:
        """True when *other* is within Manhattan *distance*."""
        return self.manhattan(other) <= distance

    def is_adjacent(self, other: Position) -> bool:
        # Same cell counts as adjacent (distance 0 <= 1)
        return self.in_range(other, 1)

    def distance_to(self, other: Position) -> float:
        """Euclidean distance, used to rank candidates by straight-line range."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def orthogonal_neighbors(self) -> list[Position]:
        return [self.translate(dx, dy) for dx, dy in ORTHOGONAL_STEPS]

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)
