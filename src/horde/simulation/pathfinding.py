# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""One-step pathfinding for grid-bound enemies.

Architecture
------------
No path is ever stored.  Every tick a moving unit asks ``next_step`` for the
single best orthogonal neighbour of its current cell and re-evaluates on the
following tick, so the route adapts as other entities move.

Scoring is A*-shaped but only one ply deep:

    f(n) = g(current -> n) + h(n -> target)

with both ``g`` and ``h`` the Manhattan distance.  ``g`` is always 1 for an
orthogonal neighbour and is kept so the cost term can grow (terrain, etc.).
Ties are broken uniformly at random so groups of enemies do not move in
visible lockstep.  Being greedy, a unit can oscillate in front of a concave
wall; the next world-driven trigger usually breaks the loop.

``find_nearest_walkable`` is the fallback used when a preferred cell (for
instance a cover spot) is blocked: an expanding square ring around the
desired cell, first hit wins.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Protocol

from .position import Position

if TYPE_CHECKING:
    from .world import WorldModel


class _WalkableQuery(Protocol):
    def is_walkable(self, pos: Position) -> bool: ...


def _g_cost(start: Position, step: Position) -> int:
    return start.manhattan(step)


def _heuristic(step: Position, target: Position) -> int:
    return step.manhattan(target)


def next_step(
    current: Position,
    target: Position,
    world: _WalkableQuery,
    rng: random.Random | None = None,
) -> Position:
    """Return the best walkable orthogonal neighbour of *current* toward *target*.

    Returns *current* unchanged when every neighbour is blocked.
    """
    rng = rng or random
    best: list[Position] = []
    best_cost: int | None = None
    for neighbor in current.orthogonal_neighbors():
        if not world.is_walkable(neighbor):
            continue
        cost = _g_cost(current, neighbor) + _heuristic(neighbor, target)
        if best_cost is None or cost < best_cost:
            best_cost = cost
            best = [neighbor]
        elif cost == best_cost:
            best.append(neighbor)

    if not best:
        return current
    if len(best) == 1:
        return best[0]
    return rng.choice(best)


def chebyshev(a: Position, b: Position) -> int:
    return max(abs(a.x - b.x), abs(a.y - b.y))


def find_nearest_walkable(
    origin: Position,
    start_search_at: Position,
    world: WorldModel,
) -> Position:
    """Expanding-ring search for a walkable cell around *start_search_at*.

    Radius grows from 1 up to the larger room dimension.  Within a radius the
    ring is scanned x-major then y (the room grid's row-major order).  If the
    whole room is exhausted, *origin* is returned.
    """
    width, height = world.room_dimensions()
    max_radius = max(width, height)
    for radius in range(1, max_radius + 1):
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if max(abs(dx), abs(dy)) != radius:
                    continue
                candidate = start_search_at.translate(dx, dy)
                if world.is_walkable(candidate):
                    return candidate
    return origin
