#!/usr/bin/env python3
# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Run a short skirmish in a GridWorld and print the event stream.

Usage:
    python3 scripts/run_skirmish.py [--duration 10] [--seed 42] [--enemies 4]

A wandering player shares one room with a small horde and a boss.  The
player picks up power-ups it stumbles on and hits any enemy it bumps
into; everything the enemies do is decided by their own agents.
"""

import argparse
import queue
import random
import sys
import time
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))

from horde import configure_logging
from horde.comms.event_bus import ALL_EVENTS, ENTITY_MOVED, EventBus
from horde.config import Settings
from horde.simulation.coordinator import HordeCoordinator
from horde.simulation.grid_world import GridWorld, PowerUpType
from horde.simulation.position import Position

ROOM_WIDTH = 20
ROOM_HEIGHT = 12
PLAYER_STEP_SECONDS = 0.5
PLAYER_HIT = 15


def _free_cell(world: GridWorld, rng: random.Random) -> Position:
    while True:
        pos = Position(rng.randint(1, ROOM_WIDTH - 2), rng.randint(1, ROOM_HEIGHT - 2))
        if world.is_walkable(pos):
            return pos


def build_world(rng: random.Random, enemies: int) -> GridWorld:
    world = GridWorld(ROOM_WIDTH, ROOM_HEIGHT, rng=rng)
    world.place_player(Position(ROOM_WIDTH // 2, ROOM_HEIGHT // 2))
    world.add_enemy("boss", _free_cell(world, rng), boss=True)
    for i in range(enemies):
        world.add_enemy(f"orc-{i}", _free_cell(world, rng))
    for kind in PowerUpType:
        world.add_power_up(_free_cell(world, rng), kind)
    for _ in range(8):
        world.add_wall(_free_cell(world, rng))
    return world


def player_turn(world: GridWorld, coord: HordeCoordinator, rng: random.Random) -> None:
    here = world.player_position()
    if here is None:
        return
    for cell in here.orthogonal_neighbors():
        if cell in world.power_up_positions() and world.player_collect_power_up(cell):
            print(f"  player picked up power-up at {cell}")
            coord.notify_power_up_collected(cell)
            return
    for name in world.enemy_names():
        ref = world.entity_by_name(name)
        if ref is not None and ref.alive and ref.position.is_adjacent(here):
            world.damage_enemy(name, PLAYER_HIT)
            print(f"  player hits {name}")
            return
    world.move_player(rng.choice(here.orthogonal_neighbors()))


def print_events(events: queue.Queue) -> None:
    while True:
        try:
            msg = events.get_nowait()
        except queue.Empty:
            return
        data = msg.get("data", {})
        print(f"  [{msg['type']}] {data}")


def main():
    parser = argparse.ArgumentParser(description="Enemy horde skirmish demo")
    parser.add_argument(
        "--duration", type=float, default=10.0,
        help="Seconds to run (default: 10)",
    )
    parser.add_argument(
        "--seed", type=int, default=42,
        help="Random seed for the room layout (default: 42)",
    )
    parser.add_argument(
        "--enemies", type=int, default=4,
        help="Number of standard enemies besides the boss (default: 4)",
    )
    args = parser.parse_args()

    settings = Settings()
    configure_logging(settings.log_level)
    rng = random.Random(args.seed)
    world = build_world(rng, args.enemies)
    bus = EventBus()
    events = bus.subscribe(*(ALL_EVENTS - {ENTITY_MOVED}))

    coord = HordeCoordinator(world, bus, settings, rng=rng)
    coord.spawn_horde(world.enemy_names(), boss=world.boss_name())
    print(world.render())

    coord.start()
    deadline = time.monotonic() + args.duration
    try:
        while time.monotonic() < deadline and world.player_is_alive() and coord.agents:
            player_turn(world, coord, rng)
            time.sleep(PLAYER_STEP_SECONDS)
            print_events(events)
    except KeyboardInterrupt:
        print("\nInterrupted.")
    finally:
        coord.stop()
        print_events(events)

    print(world.render())
    player = world.player_stats()
    print(f"Player health: {player.health if player else 0}")


if __name__ == "__main__":
    main()
