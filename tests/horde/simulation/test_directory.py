# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tests for the shared AgentDirectory."""

from __future__ import annotations

import threading

import pytest

from horde.errors import DirectoryUnavailableError
from horde.simulation.directory import AgentDirectory
from horde.simulation.enemy_state import ACTIVE_STATES, EnemyState, Role


def _make_directory(**agents: EnemyState) -> AgentDirectory:
    d = AgentDirectory()
    for agent_id, state in agents.items():
        d.register(agent_id, state)
    return d


@pytest.mark.unit
class TestRegistration:
    def test_register_and_lookup(self):
        d = _make_directory(a=EnemyState.IDLE)
        entry = d.entry("a")
        assert entry.state is EnemyState.IDLE
        assert entry.role is Role.STANDARD

    def test_register_is_upsert(self):
        d = _make_directory(a=EnemyState.IDLE)
        d.register("a", EnemyState.ATTACKING)
        assert len(d) == 1
        assert d.entry("a").state is EnemyState.ATTACKING

    def test_deregister(self):
        d = _make_directory(a=EnemyState.IDLE)
        assert d.deregister("a") is True
        assert d.deregister("a") is False
        assert d.entry("a") is None

    def test_find_by_role(self):
        d = AgentDirectory()
        d.register("boss", EnemyState.IDLE, Role.BOSS)
        d.register("grunt", EnemyState.IDLE)
        assert [e.agent_id for e in d.find_by_role(Role.BOSS)] == ["boss"]


@pytest.mark.unit
class TestUpdateState:
    def test_same_state_is_noop(self):
        d = _make_directory(a=EnemyState.IDLE)
        before = d.entry("a").version
        assert d.update_state("a", EnemyState.IDLE) is False
        assert d.update_state("a", EnemyState.IDLE) is False
        assert d.entry("a").version == before

    def test_change_bumps_version(self):
        d = _make_directory(a=EnemyState.IDLE)
        before = d.entry("a").version
        assert d.update_state("a", EnemyState.CHASING_PLAYER) is True
        after = d.entry("a")
        assert after.state is EnemyState.CHASING_PLAYER
        assert after.version > before

    def test_keeps_role(self):
        d = AgentDirectory()
        d.register("boss", EnemyState.IDLE, Role.BOSS)
        d.update_state("boss", EnemyState.ATTACKING)
        assert d.entry("boss").role is Role.BOSS

    def test_unknown_agent_is_noop(self):
        d = AgentDirectory()
        assert d.update_state("ghost", EnemyState.IDLE) is False
        assert len(d) == 0


@pytest.mark.unit
class TestFindByStates:
    def test_filters_by_state_set(self):
        d = _make_directory(
            a=EnemyState.IDLE,
            b=EnemyState.COVERING,
            c=EnemyState.CHASING_TARGET,
            r=EnemyState.RETREATING,
        )
        found = {e.agent_id for e in d.find_by_states({EnemyState.IDLE, EnemyState.CHASING_TARGET})}
        assert found == {"a", "c"}

    def test_active_states_exclude_retreat_and_cover(self):
        d = _make_directory(a=EnemyState.ATTACKING, b=EnemyState.COVERING, r=EnemyState.RETREATING)
        assert [e.agent_id for e in d.find_by_states(ACTIVE_STATES)] == ["a"]

    def test_empty_result(self):
        d = _make_directory(a=EnemyState.IDLE)
        assert d.find_by_states({EnemyState.COVERING}) == []


@pytest.mark.unit
class TestUnavailable:
    def test_lookup_returns_empty(self):
        d = _make_directory(a=EnemyState.IDLE)
        d.close()
        assert d.available is False
        assert d.find_by_states(ACTIVE_STATES) == []
        assert d.find_by_role(Role.STANDARD) == []

    def test_writes_raise(self):
        d = _make_directory(a=EnemyState.IDLE)
        d.close()
        with pytest.raises(DirectoryUnavailableError):
            d.register("b", EnemyState.IDLE)
        with pytest.raises(DirectoryUnavailableError):
            d.update_state("a", EnemyState.ATTACKING)
        assert d.deregister("a") is False


@pytest.mark.unit
class TestConcurrency:
    def test_lookups_never_miss_an_agent_mid_update(self):
        """Readers always see exactly one entry for an agent that flips state."""
        d = _make_directory(a=EnemyState.IDLE)
        states = [EnemyState.IDLE, EnemyState.CHASING_TARGET]
        stop = threading.Event()
        misses: list[int] = []

        def writer():
            i = 0
            while not stop.is_set():
                d.update_state("a", states[i % 2])
                i += 1

        def reader():
            for _ in range(2000):
                if len(d.find_by_states(states)) != 1:
                    misses.append(1)

        w = threading.Thread(target=writer)
        w.start()
        readers = [threading.Thread(target=reader) for _ in range(3)]
        for r in readers:
            r.start()
        for r in readers:
            r.join()
        stop.set()
        w.join()
        assert misses == []

    def test_versions_unique_across_threads(self):
        d = AgentDirectory()
        versions: list[int] = []
        lock = threading.Lock()

        def register_many(prefix: str):
            for i in range(100):
                entry = d.register(f"{prefix}-{i}", EnemyState.IDLE)
                with lock:
                    versions.append(entry.version)

        threads = [threading.Thread(target=register_many, args=(p,)) for p in "abcd"]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(versions) == 400
        assert len(set(versions)) == 400
        assert len(d) == 400
