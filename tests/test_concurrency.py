"""Concurrent admission through threads and the AnyIO facade."""

from __future__ import annotations

import threading

import anyio
import pytest

from taskpool import AsyncTaskRegistry, Priority, SortCriteria, Strategy, TaskRegistry
from helpers import H, L, M, pid_values


def run_admitters(registry: TaskRegistry, priorities: list[Priority]) -> list:
    """Start one thread per priority, release them together, collect add() results."""
    start = threading.Barrier(len(priorities), timeout=5.0)
    results = []

    def admit(priority: Priority) -> None:
        start.wait()
        results.append(registry.add(priority))

    threads = [threading.Thread(target=admit, args=(p,)) for p in priorities]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10.0)
    return results


class TestThreadedAdmission:
    """N concurrent admitters against capacity C."""

    @pytest.mark.parametrize("n, capacity", [(20, 7), (4, 10), (16, 16)])
    def test_exactly_min_n_c_admitted(self, n, capacity):
        """Test N racing admitters yield exactly min(N, C) tasks."""
        registry = TaskRegistry(capacity)

        results = run_admitters(registry, [M] * n)

        admitted = [r for r in results if r is not None]
        assert len(results) == n
        assert len(admitted) == min(n, capacity)
        assert results.count(None) == n - min(n, capacity)
        assert len({t.pid for t in admitted}) == len(admitted)
        assert registry.size == min(n, capacity)
        registry.check_invariants()

    def test_favor_new_keeps_newest(self):
        """Test racing FavorNew admissions keep the newest PIDs."""
        registry = TaskRegistry.with_strategy(Strategy.FAVOR_NEW, 5)

        results = run_admitters(registry, [L, M, H] * 8)

        assert all(r is not None for r in results)
        newest = sorted(t.pid.value for t in results)[-5:]
        assert sorted(pid_values(registry)) == newest
        registry.check_invariants()

    def test_mixed_readers_and_writers(self):
        """Test readers never see a torn or oversized registry."""
        registry = TaskRegistry.with_strategy(Strategy.FAVOR_PRIORITY, 8)
        errors = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                try:
                    for criterion in SortCriteria:
                        tasks = registry.tasks(criterion)
                        assert len(tasks) <= registry.capacity
                        assert len({t.pid for t in tasks}) == len(tasks)
                except AssertionError as e:
                    errors.append(e)

        def writer(priority: Priority):
            for _ in range(100):
                task = registry.add(priority)
                if task is not None and task.pid.value % 3 == 0:
                    task.kill()

        readers = [threading.Thread(target=reader) for _ in range(3)]
        writers = [threading.Thread(target=writer, args=(p,)) for p in (L, M, H, H)]
        for t in readers + writers:
            t.start()
        for t in writers:
            t.join(timeout=30.0)
        stop.set()
        for t in readers:
            t.join(timeout=5.0)

        assert errors == []
        registry.check_invariants()


@pytest.mark.anyio
async def test_async_admitters_respect_capacity():
    """Test concurrent async admitters respect capacity."""
    registry = AsyncTaskRegistry.create(5)
    results = []

    async def admit():
        results.append(await registry.add(Priority.MEDIUM))

    async with anyio.create_task_group() as tg:
        for _ in range(12):
            tg.start_soon(admit)

    admitted = [r for r in results if r is not None]
    assert len(admitted) == 5
    assert results.count(None) == 7
    assert sorted(t.pid.value for t in admitted) == [0, 1, 2, 3, 4]
    registry.registry.check_invariants()


@pytest.mark.anyio
async def test_async_facade_operations():
    """Test each AsyncTaskRegistry operation reaches the registry."""
    registry = AsyncTaskRegistry.create(5, strategy=Strategy.FAVOR_PRIORITY,
                                        limiter=anyio.CapacityLimiter(2))
    for p in (H, M, L, L, H):
        await registry.add(p)

    assert await registry.add(H) is not None
    assert [p.value for p in await registry.pids()] == [0, 1, 3, 4, 5]

    await registry.kill_by_priority(H)
    assert [p.value for p in await registry.pids()] == [1, 3]

    seen = []
    await registry.list(seen.append, SortCriteria.PID)
    assert [t.pid.value for t in seen] == [1, 3]

    first = (await registry.tasks())[0]
    await registry.kill(first)
    await registry.kill(first)
    assert len(await registry.tasks()) == 1

    await registry.kill_all()
    assert registry.registry.size == 0
