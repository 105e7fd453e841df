"""
Async facade over TaskRegistry, built on AnyIO.

The registry's lock blocks the calling thread, so every call is pushed to an
AnyIO worker thread. Any backend AnyIO supports (asyncio, trio) works.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

import anyio
import anyio.to_thread

from .policy.base import Strategy
from .primitives.pid import PID, PIDAllocator
from .primitives.priority import Priority
from .registry.base import TaskRegistry
from .registry.task import Task, TerminateHook
from .views.base import SortCriteria, SortOrder, Visitor


class AsyncTaskRegistry:
    """
    Awaitable wrapper around a TaskRegistry.

    Usage:
        registry = AsyncTaskRegistry.create(5, strategy=Strategy.FAVOR_PRIORITY)
        task = await registry.add(Priority.HIGH)
    """

    def __init__(self, registry: TaskRegistry, limiter: anyio.CapacityLimiter | None = None):
        self._registry = registry
        self._limiter = limiter

    @classmethod
    def create(
        cls,
        capacity: int,
        *,
        strategy: Strategy = Strategy.BLOCK,
        allocator: PIDAllocator | None = None,
        limiter: anyio.CapacityLimiter | None = None,
    ) -> "AsyncTaskRegistry":
        return cls(TaskRegistry.with_strategy(strategy, capacity, allocator=allocator), limiter)

    @property
    def registry(self) -> TaskRegistry:
        """The wrapped synchronous registry."""
        return self._registry

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        return await anyio.to_thread.run_sync(functools.partial(func, *args), limiter=self._limiter)

    async def add(self, priority: Priority, on_terminate: TerminateHook | None = None) -> Task | None:
        return await self._run(self._registry.add, priority, on_terminate)

    async def kill(self, task: Task) -> None:
        await self._run(self._registry.kill, task)

    async def kill_all(self) -> None:
        await self._run(self._registry.kill_all)

    async def kill_by_priority(self, priority: Priority) -> None:
        await self._run(self._registry.kill_by_priority, priority)

    async def list(
        self,
        visit: Visitor,
        criterion: SortCriteria = SortCriteria.INSERTION,
        order: SortOrder = SortOrder.ASCENDING,
    ) -> None:
        """Run list() in a worker thread. `visit` is called from that thread."""
        await self._run(self._registry.list, visit, criterion, order)

    async def tasks(
        self,
        criterion: SortCriteria = SortCriteria.INSERTION,
        order: SortOrder = SortOrder.ASCENDING,
    ) -> list[Task]:
        return await self._run(self._registry.tasks, criterion, order)

    async def pids(
        self,
        criterion: SortCriteria = SortCriteria.INSERTION,
        order: SortOrder = SortOrder.ASCENDING,
    ) -> list[PID]:
        return await self._run(self._registry.pids, criterion, order)
