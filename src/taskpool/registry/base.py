"""
TaskRegistry - a bounded, thread-safe pool of tasks.

Every mutation (add, kill, kill_all, kill_by_priority) runs under the
registry's write lock for its whole body, so the three indices always change
together. list() runs under the read lock, callbacks included.
"""

from __future__ import annotations

import logging
import weakref

from ..policy.base import AdmissionPolicy, Block, Strategy, policy_for
from ..primitives.pid import PID, PIDAllocator, PoolExhausted
from ..primitives.priority import Priority
from ..primitives.rwlock import FairRWLock
from ..views.base import SortCriteria, SortOrder, Visitor, view_for
from .indices import TaskIndices
from .task import Task, TerminateHook

logger = logging.getLogger(__name__)


class TaskRegistry:
    """
    Capacity-bounded task registry.

    When full, the admission policy picks a victim to evict (or none, in
    which case add() returns None).
    """

    def __init__(
        self,
        capacity: int,
        allocator: PIDAllocator | None = None,
        policy: AdmissionPolicy | None = None,
    ):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ValueError(f"capacity must be an int, got {capacity!r}")
        if capacity < 1:
            raise ValueError("capacity must be greater than 0")
        self._capacity = capacity
        self._size = 0
        self._allocator = allocator if allocator is not None else PIDAllocator()
        self._policy = policy if policy is not None else Block()
        self._indices = TaskIndices()
        self._lock = FairRWLock()

    @classmethod
    def with_strategy(
        cls,
        strategy: Strategy,
        capacity: int,
        allocator: PIDAllocator | None = None,
    ) -> "TaskRegistry":
        """Build a registry using one of the named admission strategies."""
        return cls(capacity, allocator=allocator, policy=policy_for(strategy))

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def policy(self) -> AdmissionPolicy:
        return self._policy

    @property
    def size(self) -> int:
        with self._lock.read_locked():
            return self._size

    @property
    def is_full(self) -> bool:
        with self._lock.read_locked():
            return self._size >= self._capacity

    def __len__(self) -> int:
        return self.size

    def __contains__(self, task: object) -> bool:
        if not isinstance(task, Task):
            return False
        with self._lock.read_locked():
            return self._indices.by_insertion.get(task.pid) is task

    def __repr__(self) -> str:
        with self._lock.read_locked():
            return (
                f"{self.__class__.__name__}(capacity={self._capacity}, "
                f"size={self._size}, policy={self._policy!r})"
            )

    # --- Admission ---

    def add(self, priority: Priority, on_terminate: TerminateHook | None = None) -> Task | None:
        """
        Admit a new task at `priority`.

        Returns the task, or None if it was not admitted (full with no
        eligible victim, or the PID allocator is exhausted).
        """
        if not isinstance(priority, Priority):
            raise TypeError(f"priority must be a Priority, got {priority!r}")

        with self._lock.write_locked():
            victim: Task | None = None
            if self._size >= self._capacity:
                victim = self._policy.select_victim(self._indices, priority)
                if victim is not None and self._indices.by_insertion.get(victim.pid) is not victim:
                    # Secondary indices still hold tasks mid-way through kill_all().
                    victim = None
                if victim is None:
                    logger.debug("Rejected %s task: registry full (%d)", priority.name, self._capacity)
                    return None

            try:
                pid = self._allocator.acquire()
            except PoolExhausted as e:
                logger.warning("Rejected %s task: %s", priority.name, e)
                return None

            if victim is not None:
                logger.debug("Evicting %r to admit %r", victim, pid)
                self._kill_locked(victim)

            task = Task(pid, priority, weakref.ref(self), on_terminate)
            self._indices.insert(task)
            self._size += 1
            logger.debug("Admitted %r (%d/%d)", task, self._size, self._capacity)
            return task

    # --- Removal ---

    def kill(self, task: Task) -> None:
        """Kill a task. Killing an absent task is a no-op."""
        with self._lock.write_locked():
            self._kill_locked(task)

    def kill_all(self) -> None:
        """Kill every live task."""
        with self._lock.write_locked():
            doomed = list(self._indices.by_insertion.values())
            try:
                for task in doomed:
                    if self._indices.pop_primary(task.pid) is None:
                        # Already removed by an earlier task's termination hook.
                        continue
                    self._size -= 1
                    try:
                        task.terminate()
                    finally:
                        self._allocator.release(task.pid)
            finally:
                # Hooks may have admitted new tasks; those stay filed.
                self._indices.reset_secondary()
                logger.debug("Killed all %d tasks, %d left", len(doomed), self._size)

    def kill_by_priority(self, priority: Priority) -> None:
        """Kill every live task at exactly `priority`."""
        with self._lock.write_locked():
            for task in self._indices.at_priority(priority):
                self._kill_locked(task)

    def _kill_locked(self, task: Task) -> None:
        # Caller holds the write lock.
        if self._indices.by_insertion.get(task.pid) is not task:
            return
        # Drop from the primary index before running the hook, so a hook that
        # kills the task again finds it absent.
        self._indices.pop_primary(task.pid)
        try:
            task.terminate()
        finally:
            self._allocator.release(task.pid)
            self._indices.drop_secondary(task)
            self._size -= 1
            logger.debug("Killed %r", task)

    # --- Enumeration ---

    def list(
        self,
        visit: Visitor,
        criterion: SortCriteria = SortCriteria.INSERTION,
        order: SortOrder = SortOrder.ASCENDING,
    ) -> None:
        """
        Call `visit` once per live task in the requested order.

        `visit` runs under the read lock: it must not add or kill tasks on
        this registry (doing so raises RuntimeError).
        """
        with self._lock.read_locked():
            view_for(self._indices, criterion, order).list(visit)

    def tasks(
        self,
        criterion: SortCriteria = SortCriteria.INSERTION,
        order: SortOrder = SortOrder.ASCENDING,
    ) -> list[Task]:
        """Snapshot of live tasks in the requested order."""
        result: list[Task] = []
        self.list(result.append, criterion, order)
        return result

    def pids(
        self,
        criterion: SortCriteria = SortCriteria.INSERTION,
        order: SortOrder = SortOrder.ASCENDING,
    ) -> list[PID]:
        return [task.pid for task in self.tasks(criterion, order)]

    def check_invariants(self) -> None:
        """Raise AssertionError if the indices or size disagree."""
        with self._lock.read_locked():
            self._indices.check()
            if self._size != len(self._indices):
                raise AssertionError(f"size {self._size} != {len(self._indices)} live")
            if not 0 <= self._size <= self._capacity:
                raise AssertionError(f"size {self._size} outside [0, {self._capacity}]")

