"""
The three co-maintained indices over a registry's live tasks.

  - by_insertion: PID -> Task in admission order. The owning index.
  - by_pid: sorted list of PIDs.
  - by_priority: Priority -> (PID -> Task in admission order). Buckets are
    dropped as soon as they become empty.

TaskIndices does no locking of its own; every method must be called with the
owning registry's lock held (write lock for mutations).
"""

from __future__ import annotations

import bisect
from typing import Iterator

from ..primitives.pid import PID
from ..primitives.priority import Priority
from .task import Task


class TaskIndices:
    """Insertion, identifier and priority orderings over one live task set."""

    def __init__(self):
        self.by_insertion: dict[PID, Task] = {}
        self.by_pid: list[PID] = []
        self.by_priority: dict[Priority, dict[PID, Task]] = {}

    def __len__(self) -> int:
        return len(self.by_insertion)

    def __contains__(self, pid: object) -> bool:
        return pid in self.by_insertion

    def insert(self, task: Task) -> None:
        self.by_insertion[task.pid] = task
        self.by_priority.setdefault(task.priority, {})[task.pid] = task
        # PIDs are issued in increasing order, so this is nearly always an append.
        bisect.insort(self.by_pid, task.pid)

    def pop_primary(self, pid: PID) -> Task | None:
        """Remove a task from the insertion index only."""
        return self.by_insertion.pop(pid, None)

    def drop_secondary(self, task: Task) -> None:
        """Remove a task from the priority and identifier indices."""
        bucket = self.by_priority.get(task.priority)
        if bucket is not None:
            bucket.pop(task.pid, None)
            if not bucket:
                del self.by_priority[task.priority]

        idx = bisect.bisect_left(self.by_pid, task.pid)
        if idx < len(self.by_pid) and self.by_pid[idx] == task.pid:
            del self.by_pid[idx]

    def reset_secondary(self) -> None:
        """
        Bulk clear of the identifier and priority indices, then re-file
        whatever is still in the insertion index.
        """
        self.by_pid.clear()
        self.by_priority.clear()
        for task in self.by_insertion.values():
            self.by_priority.setdefault(task.priority, {})[task.pid] = task
        self.by_pid.extend(sorted(self.by_insertion))

    def oldest(self) -> Task | None:
        """Head of the insertion index."""
        return next(iter(self.by_insertion.values()), None)

    def oldest_at(self, priority: Priority) -> Task | None:
        bucket = self.by_priority.get(priority)
        if not bucket:
            return None
        return next(iter(bucket.values()))

    def at_priority(self, priority: Priority) -> list[Task]:
        """Snapshot of the tasks at one level, in admission order."""
        return list(self.by_priority.get(priority, {}).values())

    def iter_pid_order(self, reverse: bool = False) -> Iterator[Task]:
        pids = reversed(self.by_pid) if reverse else iter(self.by_pid)
        for pid in pids:
            yield self.by_insertion[pid]

    def check(self) -> None:
        """
        Check that the three indices describe the same live set.

        Raises AssertionError on the first inconsistency found.
        """
        live = set(self.by_insertion)
        if set(self.by_pid) != live:
            raise AssertionError("identifier index disagrees with insertion index")
        if len(self.by_pid) != len(live):
            raise AssertionError("identifier index holds duplicates")
        if self.by_pid != sorted(self.by_pid):
            raise AssertionError("identifier index is out of order")

        bucketed: set[PID] = set()
        for priority, bucket in self.by_priority.items():
            if not bucket:
                raise AssertionError(f"empty bucket retained for {priority.name}")
            for pid, task in bucket.items():
                if task.priority is not priority:
                    raise AssertionError(f"{task} filed under {priority.name}")
                if self.by_insertion.get(pid) is not task:
                    raise AssertionError(f"{task} missing from insertion index")
            bucketed.update(bucket)
        if bucketed != live:
            raise AssertionError("priority index disagrees with insertion index")
