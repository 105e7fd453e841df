"""
Ordered, read-only traversals over a registry's indices.

Views read the indices in place; the caller is responsible for holding the
registry's read lock for as long as the traversal runs.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Iterable, TYPE_CHECKING
from typing_extensions import override

from ..primitives.priority import Priority

if TYPE_CHECKING:
    from ..registry.indices import TaskIndices
    from ..registry.task import Task


Visitor = Callable[["Task"], object]


class SortCriteria(Enum):
    INSERTION = auto()  # Admission order
    PID = auto()        # Identifier order
    PRIORITY = auto()   # Priority buckets, admission order within a bucket


class SortOrder(Enum):
    ASCENDING = auto()
    DESCENDING = auto()


class UnsupportedOrdering(ValueError):
    """Raised for a criterion/order pair no view implements."""
    pass


class TasksView:
    """Base view. Subclass and implement list()."""

    def __init__(self, indices: TaskIndices, order: SortOrder):
        self._indices = indices
        self._order = order

    @property
    def descending(self) -> bool:
        return self._order is SortOrder.DESCENDING

    def list(self, visit: Visitor) -> None:
        raise NotImplementedError(f"{self.__class__.__name__}.list/1 not implemented")


class InsertionOrderView(TasksView):
    @override
    def list(self, visit: Visitor) -> None:
        tasks: Iterable[Task] = self._indices.by_insertion.values()
        if self.descending:
            tasks = list(tasks)[::-1]
        for task in tasks:
            visit(task)


class IdentifierView(TasksView):
    @override
    def list(self, visit: Visitor) -> None:
        for task in self._indices.iter_pid_order(reverse=self.descending):
            visit(task)


class PriorityView(TasksView):
    """
    Bucket order follows the requested direction; order inside a bucket is
    always admission order, oldest first.
    """

    @override
    def list(self, visit: Visitor) -> None:
        levels = Priority.descending() if self.descending else Priority.ascending()
        for level in levels:
            bucket = self._indices.by_priority.get(level)
            if not bucket:
                continue
            for task in bucket.values():
                visit(task)


_VIEWS: dict[SortCriteria, type[TasksView]] = {
    SortCriteria.INSERTION: InsertionOrderView,
    SortCriteria.PID: IdentifierView,
    SortCriteria.PRIORITY: PriorityView,
}


def view_for(indices: TaskIndices, criterion: SortCriteria, order: SortOrder) -> TasksView:
    """Pick the view for a (criterion, order) pair."""
    if not isinstance(order, SortOrder):
        raise UnsupportedOrdering(f"{order!r} is not a sort order")
    view_cls = _VIEWS.get(criterion) if isinstance(criterion, SortCriteria) else None
    if view_cls is None:
        raise UnsupportedOrdering(f"{criterion!r} not implemented")
    return view_cls(indices, order)
