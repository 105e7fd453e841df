"""Test helpers."""

from taskpool import Priority, SortCriteria, SortOrder, TaskRegistry

CAPACITY = 5

H, M, L = Priority.HIGH, Priority.MEDIUM, Priority.LOW


def fill(registry: TaskRegistry, *priorities: Priority) -> list:
    """Add one task per priority, returning whatever add() returned."""
    return [registry.add(p) for p in priorities]


def pid_values(
    registry: TaskRegistry,
    criterion: SortCriteria = SortCriteria.INSERTION,
    order: SortOrder = SortOrder.ASCENDING,
) -> list[int]:
    return [task.pid.value for task in registry.tasks(criterion, order)]
