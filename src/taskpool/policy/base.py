"""
Admission policies - decide what, if anything, to evict when a registry is full.

Policies:
  - Block: never evict; admission fails while the registry is full
  - FavorNew: evict the oldest task regardless of priority
  - FavorPriority: evict the oldest task of the lowest level strictly below
    the incoming task's priority; reject if there is none
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING
from typing_extensions import override

from ..primitives.priority import Priority

if TYPE_CHECKING:
    from ..registry.indices import TaskIndices
    from ..registry.task import Task


class Strategy(Enum):
    """Named admission strategies."""
    BLOCK = auto()           # Reject when full
    FAVOR_NEW = auto()       # Evict the oldest task
    FAVOR_PRIORITY = auto()  # Evict the oldest lower-priority task


class AdmissionPolicy:
    """
    Base policy. Subclass and implement select_victim().

    select_victim() is called with the registry's write lock held and must
    not mutate the indices; the registry performs the eviction itself.
    """

    def select_victim(self, indices: TaskIndices, incoming: Priority) -> Task | None:
        """Return the task to evict to make room for `incoming`, or None to reject."""
        raise NotImplementedError(f"{self.__class__.__name__}.select_victim/2 not implemented")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Block(AdmissionPolicy):
    @override
    def select_victim(self, indices: TaskIndices, incoming: Priority) -> Task | None:
        return None


class FavorNew(AdmissionPolicy):
    @override
    def select_victim(self, indices: TaskIndices, incoming: Priority) -> Task | None:
        return indices.oldest()


class FavorPriority(AdmissionPolicy):
    @override
    def select_victim(self, indices: TaskIndices, incoming: Priority) -> Task | None:
        for level in Priority.ascending():
            if level >= incoming:
                break
            victim = indices.oldest_at(level)
            if victim is not None:
                return victim
        return None


_POLICIES: dict[Strategy, type[AdmissionPolicy]] = {
    Strategy.BLOCK: Block,
    Strategy.FAVOR_NEW: FavorNew,
    Strategy.FAVOR_PRIORITY: FavorPriority,
}


def policy_for(strategy: Strategy) -> AdmissionPolicy:
    """Build the policy implementing a named strategy."""
    try:
        return _POLICIES[strategy]()
    except KeyError:
        raise ValueError(f"{strategy!r} is not a supported strategy") from None
