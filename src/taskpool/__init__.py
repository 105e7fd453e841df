"""Bounded, concurrently accessible task registry with pluggable eviction."""

from .primitives.pid import PID, PIDAllocator, PoolExhausted
from .primitives.priority import Priority
from .primitives.rwlock import FairRWLock
from .registry.task import Task
from .registry.indices import TaskIndices
from .registry.base import TaskRegistry
from .registry.spec import RegistrySpec
from .policy.base import AdmissionPolicy, Block, FavorNew, FavorPriority, Strategy, policy_for
from .views.base import SortCriteria, SortOrder, TasksView, UnsupportedOrdering, view_for
from .aio import AsyncTaskRegistry

__all__ = [
    # Core primitives
    "PID",
    "PIDAllocator",
    "PoolExhausted",
    "Priority",
    "FairRWLock",
    # Registry
    "Task",
    "TaskIndices",
    "TaskRegistry",
    "RegistrySpec",
    # Admission
    "AdmissionPolicy",
    "Block",
    "FavorNew",
    "FavorPriority",
    "Strategy",
    "policy_for",
    # Views
    "SortCriteria",
    "SortOrder",
    "TasksView",
    "UnsupportedOrdering",
    "view_for",
    # Async
    "AsyncTaskRegistry",
]
