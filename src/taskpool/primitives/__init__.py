"""Core primitives: identifiers, priorities, locking."""

from .pid import PID, PIDAllocator, PoolExhausted
from .priority import Priority
from .rwlock import FairRWLock

__all__ = [
    "PID",
    "PIDAllocator",
    "PoolExhausted",
    "Priority",
    "FairRWLock",
]
