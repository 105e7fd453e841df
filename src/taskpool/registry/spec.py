"""Declarative registry configuration."""

from dataclasses import dataclass

from ..policy.base import Strategy
from ..primitives.pid import PIDAllocator
from .base import TaskRegistry


@dataclass(frozen=True)
class RegistrySpec:
    """
    Specification for building a TaskRegistry.

    Attributes:
        capacity: Maximum number of live tasks
        strategy: Admission strategy used once the registry is full
        pid_start: First PID handed out
        pid_limit: PIDs at or above this value are never issued
    """
    capacity: int
    strategy: Strategy = Strategy.BLOCK
    pid_start: int = 0
    pid_limit: int = 2**31 - 1

    def __post_init__(self):
        """Validate the registry spec."""
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise ValueError(f"capacity must be an int, got {self.capacity!r}")
        if self.capacity < 1:
            raise ValueError("capacity must be greater than 0")
        if not isinstance(self.strategy, Strategy):
            raise ValueError(f"{self.strategy!r} is not a Strategy")
        if self.pid_start < 0:
            raise ValueError(f"pid_start must be >= 0, got {self.pid_start}")
        if self.pid_limit <= self.pid_start:
            raise ValueError("pid_limit must be greater than pid_start")

    def build(self) -> TaskRegistry:
        allocator = PIDAllocator(start=self.pid_start, limit=self.pid_limit)
        return TaskRegistry.with_strategy(self.strategy, self.capacity, allocator=allocator)
