"""Bounded task registry."""

from .task import Task
from .indices import TaskIndices
from .base import TaskRegistry
from .spec import RegistrySpec

__all__ = [
    "Task",
    "TaskIndices",
    "TaskRegistry",
    "RegistrySpec",
]
