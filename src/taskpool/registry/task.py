"""Task value handed out by a TaskRegistry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, TYPE_CHECKING
import weakref

from ..primitives.pid import PID
from ..primitives.priority import Priority

if TYPE_CHECKING:
    from .base import TaskRegistry


TerminateHook = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Task:
    """
    A live unit of work admitted by a registry.

    Attributes:
        pid: Identifier assigned at admission
        priority: Priority level the task was admitted with

    The registry back-reference is weak: the registry owns its tasks, not the
    other way round. Equality only looks at (pid, priority).
    """
    pid: PID
    priority: Priority
    _registry: weakref.ref[TaskRegistry] | None = field(default=None, compare=False, repr=False)
    _on_terminate: TerminateHook | None = field(default=None, compare=False, repr=False)

    @property
    def registry(self) -> TaskRegistry | None:
        """The owning registry, or None if it has been garbage collected."""
        if self._registry is None:
            return None
        return self._registry()

    def kill(self) -> None:
        """Ask the owning registry to kill this task. Safe to call repeatedly."""
        registry = self.registry
        if registry is not None:
            registry.kill(self)

    def terminate(self) -> None:
        """Run the termination side effect. Called by the registry on kill."""
        if self._on_terminate is not None:
            self._on_terminate()
