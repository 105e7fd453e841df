"""Process identifiers and the allocator that hands them out."""

from dataclasses import dataclass
import threading


class PoolExhausted(Exception):
    """Raised when the allocator has no identifiers left to hand out."""
    pass


@dataclass(frozen=True, order=True, slots=True)
class PID:
    """Process identifier. Totally ordered, hashable, immutable."""
    value: int

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"PID({self.value})"


class PIDAllocator:
    """
    Issues strictly increasing PIDs.

    Released identifiers are never handed out again; the allocator raises
    PoolExhausted instead of wrapping once `limit` is reached.
    """

    def __init__(self, start: int = 0, limit: int = 2**31 - 1):
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        if limit <= start:
            raise ValueError(f"limit must be greater than start ({start}), got {limit}")
        self._next = start
        self._limit = limit
        self._lock = threading.Lock()

    @property
    def issued(self) -> int:
        """The value the next acquire() will return."""
        with self._lock:
            return self._next

    def acquire(self) -> PID:
        with self._lock:
            if self._next >= self._limit:
                raise PoolExhausted(f"no PIDs left below {self._limit}")
            pid = PID(self._next)
            self._next += 1
            return pid

    def release(self, pid: PID) -> None:
        """Accept a freed PID. Identifiers are not recycled, so this does nothing."""
        return None
