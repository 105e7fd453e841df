"""
Fair reader-writer lock.

Waiters are admitted in arrival order: a writer queued behind readers waits
for them, and readers queued behind a writer wait for it. Consecutive readers
at the head of the queue are admitted together.

Re-entrancy rules:
  - a thread holding write may acquire write again, or acquire read
  - a thread holding read may acquire read again
  - a thread holding only read may NOT acquire write (raises RuntimeError)
"""

from collections import deque
from contextlib import contextmanager
from typing import Iterator
import threading


class FairRWLock:
    """FIFO-fair reader-writer lock with a re-entrant write side."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._waiting: deque[object] = deque()
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._write_depth = 0

    def acquire_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me or me in self._readers:
                self._readers[me] = self._readers.get(me, 0) + 1
                return

            ticket = object()
            self._waiting.append(ticket)
            try:
                while self._writer is not None or self._waiting[0] is not ticket:
                    self._cond.wait()
            except BaseException:
                self._waiting.remove(ticket)
                self._cond.notify_all()
                raise
            self._waiting.popleft()
            self._readers[me] = 1
            # The next waiter may be another reader that can share with us.
            self._cond.notify_all()

    def release_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            count = self._readers.get(me)
            if count is None:
                raise RuntimeError("release_read() called without holding the read lock")
            if count == 1:
                del self._readers[me]
                self._cond.notify_all()
            else:
                self._readers[me] = count - 1

    def acquire_write(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                self._write_depth += 1
                return
            if me in self._readers:
                raise RuntimeError("cannot upgrade a read lock to a write lock")

            ticket = object()
            self._waiting.append(ticket)
            try:
                while (
                    self._writer is not None
                    or self._readers
                    or self._waiting[0] is not ticket
                ):
                    self._cond.wait()
            except BaseException:
                self._waiting.remove(ticket)
                self._cond.notify_all()
                raise
            self._waiting.popleft()
            self._writer = me
            self._write_depth = 1

    def release_write(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer != me:
                raise RuntimeError("release_write() called without holding the write lock")
            self._write_depth -= 1
            if self._write_depth == 0:
                self._writer = None
                self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def write_held(self) -> bool:
        """True if the calling thread holds the write lock."""
        with self._cond:
            return self._writer == threading.get_ident()
