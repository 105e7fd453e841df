"""Task priority levels."""

from enum import Enum
from typing import Iterator


class Priority(Enum):
    """Priority levels, ordered by numeric rank."""
    LOW = 1
    MEDIUM = 10
    HIGH = 20

    @property
    def rank(self) -> int:
        return self.value

    @classmethod
    def ascending(cls) -> Iterator["Priority"]:
        """Yield every level, lowest rank first."""
        return iter(sorted(cls, key=lambda p: p.rank))

    @classmethod
    def descending(cls) -> Iterator["Priority"]:
        return iter(sorted(cls, key=lambda p: p.rank, reverse=True))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank
