"""Clock abstraction for testing.

Cache freshness, backup names and metadata timestamps all read the wall
clock through this interface so tests can pin it.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract clock operations for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...
