"""Fake Time implementation for testing."""

from datetime import UTC, datetime

from edutech.core.time.abc import Time


class FakeTime(Time):
    """In-memory clock frozen at a constructor-provided instant.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, current_time: datetime | None = None) -> None:
        self._current_time = current_time or datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    def now(self) -> datetime:
        return self._current_time
