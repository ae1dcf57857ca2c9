"""Fake UserFeedback that records messages for test assertions."""

from edutech.core.user_feedback.abc import UserFeedback


class FakeUserFeedback(UserFeedback):
    """In-memory feedback sink.

    Every message is appended to `messages` as a (level, text) tuple.
    """

    def __init__(self) -> None:
        self._messages: list[tuple[str, str]] = []

    @property
    def messages(self) -> list[tuple[str, str]]:
        """All recorded messages in order. For test assertions only."""
        return list(self._messages)

    def texts(self, level: str) -> list[str]:
        """Return the recorded texts for a single level."""
        return [text for lvl, text in self._messages if lvl == level]

    def info(self, message: str) -> None:
        self._messages.append(("info", message))

    def success(self, message: str) -> None:
        self._messages.append(("success", message))

    def warning(self, message: str) -> None:
        self._messages.append(("warning", message))

    def error(self, message: str) -> None:
        self._messages.append(("error", message))
