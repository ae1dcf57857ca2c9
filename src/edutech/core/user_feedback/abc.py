"""User-facing diagnostic output with mode awareness."""

from abc import ABC, abstractmethod


class UserFeedback(ABC):
    """Provides user-facing progress output that's mode-aware.

    Lifecycle operations report progress through ctx.feedback instead of
    printing directly, so `--quiet` can silence chatter without threading a
    flag through every function signature.

    Mode behavior:
        Interactive mode:
            - info() → stderr
            - success() → stderr, green
            - warning() → stderr, yellow
            - error() → stderr, red

        Quiet mode:
            - info(), success() → suppressed
            - warning(), error() → still shown
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message (suppressed in quiet mode)."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message (suppressed in quiet mode)."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Show a non-fatal problem (always shown)."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message (always shown)."""
