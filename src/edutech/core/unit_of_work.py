"""Undo log for multi-step filesystem operations."""

import logging
from collections.abc import Callable
from types import TracebackType

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Collects undo actions and runs them in reverse if the block fails.

    Usage:
        with UnitOfWork() as uow:
            create_directory(target)
            uow.on_rollback("remove partial portal", lambda: remove_tree(target))
            write_metadata(target, ...)
            uow.commit()

    Leaving the block without commit(), normally or by exception, triggers
    rollback. Exceptions are never suppressed. A failing undo action is
    logged and the remaining actions still run.
    """

    def __init__(self) -> None:
        self._undo: list[tuple[str, Callable[[], None]]] = []
        self._committed = False
        self._rollback_failures: list[str] = []

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rollback_failures(self) -> list[str]:
        """Undo actions that failed during rollback, oldest failure first."""
        return list(self._rollback_failures)

    def on_rollback(self, description: str, action: Callable[[], None]) -> None:
        self._undo.append((description, action))

    def commit(self) -> None:
        self._committed = True
        self._undo.clear()

    def rollback(self) -> list[str]:
        """Run pending undo actions newest-first.

        Returns:
            Descriptions of undo actions that themselves failed
        """
        failures = []
        while self._undo:
            description, action = self._undo.pop()
            logger.debug("Rolling back: %s", description)
            try:
                action()
            except OSError as e:
                logger.warning("Rollback step %r failed: %s", description, e)
                failures.append(description)
        self._rollback_failures.extend(failures)
        return failures

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if not self._committed:
            self.rollback()
