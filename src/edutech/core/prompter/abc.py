"""Interactive confirmation abstraction.

Destructive operations ask the operator before proceeding. Routing those
questions through this interface keeps the lifecycle decision logic
testable without a terminal.
"""

from abc import ABC, abstractmethod


class Prompter(ABC):
    @abstractmethod
    def confirm(self, question: str, *, default: bool) -> bool:
        """Ask a yes/no question; an empty answer selects `default`."""
        ...

    @abstractmethod
    def prompt(self, question: str) -> str:
        """Ask for a free-form answer."""
        ...
