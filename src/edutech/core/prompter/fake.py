"""Fake Prompter replaying scripted answers."""

from edutech.core.prompter.abc import Prompter


class FakePrompter(Prompter):
    """Prompter that answers from constructor-provided queues.

    When a queue runs dry, confirm() falls back to the question's default and
    prompt() returns an empty string.

    Examples:
        >>> prompter = FakePrompter(confirm_answers=[True, False])
        >>> prompter.confirm("Remove?", default=False)
        True
    """

    def __init__(
        self,
        *,
        confirm_answers: list[bool] | None = None,
        prompt_answers: list[str] | None = None,
    ) -> None:
        self._confirm_answers = list(confirm_answers or [])
        self._prompt_answers = list(prompt_answers or [])
        self._confirm_calls: list[tuple[str, bool]] = []
        self._prompt_calls: list[str] = []

    @property
    def confirm_calls(self) -> list[tuple[str, bool]]:
        """(question, default) pairs in the order asked. For test assertions only."""
        return list(self._confirm_calls)

    @property
    def prompt_calls(self) -> list[str]:
        return list(self._prompt_calls)

    def confirm(self, question: str, *, default: bool) -> bool:
        self._confirm_calls.append((question, default))
        if self._confirm_answers:
            return self._confirm_answers.pop(0)
        return default

    def prompt(self, question: str) -> str:
        self._prompt_calls.append(question)
        if self._prompt_answers:
            return self._prompt_answers.pop(0)
        return ""
