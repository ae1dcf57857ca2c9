import click

from edutech.core.prompter.abc import Prompter


class ClickPrompter(Prompter):
    """Production prompter backed by click's terminal prompts."""

    def confirm(self, question: str, *, default: bool) -> bool:
        return click.confirm(question, default=default, err=True)

    def prompt(self, question: str) -> str:
        return click.prompt(question, type=str, err=True)
