from edutech.core.prompter.abc import Prompter
from edutech.core.prompter.real import ClickPrompter

__all__ = ["ClickPrompter", "Prompter"]
