"""Terminal prompts backed by questionary."""

from __future__ import annotations

from typing import Callable, Sequence

import questionary
from rich.console import Console


def parse_whole_number(answer: str) -> int | None:
    """Parse plain ASCII digits; anything else (signs, Unicode digits) is None."""
    answer = answer.strip()
    if not (answer.isascii() and answer.isdigit()):
        return None
    return int(answer)


def integer_validator(minimum: int, maximum: int) -> Callable[[str], bool | str]:
    """Build a questionary validator accepting whole numbers in range."""

    def validate(answer: str) -> bool | str:
        number = parse_whole_number(answer)
        if number is None:
            return "Please enter a whole number."
        if not minimum <= number <= maximum:
            return f"Please enter a number between {minimum} and {maximum}."
        return True

    return validate


class QuestionaryPrompter:
    """Prompter port implementation for interactive terminals."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def select(self, message: str, choices: Sequence[str], default: int = 0) -> int | None:
        options = [questionary.Choice(title, value=index) for index, title in enumerate(choices)]
        initial = options[default] if 0 <= default < len(options) else None
        return questionary.select(message, choices=options, default=initial).ask()

    def confirm(self, message: str, default: bool) -> bool | None:
        return questionary.confirm(message, default=default).ask()

    def integer(
        self, message: str, minimum: int, maximum: int, default: int | None = None
    ) -> int | None:
        answer = questionary.text(
            f"{message} ({minimum}-{maximum})",
            default="" if default is None else str(default),
            validate=integer_validator(minimum, maximum),
        ).ask()
        if answer is None:
            return None
        return parse_whole_number(answer)

    def text(self, message: str, default: str | None = None) -> str | None:
        return questionary.text(message, default=default or "").ask()

    def show(self, message: str) -> None:
        self._console.print(message, style="dim", markup=False)
