"""Interactive confirmation prompt backed by rich."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm


@dataclass(slots=True)
class RichConfirmationPrompt:
    console: Console = field(default_factory=Console)

    def __call__(self, message: str, *, default: bool = True) -> bool:
        return Confirm.ask(escape(message), default=default, console=self.console)
