"""Port for interactive yes/no questions."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfirmationPrompt(Protocol):
    def __call__(self, message: str, *, default: bool = True) -> bool: ...


__all__ = ["ConfirmationPrompt"]
