"""Confirmation prompt port."""

from typing import Protocol


class ConfirmationPrompt(Protocol):
    """Port for asking the operator a yes/no question."""

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a question and return the answer."""
        ...
