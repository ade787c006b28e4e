"""Console adapters."""

from bikeshare_sync.adapters.console.confirmation_prompt import (
    AutoConfirmationPrompt,
    ConsoleConfirmationPrompt,
)

__all__ = ["AutoConfirmationPrompt", "ConsoleConfirmationPrompt"]
