"""Confirmation prompts for interactive and unattended runs."""

import logging
import sys
from typing import TextIO

from bikeshare_sync.domain.ports.confirmation_prompt import ConfirmationPrompt

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}
_NO = {"n", "no"}


class ConsoleConfirmationPrompt(ConfirmationPrompt):
    """Asks a yes/no question on the terminal."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def confirm(self, message: str, default: bool = False) -> bool:
        hint = "(Y/n)" if default else "(y/N)"
        self._stdout.write(f"{message} {hint} ")
        self._stdout.flush()

        answer = self._stdin.readline()
        if not answer:
            logger.debug("No input available; using default answer")
            return default

        answer = answer.strip().lower()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        return default


class AutoConfirmationPrompt(ConfirmationPrompt):
    """Answers every question with a fixed value (--yes / --no-tasks)."""

    def __init__(self, answer: bool) -> None:
        self._answer = answer

    def confirm(self, message: str, default: bool = False) -> bool:
        logger.info(f"{message} -> {'yes' if self._answer else 'no'} (non-interactive)")
        return self._answer
