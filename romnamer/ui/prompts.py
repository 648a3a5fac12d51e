"""
Interactive confirmation prompts

The workflow asks a ConfirmationProvider before touching any file.
PromptSystem reads the answer from the terminal; StaticConfirmation
returns a fixed answer for tests and unattended runs.
"""

import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class ConfirmationProvider(Protocol):
    """Anything that can answer a yes/no question."""

    def confirm(self, message: str) -> bool:
        ...


class PromptSystem:
    """
    Terminal yes/no prompt

    Only 'y', 'yes', 'n' and 'no' (any case) are accepted. Anything else,
    including an empty line, is rejected and the question is asked again.

    Example:
        prompts = PromptSystem()
        if prompts.confirm("Apply 12 renames?"):
            apply_plan(plan.items)
    """

    def __init__(
        self,
        input_func: Optional[Callable[[str], str]] = None,
        output_func: Optional[Callable[[str], None]] = None
    ):
        self._input = input_func
        self._output = output_func or print

    def confirm(self, message: str) -> bool:
        """
        Yes/no confirmation prompt

        Args:
            message: Prompt message

        Returns:
            True for yes, False for no (or if input is interrupted)
        """
        prompt_str = f"{message} [y/n]: "

        while True:
            try:
                read = self._input or input
                response = read(prompt_str).strip().lower()
            except (KeyboardInterrupt, EOFError):
                logger.info("User interrupted prompt")
                self._output("\nOperation cancelled")
                return False

            if response in ('y', 'yes'):
                logger.debug(f"User confirmed: {message}")
                return True
            elif response in ('n', 'no'):
                logger.debug(f"User declined: {message}")
                return False
            else:
                self._output("Please enter 'y' or 'n'")


class StaticConfirmation:
    """Confirmation provider that always gives the same answer."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.asked: list = []

    def confirm(self, message: str) -> bool:
        self.asked.append(message)
        return self.answer


def confirm(message: str, provider: Optional[ConfirmationProvider] = None) -> bool:
    """Ask a yes/no question using provider (default: terminal prompt)."""
    return (provider or PromptSystem()).confirm(message)
