# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Prompt Toolkit validator that checks a whole command line against a
`CommandRegistry` while the user is typing.

A line is accepted if it evaluates: it scans, its command is registered and its
arguments bind. Blank lines and the shell's built-in words (`exit`, `help`, ...) pass
as well, unless a registered command of that name takes their place. Otherwise a
`ValidationError` carries the error message, with the cursor placed on the offending
character when the error knows one.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError, Validator

from flagline.exceptions import FlaglineError

if TYPE_CHECKING:
    from flagline.registry import CommandRegistry


class CommandLineValidator(Validator):
    """Reject input lines that fail evaluation against `registry`."""

    def __init__(
        self, registry: CommandRegistry, builtins: Iterable[str] = ()
    ) -> None:
        super().__init__()
        self.registry = registry
        self.builtins = frozenset(builtins)

    def is_builtin(self, text: str) -> bool:
        return text in self.builtins and text not in self.registry

    def validate(self, document: Document) -> None:
        text = document.text
        stripped = text.strip()
        if not stripped or self.is_builtin(stripped):
            return
        try:
            self.registry.evaluate(text)
        except FlaglineError as error:
            position = getattr(error, "position", len(text))
            raise ValidationError(
                cursor_position=min(position, len(text)),
                message=f"{error.code.value}: {error.message}",
            ) from error
