# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `FlaglineCompleter`, a Prompt Toolkit completer for command lines evaluated
by a `CommandRegistry`.

It suggests:
- registered command names while the first word is being typed,
- the aliases (`--name`, `-n`) of the typed command's parameters that have not been
  supplied yet, once the command name is complete.

Values are never completed.
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:
    from flagline.command import CommandSchema
    from flagline.registry import CommandRegistry


def supplied_names(words: list[str]) -> set[str]:
    """Collect the flag and variable names already present in `words`."""
    names: set[str] = set()
    for word in words:
        if word.startswith("--"):
            names.add(word[2:].partition("=")[0])
        elif word.startswith("-"):
            names.update(word[1:])
    return names


class FlaglineCompleter(Completer):
    """
    Prompt Toolkit completer for Flagline command input.

    Args:
        registry (CommandRegistry): Registry providing command names and parameters.
    """

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        words = text.split()
        cursor_at_end_of_word = not text or text[-1].isspace()

        if not words or (len(words) == 1 and not cursor_at_end_of_word):
            stub = words[0] if words else ""
            yield from self._yield_lcp_completions(self._suggest_commands(), stub)
            return

        command = self.registry.get_command(words[0])
        if command is None:
            return

        stub = "" if cursor_at_end_of_word else words[-1]
        if stub and (not stub.startswith("-") or "=" in stub):
            return
        typed = words[1:] if cursor_at_end_of_word else words[1:-1]
        suggestions = self._suggest_aliases(command, supplied_names(typed))
        yield from self._yield_lcp_completions(suggestions, stub)

    def _suggest_commands(self) -> list[str]:
        return sorted(self.registry.commands)

    def _suggest_aliases(self, command: CommandSchema, used: set[str]) -> list[str]:
        """Aliases of every parameter none of whose aliases has been supplied."""
        suggestions = []
        for parameter in command.parameters:
            if used.intersection(parameter.aliases):
                continue
            suggestions.extend(parameter.format_alias(alias) for alias in parameter.aliases)
        return suggestions

    def _yield_lcp_completions(
        self, suggestions: list[str], stub: str
    ) -> Iterable[Completion]:
        """
        Yield completions for `stub` using longest-common-prefix logic.

        - One match: yield it fully.
        - Several matches sharing a prefix longer than the stub: insert the prefix,
          and also list every match in the menu.
        - Otherwise: list every match.
        """
        matches = [suggestion for suggestion in suggestions if suggestion.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(matches[0], start_position=-len(stub), display=matches[0])
            return
        if len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
        for match in matches:
            yield Completion(match, start_position=-len(stub), display=match)
