# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
A minimal interactive loop over a `CommandRegistry`.

Each line is validated and completed while typing, then executed. Results that are
not None are printed, evaluation errors are rendered as panels, and the loop ends on
`exit`, `quit`, Ctrl-C or Ctrl-D. `help` prints the command table. These built-ins
give way to registered commands of the same name.
"""
from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.shortcuts import CompleteStyle

from flagline.completer import FlaglineCompleter
from flagline.console import console
from flagline.exceptions import FlaglineError
from flagline.logger import logger
from flagline.registry import CommandRegistry
from flagline.render import render_error, render_help
from flagline.themes import OneColors
from flagline.validators import CommandLineValidator

EXIT_WORDS = frozenset({"exit", "quit"})
HELP_WORDS = frozenset({"help"})


def build_session(registry: CommandRegistry, prompt: str = "flagline > ") -> PromptSession:
    return PromptSession(
        message=prompt,
        multiline=False,
        completer=FlaglineCompleter(registry),
        complete_style=CompleteStyle.COLUMN,
        validator=CommandLineValidator(registry, EXIT_WORDS | HELP_WORDS),
        validate_while_typing=False,
    )


async def process_line(registry: CommandRegistry, line: str) -> bool:
    """
    Run one line of input. Returns False when the shell should stop.
    """
    text = line.strip()
    if not text:
        return True
    if text in EXIT_WORDS and text not in registry:
        return False
    if text in HELP_WORDS and text not in registry:
        render_help(registry)
        return True

    try:
        result = await registry.execute(line)
    except FlaglineError as error:
        render_error(error, line)
        return True
    except Exception as error:
        logger.exception("Action for %r raised.", line)
        console.print(f"[{OneColors.DARK_RED}]❌ Error: {error}[/]")
        return True

    if result is not None:
        console.print(result)
    return True


async def run_shell(
    registry: CommandRegistry,
    prompt: str = "flagline > ",
    session: PromptSession | None = None,
) -> None:
    """
    Prompt for lines and execute them until the user exits.

    Args:
        registry (CommandRegistry): Commands available in the shell.
        prompt (str): Prompt message.
        session (PromptSession | None): Session to read from, built from the
            registry when omitted.
    """
    session = session or build_session(registry, prompt)
    while True:
        try:
            line = await session.prompt_async()
        except (EOFError, KeyboardInterrupt):
            logger.info("EOF or KeyboardInterrupt. Exiting shell.")
            break
        if not await process_line(registry, line):
            break
