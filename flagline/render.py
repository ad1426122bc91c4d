# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich rendering of Flagline errors and command help.

`render_error` prints a failure as a panel titled with its error code. When the error
points into the input line (scan errors, duplicate parameters), the line is shown with
a caret under the offending character:

    ╭─ UnexpectedToken · unexpected token ─╮
    │ greet -v!                            │
    │         ^                            │
    │ Unexpected '!' at index 8.           │
    ╰──────────────────────────────────────╯

`render_help` prints a table of the registered commands with their usage.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from flagline.console import console as default_console
from flagline.exceptions import FlaglineError

if TYPE_CHECKING:
    from flagline.registry import CommandRegistry


def error_position(error: FlaglineError) -> int | None:
    """Index into the input line the error points at, if it has one."""
    return getattr(error, "position", None)


def build_error_panel(error: FlaglineError, text: str | None = None) -> Panel:
    parts: list[Text] = []
    position = error_position(error)
    if text is not None and position is not None:
        parts.append(Text(text))
        parts.append(Text(" " * min(position, len(text)) + "^", style="error.caret"))
    parts.append(Text(error.message))

    title = Text.assemble(
        (error.code.value, "error.code"), " · ", (error.title, "error.title")
    )
    return Panel(
        Group(*parts),
        title=title,
        title_align="left",
        expand=False,
        border_style="error.title",
    )


def render_error(
    error: FlaglineError, text: str | None = None, console: Console | None = None
) -> None:
    """
    Print `error` as a panel.

    Args:
        error (FlaglineError): The failure to show.
        text (str | None): The input line that failed, used to draw the caret.
        console (Console | None): Target console, the shared Flagline console by
            default.
    """
    (console or default_console).print(build_error_panel(error, text))


def build_help_table(registry: CommandRegistry) -> Table:
    table = Table(title="Commands", box=box.SIMPLE, show_header=True)
    table.add_column("Command", style="command", no_wrap=True)
    table.add_column("Usage")
    table.add_column("Description", style="muted")
    for command in sorted(registry, key=lambda command: command.name):
        table.add_row(command.name, Text(command.usage), command.description)
    return table


def render_help(registry: CommandRegistry, console: Console | None = None) -> None:
    """Print a table of every command in `registry`."""
    console = console or default_console
    if not len(registry):
        console.print("[hint]No commands registered.[/]")
        return
    console.print(build_help_table(registry))
