# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `CommandRegistry`, the name → `CommandSchema` table a host populates at
startup and evaluates input lines against.

Evaluation is `scan → build → lookup → bind`:

    registry = CommandRegistry()
    registry.define_command("greet", greet, "--name", "-v")

    registry.evaluate('greet --name="Ada Lovelace" -v')
    # ['Ada Lovelace', True]

    await registry.execute('greet --name="Ada Lovelace" -v')
    # greet('Ada Lovelace', True)

Registries are plain objects, so tests and hosts can keep several independent ones.
The table is guarded by a lock, which lets registration and evaluation interleave
across threads. A command schema is sealed the first time it is bound.

Public Interface:
- define_command(name, action, *parameter_specs): Register from compact specs.
- add_command(command) / add_commands(commands): Register ready-made schemas.
- get_command(name) / lookup(name): Find a schema (lookup raises if missing).
- parse(text): Scan and build an ArgumentSet without binding.
- evaluate(text): Return the typed argument vector for a line.
- execute(text): Evaluate and await the command's action with the vector.
"""
from __future__ import annotations

from threading import Lock
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from flagline.command import CommandSchema
from flagline.exceptions import (
    DuplicateCommandNameError,
    FlaglineError,
    InvalidActionError,
    UnknownCommandError,
)
from flagline.logger import logger
from flagline.parameter import Parameter
from flagline.parser.arguments import ArgumentSet, build
from flagline.parser.scanner import scan
from flagline.utils import ensure_async


class CommandRegistry:
    """
    Table of command schemas keyed by name.

    Args:
        commands (list[CommandSchema | dict] | None): Commands registered up front.
    """

    def __init__(self, commands: list[CommandSchema | dict[str, Any]] | None = None):
        self._commands: dict[str, CommandSchema] = {}
        self._lock = Lock()
        if commands:
            self.add_commands(commands)

    def define_command(
        self,
        name: str,
        action: Callable[..., Any] | None,
        *parameter_specs: Parameter | dict[str, Any] | str,
        description: str = "",
        help_text: str = "",
    ) -> CommandSchema:
        """
        Define and register a command.

        Args:
            name (str): The command name.
            action (Callable | None): Callable receiving the bound values.
            *parameter_specs: Compact specs (`"--name"`, `"--count=number,1"`,
                `"-v"`), Parameter dicts, or Parameters, in positional order.
            description (str): Short description for help output.
            help_text (str): Longer help text.

        Returns:
            CommandSchema: The registered command.

        Raises:
            DuplicateCommandNameError: If the name is taken.
            RegistrationError: If a parameter spec is invalid.
        """
        command = CommandSchema(
            name=name,
            action=action,
            parameters=list(parameter_specs),
            description=description,
            help_text=help_text,
        )
        self.add_command(command)
        return command

    def add_command(self, command: CommandSchema) -> None:
        """Register an existing CommandSchema, rejecting duplicate names."""
        if not isinstance(command, CommandSchema):
            raise TypeError("command must be an instance of CommandSchema.")
        with self._lock:
            if command.name in self._commands:
                raise DuplicateCommandNameError(command.name)
            self._commands[command.name] = command
        logger.debug("Registered %s", command)

    def add_commands(self, commands: list[CommandSchema | dict[str, Any]]) -> None:
        """Register a list of CommandSchema instances or dicts of schema fields."""
        for command in commands:
            if isinstance(command, dict):
                command = CommandSchema.model_validate(command)
            self.add_command(command)

    def get_command(self, name: str) -> CommandSchema | None:
        with self._lock:
            return self._commands.get(name)

    def lookup(self, name: str) -> CommandSchema:
        """
        Return the command registered under `name`.

        Raises:
            UnknownCommandError: If there is none.
        """
        command = self.get_command(name)
        if command is None:
            logger.info("Unknown command '%s'.", name)
            raise UnknownCommandError(name)
        return command

    @property
    def commands(self) -> Mapping[str, CommandSchema]:
        """Read-only snapshot of the registered commands."""
        with self._lock:
            return MappingProxyType(dict(self._commands))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._commands

    def __iter__(self) -> Iterator[CommandSchema]:
        return iter(self.commands.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    def parse(self, text: str) -> ArgumentSet:
        """Scan and build `text` into an ArgumentSet, without any schema checks."""
        return build(scan(text))

    def resolve(self, text: str) -> tuple[CommandSchema, list[Any]]:
        """
        Evaluate `text` and also return the command it was bound to.

        Raises:
            FlaglineError: Any scan, build, lookup or bind error.
        """
        try:
            argument_set = self.parse(text)
            command = self.lookup(argument_set.command)
            return command, command.bind(argument_set)
        except FlaglineError as error:
            logger.debug("Evaluation of %r failed: [%s] %s", text, error.code.value, error)
            raise

    def evaluate(self, text: str) -> list[Any]:
        """
        Turn one line of input into the ordered, typed argument vector of its command.

        Args:
            text (str): The input line, e.g. `greet --name="Ada" -v`.

        Returns:
            list[Any]: One value per parameter of the command, in position order.

        Raises:
            ScanError | BuildError: If the line is malformed.
            UnknownCommandError: If the command name is not registered.
            BindError: If the arguments do not fit the command's parameters.
        """
        _, values = self.resolve(text)
        return values

    async def execute(self, text: str) -> Any:
        """
        Evaluate `text` and await its command's action with the bound values.

        Synchronous actions are wrapped so both kinds can be awaited.

        Raises:
            FlaglineError: If evaluation fails.
            InvalidActionError: If the command has no action.
        """
        command, values = self.resolve(text)
        if command.action is None:
            raise InvalidActionError(f"No action defined for '{command.name}'.")
        action = ensure_async(command.action)
        logger.info("[Command:%s] Executing with %d arguments.", command.name, len(values))
        try:
            return await action(*values)
        except Exception as error:
            logger.warning("[Command:%s] Action failed: %s", command.name, error)
            raise

    def __str__(self) -> str:
        return f"CommandRegistry(commands={len(self)})"


def evaluate(registry: CommandRegistry, text: str) -> list[Any]:
    """Evaluate `text` against `registry`. See `CommandRegistry.evaluate`."""
    return registry.evaluate(text)
