# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the `CommandSchema` class for Flagline.

A CommandSchema names a command, references the action that runs it, and declares
its parameters in positional order. It owns binding: given the `ArgumentSet` parsed
from one line of input, `bind()` returns the ordered, typed argument vector for the
action.

Invariants:
- Parameter positions are exactly `0..n-1`, with no gaps or repeats.
- An alias name belongs to one parameter only.
- Parameters may be added while the schema is being configured. Once it has been
  used for binding it is sealed and further changes raise `SchemaSealedError`.
"""
from __future__ import annotations

from typing import Any, Callable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from flagline.exceptions import (
    InvalidCommandNameError,
    InvalidParameterError,
    SchemaSealedError,
)
from flagline.logger import logger
from flagline.parameter import Parameter, parse_alias
from flagline.parser.arguments import ArgumentSet
from flagline.parser.binder import bind
from flagline.parser.parser_types import ArgumentKind, DataType, is_name_character


def is_valid_command_name(name: str) -> bool:
    return bool(name) and not name.startswith("-") and all(map(is_name_character, name))


def to_parameter(spec: Parameter | dict[str, Any] | str, position: int) -> Parameter:
    """Build a Parameter at `position` from a compact spec, a dict, or a Parameter."""
    if isinstance(spec, Parameter):
        return spec
    if isinstance(spec, str):
        return Parameter.from_spec(spec, position)
    if isinstance(spec, dict):
        return Parameter.model_validate({"position": position, **spec})
    raise InvalidParameterError(
        f"Cannot build a parameter from {type(spec).__name__}: {spec!r}"
    )


class CommandSchema(BaseModel):
    """
    Declaration of a command: its name, action and ordered parameters.

    Attributes:
        name (str): Name typed as the first word of an input line.
        action (Callable | None): What the caller runs with the bound values.
        parameters (list[Parameter]): Parameters sorted by position.
        description (str): Short description for help output.
        help_text (str): Longer help text.
    """

    name: str
    action: Callable[..., Any] | None = None
    parameters: list[Parameter] = Field(default_factory=list)
    description: str = ""
    help_text: str = ""

    _sealed: bool = PrivateAttr(default=False)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, name: str) -> str:
        if not is_valid_command_name(name):
            raise InvalidCommandNameError(name)
        return name

    @field_validator("parameters", mode="before")
    @classmethod
    def build_parameters(cls, parameters: Any) -> list[Parameter]:
        if parameters is None:
            return []
        return [to_parameter(spec, index) for index, spec in enumerate(parameters)]

    @model_validator(mode="after")
    def check_parameters(self) -> CommandSchema:
        self.parameters.sort(key=lambda parameter: parameter.position)
        positions = [parameter.position for parameter in self.parameters]
        if positions != list(range(len(self.parameters))):
            raise InvalidParameterError(
                f"Parameter positions of '{self.name}' must be 0..{len(positions) - 1} "
                f"without gaps or repeats, got {positions}."
            )
        owners: dict[str, int] = {}
        for parameter in self.parameters:
            for alias in parameter.aliases:
                if alias in owners:
                    raise InvalidParameterError(
                        f"Alias '{alias}' of '{self.name}' is declared by parameters "
                        f"{owners[alias]} and {parameter.position}."
                    )
                owners[alias] = parameter.position
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Freeze the parameter list. Called on first bind."""
        if not self._sealed:
            self._sealed = True
            for parameter in self.parameters:
                parameter.seal()
            logger.debug("[Command:%s] Schema sealed.", self.name)

    def _ensure_mutable(self) -> None:
        if self._sealed:
            raise SchemaSealedError(self.name)

    def get_parameter(self, alias: str) -> Parameter | None:
        """Return the parameter owning `alias` (given bare, or as `-f`/`--name`)."""
        name = alias.lstrip("-")
        return next(
            (parameter for parameter in self.parameters if name in parameter.aliases),
            None,
        )

    def add_parameter(self, spec: Parameter | dict[str, Any] | str) -> Parameter:
        """
        Append a parameter at the next position.

        Args:
            spec: A compact spec (`"--count=number,1"`, `"-v"`), a dict of Parameter
                fields, or a Parameter.

        Returns:
            Parameter: The appended parameter.

        Raises:
            SchemaSealedError: If the schema has already been used for binding.
            InvalidParameterError: If the spec is malformed or an alias is taken.
        """
        self._ensure_mutable()
        parameter = to_parameter(spec, len(self.parameters))
        if parameter.position != len(self.parameters):
            parameter = parameter.model_copy(
                update={"position": len(self.parameters)}, deep=True
            )
        for alias in parameter.aliases:
            if self.get_parameter(alias):
                raise InvalidParameterError(
                    f"Alias '{alias}' is already used by command '{self.name}'."
                )
        self.parameters.append(parameter)
        logger.debug("[Command:%s] Added %s", self.name, parameter)
        return parameter

    def add_alias(self, alias: str, position: int) -> None:
        """
        Add an alias (`--name` or `-n`) to the parameter at `position`.

        Raises:
            SchemaSealedError: If the schema has already been used for binding.
            InvalidParameterError: If the position is out of range, the alias is
                malformed, or it is already used.
        """
        self._ensure_mutable()
        if not 0 <= position < len(self.parameters):
            raise InvalidParameterError(f"Parameter index {position} out of range.")
        name, kind = parse_alias(alias)
        if self.get_parameter(name):
            raise InvalidParameterError(
                f"Alias '{alias}' is already used by command '{self.name}'."
            )
        self.parameters[position].add_alias(name, kind)

    def bind(self, argument_set: ArgumentSet) -> list[Any]:
        """Bind parsed arguments to this command. See `flagline.parser.binder.bind`."""
        return bind(self, argument_set)

    @property
    def usage(self) -> str:
        """One-line usage string, e.g. `greet --name=TEXT [-v]`."""
        parts = [self.name]
        for parameter in self.parameters:
            alias = parameter.primary_alias
            kind = parameter.kind_of(alias)
            text = parameter.format_alias(alias)
            absent = parameter.data_type is DataType.ABSENT
            if kind is ArgumentKind.VARIABLE and not absent:
                text = f"{text}={parameter.data_type.value.upper()}"
            if parameter.default is not None or absent:
                text = f"[{text}]"
            parts.append(text)
        return " ".join(parts)

    def to_definition(self) -> dict[str, Any]:
        """Export the command as a plain dict. The action is given by dotted path."""
        action = None
        if self.action is not None:
            module = getattr(self.action, "__module__", None)
            qualname = getattr(self.action, "__qualname__", None)
            action = f"{module}.{qualname}" if module and qualname else repr(self.action)
        return {
            "name": self.name,
            "description": self.description,
            "help_text": self.help_text,
            "action": action,
            "parameters": [parameter.to_definition() for parameter in self.parameters],
        }

    def __str__(self) -> str:
        action = getattr(self.action, "__name__", self.action)
        return (
            f"CommandSchema(name='{self.name}', parameters={len(self.parameters)}, "
            f"action={action})"
        )
