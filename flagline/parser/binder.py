# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Binds an `ArgumentSet` to a command's declared parameters.

For every parameter, in increasing position, the binder:
1. finds which of the parameter's aliases were supplied (two or more is ambiguous),
2. checks the supplied kind (flag or variable) against the alias's declared kind,
3. checks a variable's value against the pattern, then the range for numbers,
4. falls back to the declared default when nothing (or a bare variable) was given,
5. converts the raw text to the parameter's data type.

The result is a list with exactly one value per parameter, `values[i]` belonging to
the parameter at position `i`. Any failure raises a `BindError` and no partial list
is returned. Supplied names that match no parameter are ignored.

Binding seals the command schema: parameters can no longer be added to it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flagline.exceptions import (
    AmbiguousArgumentError,
    FormatMismatchError,
    MissingDefaultError,
    RangeMismatchError,
    TypeMismatchError,
)
from flagline.logger import logger
from flagline.parser.arguments import ArgumentSet
from flagline.parser.parser_types import ArgumentKind, DataType

if TYPE_CHECKING:
    from flagline.command import CommandSchema
    from flagline.parameter import Parameter


def _resolve_default(parameter: Parameter, alias: str) -> Any:
    if parameter.default is None:
        if parameter.data_type is DataType.ABSENT:
            return None
        raise MissingDefaultError(alias)
    return parameter.convert(parameter.default)


def bind_parameter(parameter: Parameter, argument_set: ArgumentSet) -> Any:
    """
    Resolve the typed value of one parameter from the supplied arguments.

    Raises:
        AmbiguousArgumentError: If two aliases of the parameter were supplied.
        TypeMismatchError: If an alias was supplied with the wrong kind.
        FormatMismatchError: If a value fails the parameter's pattern.
        RangeMismatchError: If a number falls outside the parameter's range.
        MissingDefaultError: If no value was supplied and no default exists.
        ConversionError: If the value cannot be converted to the data type.
    """
    matched = [alias for alias in parameter.aliases if alias in argument_set]
    if not matched:
        primary = parameter.format_alias(parameter.primary_alias)
        return _resolve_default(parameter, primary)
    if len(matched) > 1:
        raise AmbiguousArgumentError(
            parameter.format_alias(matched[0]), parameter.format_alias(matched[1])
        )

    alias = matched[0]
    entry = argument_set.index[alias]
    expected = parameter.kind_of(alias)
    if entry.kind is not expected:
        raise TypeMismatchError(parameter.format_alias(alias), expected, entry.kind)

    if entry.kind is ArgumentKind.FLAG:
        if entry.value is not None:
            raise TypeMismatchError(
                parameter.format_alias(alias), expected, ArgumentKind.VARIABLE
            )
        return parameter.convert("true")

    if entry.value is None:
        return _resolve_default(parameter, parameter.format_alias(alias))

    if not parameter.matches_pattern(entry.value):
        raise FormatMismatchError(
            parameter.format_alias(alias), entry.value, parameter.pattern or ""
        )
    if parameter.data_type is DataType.NUMBER and parameter.range is not None:
        if not parameter.in_range(entry.value):
            raise RangeMismatchError(
                parameter.format_alias(alias), entry.value, parameter.range
            )
    return parameter.convert(entry.value)


def bind(command: CommandSchema, argument_set: ArgumentSet) -> list[Any]:
    """
    Bind `argument_set` to `command`, producing one typed value per parameter.

    Args:
        command (CommandSchema): The command whose parameters are filled.
        argument_set (ArgumentSet): The parsed input line.

    Returns:
        list[Any]: Typed values ordered by parameter position.

    Raises:
        BindError: On the first parameter that cannot be bound.
    """
    command.seal()
    values = [
        bind_parameter(parameter, argument_set) for parameter in command.parameters
    ]

    known = {alias for parameter in command.parameters for alias in parameter.aliases}
    unused = [name for name in argument_set.index if name not in known]
    if unused:
        logger.debug(
            "[Command:%s] Ignoring unknown arguments: %s", command.name, ", ".join(unused)
        )
    return values
