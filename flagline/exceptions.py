# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Flagline.

Every error carries the structured data needed to explain it (offending character,
index, alias names, bounds) as attributes, and a stable `ErrorCode` on its class,
so hosts can react to a failure without matching on message text.

Exception Hierarchy:
- FlaglineError
    ├── ScanError
    │   ├── MissingCommandError
    │   ├── UnexpectedTokenError
    │   ├── MissingFlagError
    │   ├── MissingVariableError
    │   └── IncompleteValueError
    ├── BuildError
    │   └── DuplicateParameterError
    ├── BindError
    │   ├── AmbiguousArgumentError
    │   ├── TypeMismatchError
    │   ├── FormatMismatchError
    │   ├── RangeMismatchError
    │   ├── MissingDefaultError
    │   └── ConversionError
    ├── UnknownCommandError
    └── RegistrationError
        ├── DuplicateCommandNameError
        ├── UnknownDataTypeError
        ├── InvalidRangeError
        ├── InvalidParameterError
        ├── SchemaSealedError
        ├── InvalidCommandNameError
        ├── InvalidActionError
        └── ConfigError

Scan, build, bind and dispatch errors only abort the current evaluation. Registration
errors reject the registration and leave the registry unchanged.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from flagline.parameter import NumericRange
    from flagline.parser.parser_types import ArgumentKind, DataType


class ErrorCode(Enum):
    """Stable identifiers for every failure Flagline reports."""

    MISSING_COMMAND = "MissingCommand"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    MISSING_FLAG = "MissingFlag"
    MISSING_VARIABLE = "MissingVariable"
    INCOMPLETE_VALUE = "IncompleteValue"
    DUPLICATE_PARAMETER = "DuplicateParameter"
    AMBIGUOUS_ARGUMENT = "AmbiguousArgument"
    TYPE_MISMATCH = "TypeMismatch"
    FORMAT_MISMATCH = "FormatMismatch"
    RANGE_MISMATCH = "RangeMismatch"
    MISSING_DEFAULT = "MissingDefault"
    CONVERSION_ERROR = "ConversionError"
    UNKNOWN_COMMAND = "UnknownCommand"
    DUPLICATE_COMMAND_NAME = "DuplicateCommandName"
    UNKNOWN_DATA_TYPE = "UnknownDataType"
    INVALID_RANGE = "InvalidRange"
    INVALID_PARAMETER = "InvalidParameter"
    SCHEMA_SEALED = "SchemaSealed"
    INVALID_COMMAND_NAME = "InvalidCommandName"
    INVALID_ACTION = "InvalidAction"
    CONFIG_ERROR = "ConfigError"


class FlaglineError(Exception):
    """Base exception for all Flagline errors."""

    code: ErrorCode
    title: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class ScanError(FlaglineError):
    """Raised by the scanner. `position` indexes into the scanned text."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class MissingCommandError(ScanError):
    """Input is empty or ends before a command name was formed."""

    code = ErrorCode.MISSING_COMMAND
    title = "missing command"

    def __init__(self, position: int = 0) -> None:
        super().__init__(f"No command name found before index {position}.", position)


class UnexpectedTokenError(ScanError):
    """A character that is not allowed where it was found."""

    code = ErrorCode.UNEXPECTED_TOKEN
    title = "unexpected token"

    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"Unexpected '{char}' at index {position}.", position)
        self.char = char


class MissingFlagError(ScanError):
    """A '-' that is not followed by any flag character."""

    code = ErrorCode.MISSING_FLAG
    title = "missing flag"

    def __init__(self, position: int) -> None:
        super().__init__(f"Expected a flag after '-' at index {position}.", position)


class MissingVariableError(ScanError):
    """A '--' that is not followed by a variable name."""

    code = ErrorCode.MISSING_VARIABLE
    title = "missing variable"

    def __init__(self, position: int) -> None:
        super().__init__(
            f"Expected a variable name after '--' at index {position}.", position
        )


class IncompleteValueError(ScanError):
    """A quoted value was opened and never closed. `position` is the opening quote."""

    code = ErrorCode.INCOMPLETE_VALUE
    title = "incomplete value"

    def __init__(self, quote: str, position: int) -> None:
        super().__init__(
            f"Input ended without closing the value opened with {quote} "
            f"at index {position}.",
            position,
        )
        self.quote = quote


class BuildError(FlaglineError):
    """Raised while assembling an ArgumentSet from tokens."""


class DuplicateParameterError(BuildError):
    """The same flag or variable name was supplied twice."""

    code = ErrorCode.DUPLICATE_PARAMETER
    title = "duplicate parameter"

    def __init__(self, name: str, position: int) -> None:
        super().__init__(
            f"'{name}' is given more than once (again at index {position})."
        )
        self.name = name
        self.position = position


class BindError(FlaglineError):
    """Raised while binding an ArgumentSet to a command's parameters."""


class AmbiguousArgumentError(BindError):
    """Two aliases of the same parameter were both supplied."""

    code = ErrorCode.AMBIGUOUS_ARGUMENT
    title = "ambiguous argument"

    def __init__(self, first_alias: str, second_alias: str) -> None:
        super().__init__(
            f"'{second_alias}' refers to the same parameter as '{first_alias}'."
        )
        self.first_alias = first_alias
        self.second_alias = second_alias


class TypeMismatchError(BindError):
    """An alias was supplied as a flag where a variable is declared, or vice versa."""

    code = ErrorCode.TYPE_MISMATCH
    title = "type mismatch"

    def __init__(self, alias: str, expected: ArgumentKind, actual: ArgumentKind) -> None:
        super().__init__(
            f"'{alias}' given as {actual.value} but expected {expected.value}."
        )
        self.alias = alias
        self.expected = expected
        self.actual = actual


class FormatMismatchError(BindError):
    """A value does not match the parameter's declared pattern."""

    code = ErrorCode.FORMAT_MISMATCH
    title = "format mismatch"

    def __init__(self, alias: str, value: str, pattern: str) -> None:
        super().__init__(f"'{value}' for '{alias}' does not match '{pattern}'.")
        self.alias = alias
        self.value = value
        self.pattern = pattern


class RangeMismatchError(BindError):
    """A numeric value falls outside the parameter's declared range."""

    code = ErrorCode.RANGE_MISMATCH
    title = "range mismatch"

    def __init__(self, alias: str, value: str, bounds: NumericRange) -> None:
        super().__init__(f"'{value}' for '{alias}' is outside {bounds}.")
        self.alias = alias
        self.value = value
        self.bounds = bounds


class MissingDefaultError(BindError):
    """A parameter got no value and declares no default."""

    code = ErrorCode.MISSING_DEFAULT
    title = "missing default"

    def __init__(self, alias: str) -> None:
        super().__init__(f"No value given for '{alias}' and no default is set.")
        self.alias = alias


class ConversionError(BindError):
    """Raw text cannot be converted to the declared data type."""

    code = ErrorCode.CONVERSION_ERROR
    title = "conversion error"

    def __init__(self, value: Any, data_type: DataType, reason: str = "") -> None:
        message = f"Cannot convert '{value}' to {data_type.value}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.value = value
        self.data_type = data_type


class UnknownCommandError(FlaglineError):
    """No command is registered under the parsed name."""

    code = ErrorCode.UNKNOWN_COMMAND
    title = "unknown command"

    def __init__(self, name: str) -> None:
        super().__init__(f"Command '{name}' not found.")
        self.name = name


class RegistrationError(FlaglineError):
    """Raised while defining commands or parameters."""


class DuplicateCommandNameError(RegistrationError):
    """A command with the same name is already registered."""

    code = ErrorCode.DUPLICATE_COMMAND_NAME
    title = "duplicate command"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Command '{name}' already exists. Use a different name or edit the "
            "existing command."
        )
        self.name = name


class UnknownDataTypeError(RegistrationError):
    """A parameter declares a data type Flagline does not know."""

    code = ErrorCode.UNKNOWN_DATA_TYPE
    title = "unknown data type"

    def __init__(self, data_type: str) -> None:
        super().__init__(f"'{data_type}' is not a valid data type.")
        self.data_type = data_type


class InvalidRangeError(RegistrationError):
    """A range declaration could not be parsed or is not usable."""

    code = ErrorCode.INVALID_RANGE
    title = "invalid range"

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Invalid range '{text}': {reason}")
        self.text = text
        self.reason = reason


class InvalidParameterError(RegistrationError):
    """A parameter declaration breaks the schema's rules."""

    code = ErrorCode.INVALID_PARAMETER
    title = "invalid parameter"


class SchemaSealedError(RegistrationError):
    """A command schema was modified after it had been used for binding."""

    code = ErrorCode.SCHEMA_SEALED
    title = "schema sealed"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Command '{name}' has already been evaluated and can no longer change."
        )
        self.name = name


class ConfigError(RegistrationError):
    """A configuration file refers to something that cannot be loaded."""

    code = ErrorCode.CONFIG_ERROR
    title = "config error"


class InvalidCommandNameError(RegistrationError):
    """A command name is empty or uses characters a command line cannot carry."""

    code = ErrorCode.INVALID_COMMAND_NAME
    title = "invalid command name"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"'{name}' is not a valid command name. Use [A-Za-z0-9._-] and do not "
            "start with '-'."
        )
        self.name = name


class InvalidActionError(RegistrationError):
    """A command has no callable action to execute."""

    code = ErrorCode.INVALID_ACTION
    title = "invalid action"
