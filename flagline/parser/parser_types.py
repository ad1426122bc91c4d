# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Enumerations and small value types shared by the scanner, the argument set builder
and the binder.

Contents:
- `TokenType` / `Token`: classified pieces of one input line, each with the index of
  its first character.
- `ScanState`: the scanner's states.
- `ArgumentKind`: whether an argument (or an alias) is a flag or a variable.
- `DataType`: the data types a parameter can declare, parsed from their names with
  `DataType.from_name()`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from flagline.exceptions import UnknownDataTypeError

NAME_CHARACTERS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_."
)
QUOTES = frozenset("'\"`")
ESCAPE = "\\"


def is_name_character(char: str) -> bool:
    """Return True if `char` may appear in a command, flag or variable name."""
    return char in NAME_CHARACTERS


class TokenType(Enum):
    """Kinds of token produced by the scanner."""

    COMMAND_NAME = "command_name"
    FLAG = "flag"
    VARIABLE_NAME = "variable_name"
    VARIABLE_VALUE = "variable_value"
    END_OF_INPUT = "end_of_input"


@dataclass(frozen=True)
class Token:
    """A classified piece of input text and the index it starts at."""

    type: TokenType
    text: str = ""
    position: int = 0


class ScanState(Enum):
    """States of the scanner's state machine."""

    READING_COMMAND = "reading_command"
    WHITESPACE = "whitespace"
    READING_FLAGS = "reading_flags"
    READING_VARIABLE_NAME = "reading_variable_name"
    READING_UNQUOTED_VALUE = "reading_unquoted_value"
    READING_QUOTED_VALUE = "reading_quoted_value"
    ESCAPED = "escaped"


class ArgumentKind(Enum):
    """Flag (`-f`, presence only) or variable (`--name[=value]`)."""

    FLAG = "flag"
    VARIABLE = "variable"

    @property
    def prefix(self) -> str:
        return "-" if self is ArgumentKind.FLAG else "--"

    def format(self, name: str) -> str:
        """Render `name` the way it is typed on the command line."""
        return f"{self.prefix}{name}"


class DataType(Enum):
    """Data types a parameter value is converted to."""

    BOOLEAN = "boolean"
    TEXT = "text"
    NUMBER = "number"
    STRUCTURED = "structured"
    ABSENT = "absent"

    @classmethod
    def from_name(cls, name: DataType | str) -> DataType:
        """
        Resolve a data type from its name.

        Besides the canonical names, a few common aliases ("string", "str",
        "object", "json", "none", ...) are accepted.

        Raises:
            UnknownDataTypeError: If the name is not recognized.
        """
        if isinstance(name, DataType):
            return name
        key = name.strip().lower()
        key = _DATA_TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownDataTypeError(name) from None


_DATA_TYPE_ALIASES = {
    "bool": "boolean",
    "string": "text",
    "str": "text",
    "float": "number",
    "int": "number",
    "object": "structured",
    "json": "structured",
    "undefined": "absent",
    "none": "absent",
}
