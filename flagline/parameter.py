# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""parameter.py

Defines `Parameter`, the declaration of one positional slot of a command, and
`NumericRange`, the optional bounds placed on number parameters.

A Parameter describes:
- `position`: its index in the bound argument vector.
- `aliases`: the names it may be supplied under, each tagged as a flag (`-v`) or a
  variable (`--verbose`).
- `data_type`: what the raw text is converted to.
- `range` / `pattern`: optional constraints checked before conversion.
- `default`: raw text used when no alias is supplied.

Parameters are usually declared with compact specs:

    Parameter.from_spec("--name")              # text variable
    Parameter.from_spec("--count=number,1")    # number variable, default "1"
    Parameter.from_spec("-v")                  # boolean flag, default "false"
"""
from __future__ import annotations

import math
import re
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from flagline.exceptions import (
    ConversionError,
    InvalidParameterError,
    InvalidRangeError,
    SchemaSealedError,
)
from flagline.parser.parser_types import ArgumentKind, DataType, is_name_character
from flagline.parser.utils import coerce_number, coerce_value

_NUMBER = r"([+-]?(?:\d+\.?\d*|\.\d+))"
_RANGE = re.compile(rf"^\s*([(\[])\s*{_NUMBER}\s*,\s*{_NUMBER}\s*([)\]])\s*$")


class NumericRange(BaseModel):
    """
    Bounds for a number parameter, each side inclusive or exclusive.

    Written in interval notation: `[0, 10]` includes both ends, `(0, 10)` excludes
    both, `(0, 10]` excludes only the minimum.
    """

    minimum: float
    maximum: float
    min_inclusive: bool = True
    max_inclusive: bool = True

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_bounds(self) -> NumericRange:
        if not (math.isfinite(self.minimum) and math.isfinite(self.maximum)):
            raise InvalidRangeError(str(self), "the bounds must be finite")
        if self.minimum >= self.maximum:
            raise InvalidRangeError(
                str(self), "the minimum must be lower than the maximum"
            )
        return self

    @classmethod
    def parse(cls, text: str) -> NumericRange:
        """
        Parse interval notation such as `"(0, 10]"`.

        Raises:
            InvalidRangeError: If the text is malformed or the bounds are unusable.
        """
        match = _RANGE.match(text)
        if not match:
            raise InvalidRangeError(text, "expected a form like '[0, 10)'")
        opening, minimum, maximum, closing = match.groups()
        if float(minimum) >= float(maximum):
            raise InvalidRangeError(text, "the minimum must be lower than the maximum")
        return cls(
            minimum=float(minimum),
            maximum=float(maximum),
            min_inclusive=opening == "[",
            max_inclusive=closing == "]",
        )

    def contains(self, number: float) -> bool:
        """Return True if `number` lies within the bounds."""
        above = number >= self.minimum if self.min_inclusive else number > self.minimum
        below = number <= self.maximum if self.max_inclusive else number < self.maximum
        return above and below

    def __contains__(self, number: object) -> bool:
        return isinstance(number, (int, float)) and self.contains(number)

    def __str__(self) -> str:
        opening = "[" if self.min_inclusive else "("
        closing = "]" if self.max_inclusive else ")"
        return f"{opening}{self.minimum:g}, {self.maximum:g}{closing}"


def parse_alias(alias: str) -> tuple[str, ArgumentKind]:
    """
    Split a typed alias such as `--name` or `-n` into its name and kind.

    Raises:
        InvalidParameterError: If the alias has no prefix, no name, characters
            outside `[A-Za-z0-9._-]`, or is a flag longer than one character.
    """
    if alias.startswith("--"):
        name, kind = alias[2:], ArgumentKind.VARIABLE
    elif alias.startswith("-"):
        name, kind = alias[1:], ArgumentKind.FLAG
    else:
        raise InvalidParameterError(
            f"Alias '{alias}' must start with '-' (flag) or '--' (variable)."
        )
    check_alias_name(name, kind)
    return name, kind


def check_alias_name(name: str, kind: ArgumentKind) -> None:
    if not name:
        raise InvalidParameterError("Unnamed alias.")
    if not all(is_name_character(char) for char in name):
        raise InvalidParameterError(f"Alias '{name}' contains invalid characters.")
    if kind is ArgumentKind.FLAG and len(name) != 1:
        raise InvalidParameterError(f"Flag alias '{name}' must be a single character.")


def check_pattern(pattern: str | None) -> str | None:
    if pattern is not None:
        try:
            re.compile(pattern)
        except re.error as error:
            raise InvalidParameterError(
                f"Pattern '{pattern}' is not a valid regular expression: {error}"
            ) from error
    return pattern


def _coerce_kind(kind: Any) -> ArgumentKind:
    if isinstance(kind, ArgumentKind):
        return kind
    if kind in ("-", "flag"):
        return ArgumentKind.FLAG
    if kind in ("--", "variable"):
        return ArgumentKind.VARIABLE
    raise InvalidParameterError(f"'{kind}' is not an alias kind (flag or variable).")


class Parameter(BaseModel):
    """
    Declaration of one parameter of a command.

    Attributes:
        position (int): Index of this parameter in the bound argument vector.
        aliases (dict[str, ArgumentKind]): Names this parameter may be supplied
            under, in declaration order.
        data_type (DataType): Type the raw value is converted to.
        range (NumericRange | None): Bounds checked for number values.
        pattern (str | None): Regular expression a supplied value must match.
        default (str | None): Raw text used when no alias is supplied.
        description (str): Help text.
    """

    position: int = Field(default=0, ge=0)
    aliases: dict[str, ArgumentKind] = Field(default_factory=dict)
    data_type: DataType = DataType.TEXT
    range: NumericRange | None = None
    pattern: str | None = None
    default: str | None = None
    description: str = ""

    _sealed: bool = PrivateAttr(default=False)

    @field_validator("aliases", mode="before")
    @classmethod
    def parse_aliases(cls, aliases: Any) -> dict[str, ArgumentKind]:
        if isinstance(aliases, str):
            aliases = [aliases]
        if isinstance(aliases, (list, tuple)):
            parsed: dict[str, ArgumentKind] = {}
            for alias in aliases:
                name, kind = parse_alias(alias)
                if name in parsed:
                    raise InvalidParameterError(f"Alias '{alias}' is declared twice.")
                parsed[name] = kind
            return parsed
        if isinstance(aliases, dict):
            parsed = {}
            for name, kind in aliases.items():
                kind = _coerce_kind(kind)
                check_alias_name(name, kind)
                parsed[name] = kind
            return parsed
        raise InvalidParameterError("Aliases must be a list of '-f'/'--name' strings.")

    @field_validator("data_type", mode="before")
    @classmethod
    def parse_data_type(cls, data_type: Any) -> DataType:
        return DataType.from_name(data_type)

    @field_validator("range", mode="before")
    @classmethod
    def parse_range(cls, value: Any) -> Any:
        if isinstance(value, str):
            return NumericRange.parse(value) if value.strip() else None
        return value

    @field_validator("pattern")
    @classmethod
    def compile_pattern(cls, pattern: str | None) -> str | None:
        return check_pattern(pattern)

    @model_validator(mode="after")
    def check_consistency(self) -> Parameter:
        if not self.aliases:
            raise InvalidParameterError("A parameter needs at least one alias.")
        if self.range is not None and self.data_type is not DataType.NUMBER:
            raise InvalidRangeError(
                str(self.range), "ranges only apply to number parameters"
            )
        if self.default is not None:
            self.check_default(self.default)
        return self

    @classmethod
    def from_spec(cls, spec: str, position: int = 0) -> Parameter:
        """
        Build a Parameter from a compact spec.

        Forms:
        - `--name[=type[,default]]`: a variable, `text` unless a type is given.
        - `-f[,default]`: a boolean flag, default `"false"`.

        Raises:
            InvalidParameterError: If the spec is malformed.
            UnknownDataTypeError: If the type name is not recognized.
        """
        if spec.startswith("--"):
            alias, _, rest = spec.partition("=")
            data_type, _, default = rest.partition(",")
            return cls(
                position=position,
                aliases=[alias],
                data_type=data_type or DataType.TEXT,
                default=default if "," in rest else None,
            )
        if spec.startswith("-"):
            alias, separator, default = spec.partition(",")
            return cls(
                position=position,
                aliases=[alias],
                data_type=DataType.BOOLEAN,
                default=default if separator else "false",
                pattern="^(true|false)$",
            )
        raise InvalidParameterError(
            f"Parameter spec '{spec}' must start with '-' (flag) or '--' (variable)."
        )

    @property
    def names(self) -> list[str]:
        """Alias names in declaration order."""
        return list(self.aliases)

    @property
    def primary_alias(self) -> str:
        return next(iter(self.aliases))

    def kind_of(self, alias: str) -> ArgumentKind:
        return self.aliases[alias]

    def format_alias(self, alias: str) -> str:
        """Render an alias the way it is typed, e.g. `--name` or `-n`."""
        return self.aliases[alias].format(alias)

    def matches_pattern(self, value: str) -> bool:
        return self.pattern is None or re.search(self.pattern, value) is not None

    def in_range(self, value: str) -> bool:
        """
        Check a raw value against the declared range.

        Raises:
            ConversionError: If the value is not a number.
        """
        if self.range is None:
            return True
        return self.range.contains(coerce_number(value))

    def convert(self, value: str | None) -> Any:
        """Convert raw text to this parameter's data type."""
        return coerce_value(value, self.data_type)

    def check_default(self, default: str) -> None:
        """
        Ensure a default satisfies the pattern and converts to the data type.

        Raises:
            InvalidParameterError: If it does not.
        """
        if not self.matches_pattern(default):
            raise InvalidParameterError(
                f"Default '{default}' does not match the pattern '{self.pattern}'."
            )
        try:
            self.convert(default)
        except ConversionError as error:
            raise InvalidParameterError(
                f"Default '{default}' is not usable: {error}"
            ) from error

    def seal(self) -> None:
        self._sealed = True

    def _ensure_mutable(self) -> None:
        if self._sealed:
            raise SchemaSealedError(self.primary_alias)

    def set_default(self, default: str | None) -> None:
        """Set the raw default value after checking it."""
        self._ensure_mutable()
        if default is not None:
            self.check_default(default)
        self.default = default

    def set_data_type(self, data_type: DataType | str) -> None:
        """
        Change the data type. The current range and default must still apply.

        Raises:
            UnknownDataTypeError: If the name is not recognized.
        """
        self._ensure_mutable()
        data_type = DataType.from_name(data_type)
        if self.range is not None and data_type is not DataType.NUMBER:
            raise InvalidRangeError(
                str(self.range), "ranges only apply to number parameters"
            )
        previous, self.data_type = self.data_type, data_type
        if self.default is not None:
            try:
                self.check_default(self.default)
            except InvalidParameterError:
                self.data_type = previous
                raise

    def set_range(self, value: NumericRange | str | None) -> None:
        """
        Set the numeric range, given as a NumericRange or interval notation.

        Raises:
            InvalidRangeError: If the parameter is not a number or the range is invalid.
        """
        self._ensure_mutable()
        if isinstance(value, str):
            value = NumericRange.parse(value)
        if value is not None and self.data_type is not DataType.NUMBER:
            raise InvalidRangeError(
                str(value), "cannot set a range for a non-number parameter"
            )
        self.range = value

    def set_pattern(self, pattern: str | None) -> None:
        """Set the pattern supplied values must match."""
        self._ensure_mutable()
        self.pattern = check_pattern(pattern)

    def add_alias(self, name: str, kind: ArgumentKind | str) -> None:
        """Add an alias name of the given kind."""
        self._ensure_mutable()
        kind = _coerce_kind(kind)
        check_alias_name(name, kind)
        if name in self.aliases:
            raise InvalidParameterError(f"Alias '{name}' is already declared.")
        self.aliases[name] = kind

    def to_definition(self) -> dict[str, Any]:
        """
        Export this parameter as a plain dict.

        The result is accepted back by `Parameter.model_validate` and by the
        config loader.
        """
        return {
            "position": self.position,
            "aliases": [self.format_alias(alias) for alias in self.aliases],
            "data_type": self.data_type.value,
            "range": str(self.range) if self.range else None,
            "pattern": self.pattern,
            "default": self.default,
            "description": self.description,
        }

    def __str__(self) -> str:
        aliases = ", ".join(self.format_alias(alias) for alias in self.aliases)
        return (
            f"Parameter(position={self.position}, aliases=[{aliases}], "
            f"data_type={self.data_type.value})"
        )
