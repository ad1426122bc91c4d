# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for Flagline binding.

Every raw value reaching a command is text. This module converts it to the
parameter's declared `DataType` through a single table, `CONVERTERS`, keyed by the
enum.

Functions:
- coerce_boolean: "true" → True, anything else → False.
- coerce_text: identity.
- coerce_number: decimal parse into `int` or `float`.
- coerce_structured: JSON array or object into `list` / `dict`.
- coerce_absent: always None.
- coerce_value: dispatch through `CONVERTERS`.
"""
import json
import math
import re
from typing import Any, Callable

from flagline.exceptions import ConversionError
from flagline.parser.parser_types import DataType

_INTEGER = re.compile(r"[+-]?\d+")


def coerce_boolean(value: str) -> bool:
    """Return True only for the exact text "true"."""
    return value == "true"


def coerce_text(value: str) -> str:
    return value


def coerce_number(value: str) -> int | float:
    """
    Parse decimal text into a number.

    Integer literals become `int`, everything else `float`.

    Raises:
        ConversionError: If the text is not a number or is NaN.
    """
    text = value.strip()
    try:
        if _INTEGER.fullmatch(text):
            return int(text)
        number = float(text)
    except ValueError:
        raise ConversionError(value, DataType.NUMBER) from None
    if math.isnan(number):
        raise ConversionError(value, DataType.NUMBER, "NaN is not a number.")
    return number


def coerce_structured(value: str) -> list | dict:
    """
    Parse a JSON array or object.

    Raises:
        ConversionError: If the text is not valid JSON or is a JSON scalar.
    """
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as error:
        raise ConversionError(value, DataType.STRUCTURED, f"{error.msg}.") from error
    except (ValueError, RecursionError) as error:
        raise ConversionError(
            value, DataType.STRUCTURED, "Value is too large or too deeply nested."
        ) from error
    if not isinstance(parsed, (list, dict)):
        raise ConversionError(
            value, DataType.STRUCTURED, "Expected a JSON array or object."
        )
    return parsed


def coerce_absent(_: str | None) -> None:
    return None


CONVERTERS: dict[DataType, Callable[[str], Any]] = {
    DataType.BOOLEAN: coerce_boolean,
    DataType.TEXT: coerce_text,
    DataType.NUMBER: coerce_number,
    DataType.STRUCTURED: coerce_structured,
    DataType.ABSENT: coerce_absent,
}


def coerce_value(value: str | None, data_type: DataType) -> Any:
    """
    Convert raw text to `data_type`.

    Args:
        value (str | None): Raw text. None is only valid for `DataType.ABSENT`.
        data_type (DataType): The target type.

    Returns:
        Any: The converted value.

    Raises:
        ConversionError: If the text cannot be converted.
    """
    if data_type is DataType.ABSENT:
        return None
    if value is None:
        raise ConversionError(value, data_type, "No value to convert.")
    return CONVERTERS[data_type](value)
