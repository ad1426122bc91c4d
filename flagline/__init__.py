"""
Flagline Command Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import CommandSchema
from .parameter import NumericRange, Parameter
from .parser.parser_types import ArgumentKind, DataType
from .registry import CommandRegistry, evaluate


__all__ = [
    "ArgumentKind",
    "CommandRegistry",
    "CommandSchema",
    "DataType",
    "NumericRange",
    "Parameter",
    "evaluate",
]
