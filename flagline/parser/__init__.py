"""
Flagline Command Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arguments import ArgumentEntry, ArgumentSet, build
from .parser_types import ArgumentKind, DataType, Token, TokenType
from .scanner import Scanner, scan

__all__ = [
    "ArgumentEntry",
    "ArgumentKind",
    "ArgumentSet",
    "DataType",
    "Scanner",
    "Token",
    "TokenType",
    "build",
    "scan",
]
