# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentSet`, the structured, order-preserving result of scanning one input
line, and `build()`, which folds a token stream into it.

An `ArgumentSet` holds:
- `command`: the command name (always the first token).
- `entries`: every flag and variable in the order they were typed.
- `index`: a read-only name → entry mapping derived from `entries`, used by the
  binder to resolve aliases without scanning the list.

Flags and variables share one namespace: supplying `-v` twice, `--name` twice, or a
flag `-n` together with a variable `--n` is a `DuplicateParameterError`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

from flagline.exceptions import (
    DuplicateParameterError,
    MissingCommandError,
    UnexpectedTokenError,
)
from flagline.parser.parser_types import ArgumentKind, Token, TokenType


@dataclass(frozen=True)
class ArgumentEntry:
    """
    A single flag or variable as supplied on the command line.

    Attributes:
        kind (ArgumentKind): Flag or variable.
        name (str | None): The flag character or variable name.
        value (str | None): Raw value text. None for a variable only when no `=`
            was supplied. None for a flag unless one was attached as `-f=value`,
            which binding rejects.
        position (int): Index of the entry's first character in the input.
    """

    kind: ArgumentKind
    name: str | None = None
    value: str | None = None
    position: int = 0

    @property
    def is_flag(self) -> bool:
        return self.kind is ArgumentKind.FLAG

    def __str__(self) -> str:
        text = self.kind.format(self.name or "")
        if self.value is not None:
            text = f"{text}={self.value}"
        return text


@dataclass(frozen=True)
class ArgumentSet:
    """Command name plus its arguments, in source order and addressable by name."""

    command: str
    entries: tuple[ArgumentEntry, ...] = ()
    index: Mapping[str, ArgumentEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_entries(cls, command: str, entries: Sequence[ArgumentEntry]) -> ArgumentSet:
        """Create an ArgumentSet, deriving the index from named entries."""
        index: dict[str, ArgumentEntry] = {}
        for entry in entries:
            if entry.name is None:
                continue
            if entry.name in index:
                raise DuplicateParameterError(entry.name, entry.position)
            index[entry.name] = entry
        return cls(command, tuple(entries), MappingProxyType(index))

    def __contains__(self, name: object) -> bool:
        return name in self.index

    def __iter__(self) -> Iterator[ArgumentEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, name: str) -> ArgumentEntry | None:
        """Return the entry supplied under `name`, if any."""
        return self.index.get(name)

    def has_flag(self, name: str) -> bool:
        entry = self.index.get(name)
        return entry is not None and entry.kind is ArgumentKind.FLAG

    def has_variable(self, name: str) -> bool:
        entry = self.index.get(name)
        return entry is not None and entry.kind is ArgumentKind.VARIABLE

    def __str__(self) -> str:
        return " ".join([self.command, *(str(entry) for entry in self.entries)])


def build(tokens: Sequence[Token]) -> ArgumentSet:
    """
    Fold a token stream into an `ArgumentSet`.

    Args:
        tokens (Sequence[Token]): Output of `scan()`. The first token must be the
            command name.

    Returns:
        ArgumentSet: The command with its entries in encounter order.

    Raises:
        MissingCommandError: If the stream has no leading command name.
        DuplicateParameterError: If a name is supplied twice.
        UnexpectedTokenError: If the stream is malformed (e.g. a value with no name).
    """
    if not tokens or tokens[0].type is not TokenType.COMMAND_NAME:
        raise MissingCommandError(tokens[0].position if tokens else 0)

    command = tokens[0].text
    entries: list[ArgumentEntry] = []

    i = 1
    while i < len(tokens):
        token = tokens[i]
        if token.type is TokenType.END_OF_INPUT:
            break
        if token.type in (TokenType.FLAG, TokenType.VARIABLE_NAME):
            kind = (
                ArgumentKind.FLAG
                if token.type is TokenType.FLAG
                else ArgumentKind.VARIABLE
            )
            value = None
            if i + 1 < len(tokens) and tokens[i + 1].type is TokenType.VARIABLE_VALUE:
                value = tokens[i + 1].text
                i += 1
            entries.append(ArgumentEntry(kind, token.text, value, token.position))
            i += 1
        else:
            raise UnexpectedTokenError(token.text[:1] or "=", token.position)

    return ArgumentSet.from_entries(command, entries)
