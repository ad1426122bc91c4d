# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements the lexical scanner that turns one line of input into classified tokens.

The scanner is a single left-to-right pass over the text with one character of
lookahead and no backtracking. It knows nothing about command schemas; it only
recognizes the shape of an invocation:

    greet --name="Ada Lovelace" -v

which scans to:

    COMMAND_NAME(greet) VARIABLE_NAME(name) VARIABLE_VALUE(Ada Lovelace) FLAG(v)
    END_OF_INPUT

Rules:
- The first whitespace-delimited run is the command name (`[A-Za-z0-9._-]`, not
  starting with `-`). Escaped characters are taken literally.
- `-abc` emits one FLAG token per character. `-f=value` adds a VARIABLE_VALUE token
  after the last flag; binding rejects it.
- `--name` emits VARIABLE_NAME; `--name=value` adds a VARIABLE_VALUE token.
- Values end at unescaped, unquoted whitespace. `'`, `"` and `` ` `` open a quoted
  span that only the same quote character closes; other quotes inside are literal.
- `\\x` emits `x` literally in command names and values.

Public Interface:
- `scan(text)`: Return the token list, always ending with END_OF_INPUT.
- `Scanner`: The state machine behind `scan`, reusable for many lines.
"""
from __future__ import annotations

from typing import Callable

from flagline.exceptions import (
    IncompleteValueError,
    MissingCommandError,
    MissingFlagError,
    MissingVariableError,
    UnexpectedTokenError,
)
from flagline.parser.parser_types import (
    ESCAPE,
    QUOTES,
    ScanState,
    Token,
    TokenType,
    is_name_character,
)


class Scanner:
    """
    State machine converting raw text into a list of `Token`.

    Each state has a handler receiving the current index and returning the index of
    the next character to read. Handlers only look one character ahead.
    """

    def __init__(self) -> None:
        self._handlers: dict[ScanState, Callable[[int], int]] = {
            ScanState.READING_COMMAND: self._read_command,
            ScanState.WHITESPACE: self._skip_whitespace,
            ScanState.READING_FLAGS: self._read_flags,
            ScanState.READING_VARIABLE_NAME: self._read_variable_name,
            ScanState.READING_UNQUOTED_VALUE: self._read_unquoted_value,
            ScanState.READING_QUOTED_VALUE: self._read_quoted_value,
            ScanState.ESCAPED: self._read_escaped,
        }
        self._reset("")

    def _reset(self, text: str) -> None:
        self.text: str = text
        self.state: ScanState = ScanState.READING_COMMAND
        self.tokens: list[Token] = []
        self._buffer: list[str] = []
        self._start: int = 0
        self._flag_count: int = 0
        self._return_state: ScanState = ScanState.READING_COMMAND
        self._escape_position: int = 0
        self._quote: str = ""
        self._quote_position: int = 0

    def scan(self, text: str) -> list[Token]:
        """
        Scan `text` into tokens.

        Args:
            text (str): One line of input.

        Returns:
            list[Token]: The tokens in source order, ending with END_OF_INPUT.

        Raises:
            MissingCommandError: If no command name is present.
            UnexpectedTokenError: If a character is not allowed where it appears.
            MissingFlagError: If a '-' is not followed by a flag character.
            MissingVariableError: If a '--' is not followed by a variable name.
            IncompleteValueError: If a quoted value is never closed.
        """
        self._reset(text)
        index = 0
        while index < len(text):
            index = self._handlers[self.state](index)
        self._finish()
        return self.tokens

    def _emit(self, token_type: TokenType, text: str, position: int) -> None:
        self.tokens.append(Token(token_type, text, position))

    def _flush(self, token_type: TokenType) -> None:
        self._emit(token_type, "".join(self._buffer), self._start)
        self._buffer.clear()

    def _escape(self, index: int) -> int:
        self._return_state = self.state
        self._escape_position = index
        self.state = ScanState.ESCAPED
        return index + 1

    def _read_command(self, index: int) -> int:
        char = self.text[index]
        if char.isspace():
            if self._buffer:
                self._flush(TokenType.COMMAND_NAME)
                self.state = ScanState.WHITESPACE
            return index + 1
        if not self._buffer:
            self._start = index
        if char == ESCAPE:
            return self._escape(index)
        if char == "-" and not self._buffer:
            raise MissingCommandError(index)
        if not is_name_character(char):
            raise UnexpectedTokenError(char, index)
        self._buffer.append(char)
        return index + 1

    def _skip_whitespace(self, index: int) -> int:
        char = self.text[index]
        if char.isspace():
            return index + 1
        if char != "-":
            raise UnexpectedTokenError(char, index)
        self._start = index
        if self._peek(index + 1) == "-":
            self.state = ScanState.READING_VARIABLE_NAME
            return index + 2
        self._flag_count = 0
        self.state = ScanState.READING_FLAGS
        return index + 1

    def _read_flags(self, index: int) -> int:
        char = self.text[index]
        if char.isspace():
            if not self._flag_count:
                raise MissingFlagError(self._start)
            self.state = ScanState.WHITESPACE
            return index + 1
        if char == "=" and self._flag_count:
            # -f=value, rejected when bound
            self._start = index + 1
            self.state = ScanState.READING_UNQUOTED_VALUE
            return index + 1
        if not is_name_character(char):
            raise UnexpectedTokenError(char, index)
        self._emit(TokenType.FLAG, char, index)
        self._flag_count += 1
        return index + 1

    def _read_variable_name(self, index: int) -> int:
        char = self.text[index]
        if char.isspace():
            if not self._buffer:
                raise MissingVariableError(self._start)
            self._flush(TokenType.VARIABLE_NAME)
            self.state = ScanState.WHITESPACE
            return index + 1
        if char == "=":
            if not self._buffer:
                raise UnexpectedTokenError(char, index)
            self._flush(TokenType.VARIABLE_NAME)
            self._start = index + 1
            self.state = ScanState.READING_UNQUOTED_VALUE
            return index + 1
        if not is_name_character(char):
            raise UnexpectedTokenError(char, index)
        self._buffer.append(char)
        return index + 1

    def _read_unquoted_value(self, index: int) -> int:
        char = self.text[index]
        if char.isspace():
            self._flush(TokenType.VARIABLE_VALUE)
            self.state = ScanState.WHITESPACE
        elif char == ESCAPE:
            return self._escape(index)
        elif char in QUOTES:
            self._quote = char
            self._quote_position = index
            self.state = ScanState.READING_QUOTED_VALUE
        else:
            self._buffer.append(char)
        return index + 1

    def _read_quoted_value(self, index: int) -> int:
        char = self.text[index]
        if char == ESCAPE:
            return self._escape(index)
        if char == self._quote:
            self._quote = ""
            self.state = ScanState.READING_UNQUOTED_VALUE
        else:
            # whitespace and other quote characters are literal here
            self._buffer.append(char)
        return index + 1

    def _read_escaped(self, index: int) -> int:
        self._buffer.append(self.text[index])
        self.state = self._return_state
        return index + 1

    def _peek(self, index: int) -> str:
        return self.text[index] if index < len(self.text) else ""

    def _finish(self) -> None:
        """Apply end-of-input rules for the state the scan stopped in."""
        end = len(self.text)
        if self.state is ScanState.ESCAPED:
            raise UnexpectedTokenError(ESCAPE, self._escape_position)
        if self.state is ScanState.READING_COMMAND:
            if not self._buffer:
                raise MissingCommandError(0)
            self._flush(TokenType.COMMAND_NAME)
        elif self.state is ScanState.READING_FLAGS:
            if not self._flag_count:
                raise MissingFlagError(self._start)
        elif self.state is ScanState.READING_VARIABLE_NAME:
            if not self._buffer:
                raise MissingVariableError(self._start)
            self._flush(TokenType.VARIABLE_NAME)
        elif self.state is ScanState.READING_UNQUOTED_VALUE:
            self._flush(TokenType.VARIABLE_VALUE)
        elif self.state is ScanState.READING_QUOTED_VALUE:
            raise IncompleteValueError(self._quote, self._quote_position)
        self._emit(TokenType.END_OF_INPUT, "", end)


def scan(text: str) -> list[Token]:
    """Scan one line of input into tokens. See `Scanner.scan`."""
    return Scanner().scan(text)
