"""Lexer turning transformation program text into tokens."""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from .types import TransformSyntaxError


class TokenType(Enum):
    """Enumeration of token types."""
    POINTER = "pointer"
    STRING = "string"
    VARIABLE = "variable"
    SYSTEM_VARIABLE = "system variable"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    COPY = "<-"
    MOVE = "<<"
    ARRAY_MAP = "<@"
    OBJECT_MAP = "<%"
    PLUS = "+"
    MINUS = "-"
    COLON = ":"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location."""
    type: TokenType
    value: Any
    position: int
    line: int = 1
    column: int = 1


SYSTEM_VARIABLES = frozenset("KVC")

# Order matters: multi-char operators first
_TOKEN_REGEX = re.compile(
    r"""
    (?P<WS>\s+)
  | (?P<COMMENT>\#[^\n]*)
  | (?P<COPY><-)
  | (?P<MOVE><<)
  | (?P<ARRAY_MAP><@)
  | (?P<OBJECT_MAP><%)
  | (?P<NUMBER>-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?)
  | (?P<PLUS>\+)
  | (?P<MINUS>-)
  | (?P<COLON>:)
  | (?P<LBRACE>\{)
  | (?P<RBRACE>\})
  | (?P<LBRACKET>\[)
  | (?P<RBRACKET>\])
  | (?P<WORD>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE,
)

_USER_VARIABLE = re.compile(r"[a-z][a-zA-Z]*")
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")

_KEYWORDS = {
    "true": (TokenType.TRUE, True),
    "false": (TokenType.FALSE, False),
    "null": (TokenType.NULL, None),
}

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "`": "`",
    "$": "$",
}

_QUOTES = {'"': TokenType.POINTER, "`": TokenType.STRING}


class Lexer:
    """
    Hand-written scanner for the transformation language.

    Quoted contexts (JSON pointers and backtick strings) are scanned by
    hand so that escapes and ``$variable`` interpolation can be decoded
    into a tuple of text and variable-token parts. Everything else is
    matched with a single verbose regular expression.
    """

    def __init__(self, text: str, logger: Optional[logging.Logger] = None):
        self.text = text
        self.pos = 0
        self.logger = logger or logging.getLogger(__name__)

    def tokenize(self) -> List[Token]:
        """
        Convert program text into a list of tokens ending with EOF.

        Returns:
            List of Token instances

        Raises:
            TransformSyntaxError: On unterminated quotes, bad escapes,
                malformed variables or unexpected characters
        """
        tokens: List[Token] = []
        length = len(self.text)
        while self.pos < length:
            char = self.text[self.pos]
            if char in _QUOTES:
                tokens.append(self._scan_quoted(char))
            elif char == "$":
                tokens.append(self._scan_variable())
            else:
                tokens.extend(self._scan_simple())
        tokens.append(self._make(TokenType.EOF, None, length))
        self.logger.debug(f"Tokenized program into {len(tokens)} tokens")
        return tokens

    def _scan_simple(self) -> List[Token]:
        match = _TOKEN_REGEX.match(self.text, self.pos)
        if not match:
            raise self._error(f"Unexpected character {self.text[self.pos]!r}", self.pos)
        kind = match.lastgroup
        text = match.group()
        start = self.pos
        self.pos = match.end()
        if kind in ("WS", "COMMENT"):
            return []
        if kind == "NUMBER":
            is_float = any(c in text for c in ".eE")
            return [self._make(TokenType.NUMBER, float(text) if is_float else int(text), start)]
        if kind == "WORD":
            if text not in _KEYWORDS:
                raise self._error(f"Unknown word {text!r}", start,
                                  expected="true, false or null")
            token_type, value = _KEYWORDS[text]
            return [self._make(token_type, value, start)]
        return [self._make(TokenType[kind], text, start)]

    def _scan_variable(self) -> Token:
        start = self.pos
        name = self._read_variable_name()
        if name in SYSTEM_VARIABLES:
            return self._make(TokenType.SYSTEM_VARIABLE, name, start)
        return self._make(TokenType.VARIABLE, name, start)

    def _read_variable_name(self) -> str:
        """Read ``$name`` at the current position and return the name."""
        start = self.pos
        self.pos += 1
        following = self.text[self.pos:self.pos + 1]
        if following in SYSTEM_VARIABLES:
            self.pos += 1
            return following
        match = _USER_VARIABLE.match(self.text, self.pos)
        if not match:
            raise self._error("Invalid variable", start,
                              expected="$K, $V, $C or $ followed by a lower-case name")
        self.pos = match.end()
        return match.group()

    def _scan_quoted(self, quote: str) -> Token:
        start = self.pos
        self.pos += 1
        parts: List[Any] = []
        buffer: List[str] = []
        length = len(self.text)
        while True:
            if self.pos >= length:
                kind = "JSON pointer" if quote == '"' else "string"
                raise self._error(f"Unterminated {kind}", start, expected=quote)
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                break
            if char == "\\":
                buffer.append(self._read_escape())
            elif char == "$":
                if buffer:
                    parts.append("".join(buffer))
                    buffer = []
                var_start = self.pos
                name = self._read_variable_name()
                var_type = (TokenType.SYSTEM_VARIABLE if name in SYSTEM_VARIABLES
                            else TokenType.VARIABLE)
                parts.append(self._make(var_type, name, var_start))
            else:
                buffer.append(char)
                self.pos += 1
        if buffer:
            parts.append("".join(buffer))
        return self._make(_QUOTES[quote], tuple(parts), start)

    def _read_escape(self) -> str:
        start = self.pos
        code = self.text[self.pos + 1:self.pos + 2]
        if code in _SIMPLE_ESCAPES:
            self.pos += 2
            return _SIMPLE_ESCAPES[code]
        if code == "u":
            return self._read_unicode_escape(start)
        raise self._error(f"Invalid escape sequence {self.text[start:start + 2]!r}", start)

    def _read_unicode_escape(self, start: int) -> str:
        """Decode ``\\uXXXX``, joining a UTF-16 surrogate pair into one character."""
        high = self._hex4_at(start)
        if high is None:
            raise self._error(f"Invalid escape sequence {self.text[start:start + 2]!r}", start)
        if 0xDC00 <= high <= 0xDFFF:
            raise self._error("Unpaired low surrogate in \\u escape", start)
        if not 0xD800 <= high <= 0xDBFF:
            self.pos = start + 6
            return chr(high)

        low = self._hex4_at(start + 6) if self.text[start + 6:start + 8] == "\\u" else None
        if low is None or not 0xDC00 <= low <= 0xDFFF:
            raise self._error("Unpaired high surrogate in \\u escape", start,
                              expected="a \\uDC00-\\uDFFF escape")
        self.pos = start + 12
        return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))

    def _hex4_at(self, position: int) -> Optional[int]:
        digits = self.text[position + 2:position + 6]
        if _HEX4.fullmatch(digits):
            return int(digits, 16)
        return None

    def location(self, position: int) -> Tuple[int, int]:
        """Translate an offset into a 1-based (line, column) pair."""
        line = self.text.count("\n", 0, position) + 1
        column = position - (self.text.rfind("\n", 0, position) + 1) + 1
        return line, column

    def _make(self, token_type: TokenType, value: Any, position: int) -> Token:
        line, column = self.location(position)
        return Token(token_type, value, position, line, column)

    def _error(self, message: str, position: int,
               expected: Optional[str] = None) -> TransformSyntaxError:
        line, column = self.location(position)
        return TransformSyntaxError(message, position, line, column, expected)


def tokenize(text: str, logger: Optional[logging.Logger] = None) -> List[Token]:
    """Tokenize program text."""
    return Lexer(text, logger).tokenize()
