"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    # Content (carry a payload in Token.value)
    KEYWORD = "Keyword"  # def, header, body
    IDENTIFIER = "Identifier"  # (alpha|_) (alnum|_|-)*
    STRING = "StringLiteral"  # "...", value is the string content
    NUMBER = "Number"  # digits with at most one '.', value is a float

    # Punctuation
    EQUALS = "Equals"  # =
    COMMA = "Comma"  # ,
    SEMICOLON = "Semicolon"  # ;
    LPAREN = "LParen"  # (
    RPAREN = "RParen"  # )
    LBRACE = "LBrace"  # {
    RBRACE = "RBrace"  # }

    # Comparison
    NOT = "Not"  # !
    EQUALS_TO = "EqualsTo"  # ==
    NOT_EQUALS_TO = "NotEqualsTo"  # !=
    LESS_THAN = "LessThan"  # <
    GREATER_THAN = "GreaterThan"  # >
    LESS_OR_EQUAL = "LessOrEqual"  # <=
    GREATER_OR_EQUAL = "GreaterOrEqual"  # >=

    EOF = "EndOfInput"

    # Unrecognised character, value is the character
    ILLEGAL = "Illegal"

    def __str__(self) -> str:
        return self.value


KEYWORDS = frozenset({"def", "header", "body"})

# Single-character punctuation
PUNCTUATION = {
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# Operator head -> (alone, followed by '=')
OPERATORS = {
    "=": (TokenType.EQUALS, TokenType.EQUALS_TO),
    "!": (TokenType.NOT, TokenType.NOT_EQUALS_TO),
    "<": (TokenType.LESS_THAN, TokenType.LESS_OR_EQUAL),
    ">": (TokenType.GREATER_THAN, TokenType.GREATER_OR_EQUAL),
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    ``value`` is the category payload (name, string content, parsed float or
    illegal character) and is ``None`` for punctuation and end of input.
    ``text`` is the source text that produced the token, except for string
    literals where it is the content between the quotes.
    """

    type: TokenType
    value: str | float | None
    text: str
    span: Span

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def column(self) -> int:
        return self.span.start.column

    def __str__(self) -> str:
        return f"[{self.type}] '{self.text}' at line {self.line}, column {self.column}"


# Letter numerals (Nl) and spacing vowel signs (Mc) count as letters;
# combining marks (Mn) may only continue an identifier
_LETTER_LIKE = frozenset({"Mc", "Nl"})
_MARKS = frozenset({"Mn", "Mc", "Nl"})

# str.isspace() also accepts the information separators, which are not
# Unicode White_Space
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def is_ident_start(ch: str) -> bool:
    """Return True if ch may begin an identifier or keyword."""
    if ch == "":
        return False
    return ch.isalpha() or ch == "_" or unicodedata.category(ch) in _LETTER_LIKE


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier (hyphens included)."""
    if ch == "":
        return False
    return ch.isalnum() or ch == "_" or ch == "-" or unicodedata.category(ch) in _MARKS


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch != "" and ch in "0123456789"


def is_space(ch: str) -> bool:
    """Return True if ch is Unicode White_Space."""
    return ch.isspace() and ch not in _NOT_WHITESPACE
