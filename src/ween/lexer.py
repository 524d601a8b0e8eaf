"""Ween lexer: converts source text into a flat token stream."""

from __future__ import annotations

from ween.errors import LexError, LexWarning
from ween.tokens import (
    KEYWORDS,
    OPERATORS,
    PUNCTUATION,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_ident_start,
    is_space,
)


class Lexer:
    """Pull tokens one at a time from Ween source text.

    The lexer never raises on malformed input. Unknown characters become
    ILLEGAL tokens, and unterminated comments and strings run to the end of
    the input; the latter are also recorded in ``warnings``.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._warnings: list[LexWarning] = []

    @property
    def warnings(self) -> list[LexWarning]:
        """Unterminated comments and strings seen so far."""
        return list(self._warnings)

    def at_end(self) -> bool:
        """Return True once every character of the source has been consumed."""
        return self._pos >= len(self._source)

    def next_token(self) -> Token:
        """Skip whitespace and comments, then consume and return one token.

        Once the input is exhausted every call returns an EOF token at the
        final position.
        """
        self._skip_insignificant()

        if self.at_end():
            pos = self._current_pos()
            return Token(TokenType.EOF, None, "", Span(pos, pos))

        ch = self._peek()

        if is_ident_start(ch):
            return self._lex_identifier()

        if is_digit(ch):
            return self._lex_number()

        if ch == '"':
            return self._lex_string()

        if ch in OPERATORS:
            return self._lex_operator()

        start = self._current_pos()
        self._advance()
        if ch in PUNCTUATION:
            return self._make(PUNCTUATION[ch], None, ch, start)
        return self._make(TokenType.ILLEGAL, ch, ch, start)

    def tokenize(self) -> list[Token]:
        """Tokenize the rest of the source and return the token list, EOF included."""
        tokens = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TokenType.EOF:
                return tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _make(self, tt: TokenType, value: str | float | None, text: str, start: Position) -> Token:
        return Token(tt, value, text, Span(start, self._current_pos()))

    def _warn(self, message: str, start: Position) -> None:
        self._warnings.append(LexWarning(message, Span(start, self._current_pos())))

    # ------------------------------------------------------------------
    # Whitespace and /* ... */ comments
    # ------------------------------------------------------------------

    def _skip_insignificant(self) -> None:
        while not self.at_end():
            ch = self._peek()
            if is_space(ch):
                self._advance()
            elif ch == "/" and self._peek(1) == "*":
                self._skip_comment()
            else:
                return

    def _skip_comment(self) -> None:
        start = self._current_pos()
        self._advance()  # /
        self._advance()  # *
        while not self.at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        self._warn("unterminated block comment", start)

    # ------------------------------------------------------------------
    # Multi-character tokens
    # ------------------------------------------------------------------

    def _lex_identifier(self) -> Token:
        start = self._current_pos()
        while not self.at_end() and is_ident_char(self._peek()):
            self._advance()
        text = self._source[start.offset : self._pos]
        tt = TokenType.KEYWORD if text in KEYWORDS else TokenType.IDENTIFIER
        return self._make(tt, text, text, start)

    def _lex_number(self) -> Token:
        start = self._current_pos()
        seen_dot = False
        while not self.at_end():
            ch = self._peek()
            if is_digit(ch):
                self._advance()
            elif ch == "." and not seen_dot:
                seen_dot = True
                self._advance()
            else:
                break
        text = self._source[start.offset : self._pos]
        try:
            value = float(text)
        except ValueError:
            value = 0.0
        return self._make(TokenType.NUMBER, value, text, start)

    def _lex_string(self) -> Token:
        """Scan a double-quoted string; no escapes, EOF closes an open string."""
        start = self._current_pos()
        self._advance()  # opening quote
        content_start = self._pos
        while not self.at_end() and self._peek() != '"':
            self._advance()
        content = self._source[content_start : self._pos]
        if self.at_end():
            self._warn("unterminated string literal", start)
        else:
            self._advance()  # closing quote
        return self._make(TokenType.STRING, content, content, start)

    def _lex_operator(self) -> Token:
        start = self._current_pos()
        ch = self._advance()
        alone, with_equals = OPERATORS[ch]
        if self._peek() == "=":
            self._advance()
            return self._make(with_equals, None, ch + "=", start)
        return self._make(alone, None, ch, start)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()


def check_tokens(tokens: list[Token], source: str) -> None:
    """Raise LexError for the first ILLEGAL token, if any."""
    for tok in tokens:
        if tok.type == TokenType.ILLEGAL:
            raise LexError(f"illegal character '{tok.text}'", tok.span, source)
