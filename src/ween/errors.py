"""Error and warning types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass

from ween.tokens import Span


def _snippet(kind: str, message: str, span: Span, source: str, filename: str) -> str:
    # Only \n ends a line, matching the lexer's line counting
    lines = source.split("\n")
    line_idx = span.start.line - 1
    col = span.start.column

    # Build the source line (strip a trailing carriage return for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\r")
    else:
        source_line = ""

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(span.start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"{kind}: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{span.start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised by drivers that treat an illegal token as fatal.

    The lexer itself never raises; see ``ween.lexer.check_tokens``.
    """

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.wn") -> str:
        return _snippet("error", self.message, self.span, self.source, filename)


@dataclass(frozen=True, slots=True)
class LexWarning:
    """A recovered problem: the token stream is still well formed."""

    message: str
    span: Span

    def format(self, source: str, filename: str = "input.wn") -> str:
        return _snippet("warning", self.message, self.span, source, filename)
