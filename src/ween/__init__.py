"""Ween markup language lexer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ween.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str) -> list[Token]:
    """Tokenize Ween source, returning every token up to and including EOF."""
    from ween.lexer import tokenize as _tokenize

    return _tokenize(source)
